# statusd

`statusd` is the status service of a chat system. When a client asks it for a
chat server, it does three things:

1. It reads how many users each configured chat server has from the Redis
   hash `logincount`. A server with no count there is treated as full.
2. It picks the server with the fewest users. On a tie, the server listed
   first wins.
3. It makes a fresh random token (a UUID4 string) and stores it in Redis
   under `utoken_<uid>`.

## Installation

```
pip install .
```

To also install what the tests need:

```
pip install .[test]
```

## Configuration

Settings come from an INI file. For example:

```ini
[StatusServer]
Host = 0.0.0.0
Port = 50052

[Redis]
Host = 127.0.0.1
Port = 6379
Passwd = password

[chatservers]
Name = chatserver1,chatserver2

[chatserver1]
Name = chatserver1
Host = 127.0.0.1
Port = 8090

[chatserver2]
Name = chatserver2
Host = 127.0.0.1
Port = 8091

[VarifyServer]
host = 127.0.0.1
Port = 50051
```

Rules for this file:

- Keys are case-sensitive.
- Values are read literally, with no interpolation.
- A duplicate section or key is an error. `Config.parse` and `Config.load`
  raise `ValueError` for it.
- A missing section or key reads as an empty string.
- `[chatservers] Name` lists section names, separated by commas. A listed
  section with no `Name` key is skipped.

## Running

```
statusd
statusd --config path/to/config.ini
```

Without `--config`, the server reads `config.ini` from the working directory.
It does four things:

- It opens up to five authenticated Redis connections. A connection that
  fails is left out of the pool.
- It listens on `Host:Port` from the `[StatusServer]` section.
- It serves until it gets SIGINT or SIGTERM.
- On any error it prints `Error: ...` to stderr and exits with status 1.

### RPC methods

Both methods are registered under the gRPC service `message.StatusService`.
Requests and replies are encoded by `statusd.rpc.encode` and
`statusd.rpc.decode`. These are JSON objects, not protobuf messages.

- `GetChatServer`
  - Request: `{"uid": ...}`
  - Reply: `{"error", "host", "port", "token"}`
- `Login`
  - Request: `{"uid": ..., "token": ...}`
  - Reply: `{"error", "uid", "token"}`
  - `StatusService.login` decides the result as follows:
    - `UID_INVALID` if a token is already stored for the uid.
    - Otherwise, `TOKEN_INVALID` if the given token is not empty.
    - Otherwise, `SUCCESS`, echoing the uid and token.

## Library use

```python
from statusd.config import Config
from statusd.redis_mgr import RedisManager
from statusd.status_service import StatusService

config = Config.load("config.ini")
redis = RedisManager.from_config(config, 5)
service = StatusService.from_config(config, redis)

server = service.least_loaded_server()      # ChatServer with con_count filled in
assignment = service.get_chat_server(1001)  # host, port, token, error
result = service.login(1001, "token")       # LoginResult
```

### Other modules

- `statusd.config`
  - `Config` and `Section` are read-only mappings. A missing name gives an
    empty section, or `""` for a key.
  - `default_config()` loads `./config.ini` once per process.
- `statusd.pool.ConnectionPool`
  - A blocking FIFO pool with `get`, `put`, the `connection()` context
    manager and `close`.
  - `get` on a closed pool raises `PoolClosedError`.
  - `put` on a closed pool drops the connection.
- `statusd.redis_mgr.RedisManager`
  - Commands: `get`, `set`, `auth`, `lpush`, `lpop`, `rpush`, `rpop`, `hset`,
    `hget`, `hdel`, `delete`, `exists` and `close`.
  - Failures are logged and never raised. Reading commands return `None` on
    failure; the others return `False`.
- `statusd.clients`
  - `VerifyGrpcClient.get_varify_code(email)` calls
    `/message.VarifyService/GetVarifyCode` over a pool of five channels. If
    the call fails it returns `{"error": RPC_FAILED}`.
  - `ChatGrpcClient` keeps one channel pool per configured chat server.
- `statusd.io_pool.IOServicePool`
  - Runs a fixed number of asyncio event loops, each on its own thread.
  - `next_loop()` hands them out round-robin.
  - `stop()` or leaving a `with` block stops them.
- `statusd.constants`
  - `ErrorCodes` lists the error codes that replies carry.
  - Also holds the Redis key prefixes.

## Limitations

- `ChatGrpcClient.notify_add_friend` contacts no chat server. It only
  returns `{"error": SUCCESS}`.
- The server does not expose the verification or chat clients, and it does
  not use `IOServicePool`. Only `GetChatServer` and `Login` are served.
- The package stores nothing beyond the Redis keys described above. It keeps
  no user accounts or passwords.