"""Redis commands run over a pool of authenticated connections."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import redis

from statusd.config import Config
from statusd.pool import ConnectionPool, PoolClosedError

_log = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 5

_FAILED = object()


def connect_pool(
    host: str, port: int, password: str, size: int = DEFAULT_POOL_SIZE
) -> ConnectionPool[redis.Redis]:
    """Open up to ``size`` authenticated connections; failed ones are left out."""
    clients = []
    for _ in range(size):
        client = redis.Redis(
            host=host,
            port=port,
            password=password or None,
            decode_responses=True,
            single_connection_client=True,
        )
        try:
            client.ping()
        except redis.exceptions.AuthenticationError as exc:
            _log.warning("redis authentication failed: %s", exc)
            client.close()
            continue
        except redis.exceptions.RedisError as exc:
            _log.warning("redis connection to %s:%s failed: %s", host, port, exc)
            client.close()
            continue
        _log.info("redis authentication succeeded")
        clients.append(client)
    return ConnectionPool(clients)


class RedisManager:
    """Key, list and hash commands. Failures are logged and reported by the return value."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def from_config(cls, config: Config, size: int = DEFAULT_POOL_SIZE) -> RedisManager:
        section = config["Redis"]
        port = int(section["Port"] or 0)
        return cls(connect_pool(section["Host"], port, section["Passwd"], size))

    def _execute(self, command: str, call: Callable[[Any], Any]) -> Any:
        try:
            with self._pool.connection() as client:
                return call(client)
        except PoolClosedError:
            _log.warning("command [%s] skipped: pool is closed", command)
        except redis.exceptions.RedisError as exc:
            _log.warning("command [%s] failed: %s", command, exc)
        return _FAILED

    def _report(self, command: str, ok: bool) -> bool:
        if ok:
            _log.info("command [%s] succeeded", command)
        else:
            _log.warning("command [%s] failed", command)
        return ok

    def get(self, key: str) -> str | None:
        """The string at ``key``, or None if it is missing or not a string."""
        command = f"GET {key}"
        reply = self._execute(command, lambda c: c.get(key))
        if reply is _FAILED or reply is None:
            self._report(command, False)
            return None
        self._report(command, True)
        return reply

    def set(self, key: str, value: str) -> bool:
        command = f"SET {key} {value}"
        reply = self._execute(command, lambda c: c.set(key, value))
        return self._report(command, reply is True)

    def auth(self, password: str) -> bool:
        reply = self._execute("AUTH", lambda c: c.execute_command("AUTH", password))
        return self._report("AUTH", reply is not _FAILED)

    def _push(self, name: str, key: str, value: str) -> bool:
        command = f"{name} {key} {value}"
        method = name.lower()
        reply = self._execute(command, lambda c: getattr(c, method)(key, value))
        return self._report(command, isinstance(reply, int) and reply > 0)

    def _pop(self, name: str, key: str) -> str | None:
        command = f"{name} {key}"
        method = name.lower()
        reply = self._execute(command, lambda c: getattr(c, method)(key))
        if reply is _FAILED or reply is None:
            self._report(command, False)
            return None
        self._report(command, True)
        return reply

    def lpush(self, key: str, value: str) -> bool:
        return self._push("LPUSH", key, value)

    def lpop(self, key: str) -> str | None:
        return self._pop("LPOP", key)

    def rpush(self, key: str, value: str) -> bool:
        return self._push("RPUSH", key, value)

    def rpop(self, key: str) -> str | None:
        return self._pop("RPOP", key)

    def hset(self, key: str, field: str, value: str | bytes) -> bool:
        """Set a hash field; true whether the field was new or overwritten."""
        command = f"HSET {key} {field}"
        reply = self._execute(command, lambda c: c.hset(key, field, value))
        return self._report(command, isinstance(reply, int))

    def hget(self, key: str, field: str) -> str | None:
        command = f"HGET {key} {field}"
        reply = self._execute(command, lambda c: c.hget(key, field))
        if reply is _FAILED or reply is None:
            self._report(command, False)
            return None
        self._report(command, True)
        return reply

    def hdel(self, key: str, field: str) -> bool:
        """True only if a field was actually removed."""
        command = f"HDEL {key} {field}"
        reply = self._execute(command, lambda c: c.hdel(key, field))
        return self._report(command, isinstance(reply, int) and reply > 0)

    def delete(self, key: str) -> bool:
        """True if the command ran, whether or not the key existed."""
        command = f"DEL {key}"
        reply = self._execute(command, lambda c: c.delete(key))
        return self._report(command, isinstance(reply, int))

    def exists(self, key: str) -> bool:
        command = f"EXISTS {key}"
        reply = self._execute(command, lambda c: c.exists(key))
        return self._report(command, isinstance(reply, int) and reply != 0)

    def close(self) -> None:
        self._pool.close()