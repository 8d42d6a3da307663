"""Chat server assignment and login token checks."""

from __future__ import annotations

import dataclasses
import logging
import threading
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from statusd.config import Config
from statusd.constants import LOGIN_COUNT, USER_TOKEN_PREFIX, ErrorCodes

_log = logging.getLogger(__name__)

MAX_CONNECTIONS = 2**31 - 1


@dataclass(frozen=True)
class ChatServer:
    host: str
    port: str
    name: str
    con_count: int = 0


@dataclass(frozen=True)
class ChatServerAssignment:
    host: str
    port: str
    token: str
    error: ErrorCodes = ErrorCodes.SUCCESS


@dataclass(frozen=True)
class LoginResult:
    error: ErrorCodes
    uid: int = 0
    token: str = ""


def parse_chat_servers(config: Config) -> dict[str, ChatServer]:
    """Chat servers listed under [chatservers] Name, keyed by name, in listed order."""
    servers: dict[str, ChatServer] = {}
    for word in config["chatservers"]["Name"].split(","):
        section = config[word]
        if not section["Name"]:
            continue
        server = ChatServer(host=section["Host"], port=section["Port"], name=section["Name"])
        servers[server.name] = server
    return servers


def generate_token() -> str:
    """A fresh random UUID in its canonical text form."""
    return str(uuid.uuid4())


class StatusService:
    """Hands out the least loaded chat server and checks login tokens."""

    def __init__(self, servers: Mapping[str, ChatServer], redis: Any) -> None:
        self._servers = dict(servers)
        self._redis = redis
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config, redis: Any) -> StatusService:
        return cls(parse_chat_servers(config), redis)

    def _load(self, server: ChatServer) -> ChatServer:
        count = self._redis.hget(LOGIN_COUNT, server.name)
        con_count = int(count) if count else MAX_CONNECTIONS
        return dataclasses.replace(server, con_count=con_count)

    def least_loaded_server(self) -> ChatServer:
        """The server with the fewest logins; unknown counts rank as maximal."""
        with self._lock:
            if not self._servers:
                raise LookupError("no chat servers configured")
            best: ChatServer | None = None
            for server in self._servers.values():
                loaded = self._load(server)
                if best is None or loaded.con_count < best.con_count:
                    best = loaded
            return best

    def get_chat_server(self, uid: int) -> ChatServerAssignment:
        """Pick a server for ``uid`` and store a new token for it."""
        server = self.least_loaded_server()
        token = generate_token()
        self._redis.set(f"{USER_TOKEN_PREFIX}{uid}", token)
        return ChatServerAssignment(host=server.host, port=server.port, token=token)

    def login(self, uid: int, token: str) -> LoginResult:
        stored = self._redis.get(f"{USER_TOKEN_PREFIX}{uid}")
        # A token already held in the store marks the uid as invalid here.
        if stored is not None:
            return LoginResult(ErrorCodes.UID_INVALID)
        if token != "":
            return LoginResult(ErrorCodes.TOKEN_INVALID)
        return LoginResult(ErrorCodes.SUCCESS, uid=uid, token=token)