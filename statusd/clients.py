"""Pooled RPC clients for the chat and verification services."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import grpc

from statusd.config import Config
from statusd.constants import ErrorCodes
from statusd.pool import ConnectionPool
from statusd.rpc import GET_VARIFY_CODE_PATH, decode, encode
from statusd.status_service import parse_chat_servers

_log = logging.getLogger(__name__)

POOL_SIZE = 5


def _channel_pool(host: str, port: str) -> ConnectionPool:
    target = f"{host}:{port}"
    return ConnectionPool(grpc.insecure_channel(target) for _ in range(POOL_SIZE))


class ChatGrpcClient:
    """One channel pool per configured chat server, keyed by server name."""

    def __init__(self, pools: Mapping[str, ConnectionPool]) -> None:
        self._pools = dict(pools)

    @property
    def pools(self) -> Mapping[str, ConnectionPool]:
        return MappingProxyType(self._pools)

    @classmethod
    def from_config(cls, config: Config) -> ChatGrpcClient:
        servers = parse_chat_servers(config)
        return cls({name: _channel_pool(s.host, s.port) for name, s in servers.items()})

    def notify_add_friend(self, to_uid: int) -> dict[str, Any]:
        """Reply to a friend request notice; nothing is forwarded yet."""
        _log.debug("add friend notice for uid %s", to_uid)
        return {"error": int(ErrorCodes.SUCCESS)}

    def close(self) -> None:
        for pool in self._pools.values():
            pool.close()


class VerifyGrpcClient:
    """Requests verification codes from the verification service."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @property
    def pool(self) -> ConnectionPool:
        return self._pool

    @classmethod
    def from_config(cls, config: Config) -> VerifyGrpcClient:
        section = config["VarifyServer"]
        return cls(_channel_pool(section["host"], section["Port"]))

    def get_varify_code(self, email: str) -> dict[str, Any]:
        """The service's reply, or an RPC_FAILED error if the call fails."""
        with self._pool.connection() as channel:
            call = channel.unary_unary(
                GET_VARIFY_CODE_PATH,
                request_serializer=encode,
                response_deserializer=decode,
            )
            try:
                return call({"email": email})
            except grpc.RpcError as exc:
                _log.warning("GetVarifyCode failed: %s", exc)
                return {"error": int(ErrorCodes.RPC_FAILED)}

    def close(self) -> None:
        self._pool.close()