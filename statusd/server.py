"""The status RPC server and its command-line entry point."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from concurrent import futures
from pathlib import Path
from typing import Any

import grpc

from statusd.config import Config, default_config
from statusd.redis_mgr import RedisManager
from statusd.rpc import GET_CHAT_SERVER, LOGIN, STATUS_SERVICE, decode, encode
from statusd.status_service import StatusService

_log = logging.getLogger(__name__)

MAX_WORKERS = 8


def _handlers(service: StatusService) -> grpc.GenericRpcHandler:
    def get_chat_server(request: dict[str, Any], context: Any) -> dict[str, Any]:
        assignment = service.get_chat_server(int(request.get("uid", 0)))
        return {
            "error": int(assignment.error),
            "host": assignment.host,
            "port": assignment.port,
            "token": assignment.token,
        }

    def login(request: dict[str, Any], context: Any) -> dict[str, Any]:
        result = service.login(int(request.get("uid", 0)), str(request.get("token", "")))
        return {"error": int(result.error), "uid": result.uid, "token": result.token}

    methods = {
        name: grpc.unary_unary_rpc_method_handler(
            handler, request_deserializer=decode, response_serializer=encode
        )
        for name, handler in ((GET_CHAT_SERVER, get_chat_server), (LOGIN, login))
    }
    return grpc.method_handlers_generic_handler(STATUS_SERVICE, methods)


def build_server(service: StatusService, address: str) -> tuple[grpc.Server, int]:
    """Start serving ``service`` on ``address``; returns the server and its bound port."""
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=MAX_WORKERS))
    server.add_generic_rpc_handlers((_handlers(service),))
    port = server.add_insecure_port(address)
    if port == 0:
        raise OSError(f"cannot listen on {address}")
    server.start()
    return server, port


def run_server(config: Config | None = None) -> None:
    """Serve until SIGINT or SIGTERM."""
    config = config if config is not None else default_config()
    section = config["StatusServer"]
    address = f"{section['Host']}:{section['Port']}"
    redis_mgr = RedisManager.from_config(config)
    service = StatusService.from_config(config, redis_mgr)
    server, _ = build_server(service, address)
    _log.info("Server listening on %s", address)

    def shutdown(signum: int, frame: object) -> None:
        _log.info("Shutting down server...")
        server.stop(grace=None)

    previous = {}
    if threading.current_thread() is threading.main_thread():
        previous = {
            sig: signal.signal(sig, shutdown) for sig in (signal.SIGINT, signal.SIGTERM)
        }
    try:
        server.wait_for_termination()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        redis_mgr.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="statusd", description="Run the status server.")
    parser.add_argument(
        "--config", type=Path, default=None, help="INI file (default: ./config.ini)"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        config = Config.load(args.config) if args.config else default_config()
        run_server(config)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())