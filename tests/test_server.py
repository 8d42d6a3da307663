import grpc
import pytest

from statusd.constants import ErrorCodes
from statusd.rpc import GET_CHAT_SERVER_PATH, LOGIN_PATH, decode, encode
from statusd.server import build_server, main
from statusd.status_service import ChatServer, StatusService


class FakeRedis:
    def __init__(self):
        self.strings = {}

    def hget(self, key, field):
        return None

    def get(self, key):
        return self.strings.get(key)

    def set(self, key, value):
        self.strings[key] = value
        return True


@pytest.fixture
def running():
    redis = FakeRedis()
    servers = {"chatserver1": ChatServer(host="127.0.0.1", port="8090", name="chatserver1")}
    server, port = build_server(StatusService(servers, redis), "127.0.0.1:0")
    channel = grpc.insecure_channel(f"127.0.0.1:{port}")
    yield channel, redis
    channel.close()
    server.stop(None)


def _call(channel, path, request):
    stub = channel.unary_unary(
        path, request_serializer=encode, response_deserializer=decode
    )
    return stub(request, timeout=10)


def test_get_chat_server_over_rpc(running):
    channel, redis = running
    reply = _call(channel, GET_CHAT_SERVER_PATH, {"uid": 9})
    assert reply["error"] == ErrorCodes.SUCCESS
    assert (reply["host"], reply["port"]) == ("127.0.0.1", "8090")
    assert redis.strings["utoken_9"] == reply["token"]


def test_login_over_rpc(running):
    channel, _ = running
    reply = _call(channel, LOGIN_PATH, {"uid": 9, "token": "token"})
    assert reply == {"error": ErrorCodes.TOKEN_INVALID, "uid": 0, "token": ""}


def test_main_reports_missing_config(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.ini")]) == 1
    assert "Error:" in capsys.readouterr().err