from dataclasses import dataclass

import pytest

from statusd.rpc import decode, encode


@dataclass
class _Request:
    uid: int
    token: str


def test_encode_is_compact_and_sorted():
    assert encode({"uid": 7, "token": "token"}) == b'{"token":"token","uid":7}'


def test_round_trip_mapping():
    message = {"error": 0, "host": "127.0.0.1", "port": "8090", "token": "token"}
    assert decode(encode(message)) == message


def test_dataclass_is_encoded_as_its_fields():
    assert decode(encode(_Request(uid=3, token="token"))) == {"uid": 3, "token": "token"}


def test_non_ascii_round_trip():
    message = {"name": "名字"}
    assert decode(encode(message)) == message


def test_encode_rejects_non_mapping():
    with pytest.raises(TypeError):
        encode([1, 2])


@pytest.mark.parametrize("data", [b"[1]", b"not json", b"\xff"])
def test_decode_rejects_non_objects(data):
    with pytest.raises(ValueError):
        decode(data)