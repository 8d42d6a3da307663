"""Wire format and method names of the RPC services."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any

STATUS_SERVICE = "message.StatusService"
VARIFY_SERVICE = "message.VarifyService"
CHAT_SERVICE = "message.ChatService"

GET_CHAT_SERVER = "GetChatServer"
LOGIN = "Login"
GET_VARIFY_CODE = "GetVarifyCode"

GET_VARIFY_CODE_PATH = f"/{VARIFY_SERVICE}/{GET_VARIFY_CODE}"
GET_CHAT_SERVER_PATH = f"/{STATUS_SERVICE}/{GET_CHAT_SERVER}"
LOGIN_PATH = f"/{STATUS_SERVICE}/{LOGIN}"


def encode(message: Any) -> bytes:
    """Serialise a mapping or dataclass instance as compact UTF-8 JSON."""
    if dataclasses.is_dataclass(message) and not isinstance(message, type):
        message = dataclasses.asdict(message)
    if not isinstance(message, Mapping):
        raise TypeError(f"cannot encode {type(message).__name__} as a message")
    text = json.dumps(
        dict(message), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )
    return text.encode("utf-8")


def decode(data: bytes) -> dict[str, Any]:
    """Parse a message; raises ValueError unless it is a JSON object."""
    message = json.loads(data.decode("utf-8"))
    if not isinstance(message, dict):
        raise ValueError("message must be a JSON object")
    return message