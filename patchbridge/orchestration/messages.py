"""Typed selectors and codecs for messages exchanged with the host."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Sequence, Tuple

from patchbridge.core.exceptions import MalformedReplyError


class Selector(str, Enum):
    """First token of every message on the host channel."""

    QUERY = "query"
    SCRIPT = "script"
    RESPONSE = "response"
    CONSOLE = "console_msg"


class QueryAction(str, Enum):
    OBJECTS_IN_PATCH = "get_objects_in_patch"
    OBJECTS_IN_SELECTED = "get_objects_in_selected"
    OBJECT_ATTRIBUTES = "get_object_attributes"
    AVOID_RECT_POSITION = "get_avoid_rect_position"


class ScriptCommand(str, Enum):
    NEW = "new"
    DELETE = "delete"
    CONNECT = "connect"
    DISCONNECT = "disconnect"
    SENDBOX = "sendbox"
    SEND = "send"


@dataclass(frozen=True)
class HostReply:
    request_id: str
    results: Any


def encode_message(selector: str, args: Sequence[Any]) -> bytes:
    """Serialize a selector plus positional arguments for a byte transport."""

    return json.dumps([_plain(selector), *[_plain(arg) for arg in args]]).encode("utf-8")


def decode_message(raw: bytes | str) -> Tuple[str, List[Any]]:
    """Inverse of `encode_message`; raises `MalformedReplyError` on bad frames."""

    try:
        frame = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedReplyError("MALFORMED_FRAME", "host frame is not valid JSON", {"raw": _preview(raw)}) from exc
    if not isinstance(frame, list) or not frame or not isinstance(frame[0], str):
        raise MalformedReplyError("MALFORMED_FRAME", "host frame must be a non-empty list led by a selector")
    return frame[0], frame[1:]


def parse_reply(tokens: Sequence[Any]) -> HostReply:
    """Parse the arguments of a `response` message into a `HostReply`."""

    text = "".join(str(token) for token in tokens)
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise MalformedReplyError("INVALID_JSON", "reply payload is not valid JSON", {"raw": _preview(text)}) from exc
    if not isinstance(data, dict) or not data.get("request_id"):
        raise MalformedReplyError("MISSING_REQUEST_ID", "reply payload carries no request_id", {"raw": _preview(text)})
    return HostReply(request_id=str(data["request_id"]), results=data.get("results"))


def encode_reply(request_id: str, results: Any) -> str:
    return json.dumps({"request_id": request_id, "results": results})


def split_tokens(value: Any) -> List[Any]:
    """Break a client supplied value into positional message arguments."""

    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _preview(raw: Any, limit: int = 200) -> str:
    text = raw.decode("utf-8", "replace") if isinstance(raw, bytes) else str(raw)
    return text if len(text) <= limit else text[:limit] + "..."
