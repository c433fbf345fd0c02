import json

import pytest

from patchbridge.core.exceptions import MalformedReplyError
from patchbridge.orchestration.messages import (
    QueryAction,
    decode_message,
    encode_message,
    encode_reply,
    parse_reply,
    split_tokens,
)


def test_encode_message_flattens_enums():
    frame = json.loads(encode_message("query", ["abc", QueryAction.OBJECT_ATTRIBUTES, "s1"]))
    assert frame == ["query", "abc", "get_object_attributes", "s1"]


def test_decode_message_splits_selector_and_arguments():
    assert decode_message(b'["console_msg", "hello", 3]') == ("console_msg", ["hello", 3])


@pytest.mark.parametrize("raw", [b"not json", b"[]", b'{"selector": "x"}', b"[1, 2]"])
def test_decode_message_rejects_bad_frames(raw):
    with pytest.raises(MalformedReplyError):
        decode_message(raw)


def test_parse_reply_accepts_null_results():
    reply = parse_reply([encode_reply("r-1", None)])
    assert reply.request_id == "r-1"
    assert reply.results is None


def test_parse_reply_requires_request_id():
    with pytest.raises(MalformedReplyError) as excinfo:
        parse_reply([json.dumps({"results": []})])
    assert excinfo.value.error_code == "MISSING_REQUEST_ID"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("hello 1 2", ["hello", "1", "2"]),
        (["a", 1], ["a", 1]),
        (42, [42]),
    ],
)
def test_split_tokens(value, expected):
    assert split_tokens(value) == expected
