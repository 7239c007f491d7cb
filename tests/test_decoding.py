from __future__ import annotations

import json

import pytest

from livesmith.core.decoding import (
    TRUNCATION_MARKER,
    decode_tool_response,
    find_json_start,
    strip_preamble,
)
from livesmith.core.exceptions import JsonDecodeError, MalformedToolOutputError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('{"a": 1}', 0),
        ("[1, 2]", 0),
        ('loading...\n{"a": [1]}', 11),
        ("noise [1] then {}", 6),
        ("no json here", None),
        ("", None),
    ],
)
def test_find_json_start_returns_earliest_delimiter(raw: str, expected: int | None) -> None:
    assert find_json_start(raw) == expected


def test_decode_strips_preamble_before_object() -> None:
    payload = {"version": "0.5.0", "scripts": {"codeblock-to-json": "/x.js"}}
    body = json.dumps(payload)
    raw = "Loading required package: shinylive\n" + body

    assert decode_tool_response(raw, "r") == decode_tool_response(body, "r") == payload


def test_decode_handles_arrays_after_noise() -> None:
    assert decode_tool_response('warning: cache miss\n[{"name": "dep"}]', "python") == [
        {"name": "dep"}
    ]


def test_missing_delimiter_reports_truncated_output() -> None:
    raw = "x" * 250

    with pytest.raises(MalformedToolOutputError) as excinfo:
        strip_preamble(raw, "python")

    assert excinfo.value.excerpt == "x" * 100 + TRUNCATION_MARKER
    assert "python shinylive response" in str(excinfo.value)


def test_short_output_is_not_marked_truncated() -> None:
    with pytest.raises(MalformedToolOutputError) as excinfo:
        decode_tool_response("command not found", "r")

    assert excinfo.value.excerpt == "command not found"
    assert TRUNCATION_MARKER not in str(excinfo.value)


def test_invalid_json_includes_payload_and_decoder_message() -> None:
    with pytest.raises(JsonDecodeError) as excinfo:
        decode_tool_response("preamble {not json}", "python")

    error = excinfo.value
    assert error.payload == "{not json}"
    assert error.detail
    assert "{not json}" in str(error)
    assert "`shinylive` python package" in str(error)


def test_stray_brace_in_preamble_moves_the_start_point() -> None:
    # The scan does not understand the preamble, so a brace inside it wins.
    with pytest.raises(JsonDecodeError):
        decode_tool_response('using {cache}\n{"ok": true}', "r")
