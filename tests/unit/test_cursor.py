"""Unit tests for review feed cursors."""

import pytest

from steam_cache.domain.entities import (
    EndCursor,
    OffsetCursor,
    StartCursor,
    UpstreamCursor,
    decode_cursor,
    encode_cursor,
)
from steam_cache.domain.entities.cursor import upstream_token


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, StartCursor()),
        ("*", StartCursor()),
        ("", EndCursor()),
        ("local:3", OffsetCursor(page=3)),
        ("steam:AoJ4/abc+def=", UpstreamCursor(token="AoJ4/abc+def=")),
        ("steam:", EndCursor()),
        ("AoJwk8P0/4kCe5Tu0gQ=", UpstreamCursor(token="AoJwk8P0/4kCe5Tu0gQ=")),
    ],
)
def test_decode_cursor(raw, expected):
    assert decode_cursor(raw) == expected


@pytest.mark.parametrize("raw", ["local:", "local:abc", "local:0", "local:-2"])
def test_malformed_local_cursor_is_rejected(raw):
    with pytest.raises(ValueError):
        decode_cursor(raw)


def test_encoded_cursors_decode_to_the_same_mode():
    for cursor in (StartCursor(), OffsetCursor(page=7), UpstreamCursor(token="Ao+x"), EndCursor()):
        assert decode_cursor(encode_cursor(cursor)) == cursor


def test_upstream_token_for_start_is_star():
    assert upstream_token(StartCursor()) == "*"
    assert upstream_token(UpstreamCursor(token="Ao+x")) == "Ao+x"
