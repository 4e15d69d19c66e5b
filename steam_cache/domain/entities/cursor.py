"""Review feed cursors.

Callers see one opaque string, but two paging modes sit behind it: offset
pages served from the local store and tokens passed through from Steam.
The string is decoded once, at the pagination boundary, into one of the
tagged types below so the mode is never guessed from the token's shape.

Wire format:
    ``*``               start of the feed
    ``local:<page>``    1-based page of the locally stored feed
    ``steam:<token>``   Steam's own cursor, passed through untouched
    ``""``              end of the feed
Any other non-empty string is taken to be a bare Steam cursor.
"""

from dataclasses import dataclass

START_TOKEN = "*"
END_TOKEN = ""
LOCAL_PREFIX = "local:"
UPSTREAM_PREFIX = "steam:"


@dataclass(frozen=True)
class StartCursor:
    """First page of a new session."""


@dataclass(frozen=True)
class OffsetCursor:
    """A page of the locally served feed."""

    page: int

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")


@dataclass(frozen=True)
class UpstreamCursor:
    """Steam's native cursor for the next page of its feed."""

    token: str


@dataclass(frozen=True)
class EndCursor:
    """The feed is exhausted."""


Cursor = StartCursor | OffsetCursor | UpstreamCursor | EndCursor


def decode_cursor(raw: str | None) -> Cursor:
    """Parse a caller-supplied cursor string."""
    if raw is None:
        return StartCursor()
    value = raw.strip()
    if value == END_TOKEN:
        return EndCursor()
    if value == START_TOKEN:
        return StartCursor()
    if value.startswith(LOCAL_PREFIX):
        page_text = value[len(LOCAL_PREFIX):]
        try:
            return OffsetCursor(page=int(page_text))
        except ValueError:
            raise ValueError(f"Malformed local cursor: {raw!r}") from None
    if value.startswith(UPSTREAM_PREFIX):
        token = value[len(UPSTREAM_PREFIX):]
        return UpstreamCursor(token=token) if token else EndCursor()
    return UpstreamCursor(token=value)


def encode_cursor(cursor: Cursor) -> str:
    """Render a cursor for the caller."""
    match cursor:
        case StartCursor():
            return START_TOKEN
        case OffsetCursor(page=page):
            return f"{LOCAL_PREFIX}{page}"
        case UpstreamCursor(token=token):
            return f"{UPSTREAM_PREFIX}{token}"
        case EndCursor():
            return END_TOKEN
    raise TypeError(f"Unknown cursor type: {type(cursor).__name__}")


def upstream_token(cursor: StartCursor | UpstreamCursor) -> str:
    """Token to send to Steam for a remote page."""
    if isinstance(cursor, UpstreamCursor):
        return cursor.token
    return START_TOKEN
