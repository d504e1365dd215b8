"""Percent-decoding of URL path segments."""

from __future__ import annotations

from urllib.parse import unquote_to_bytes

from nasbox.storage.errors import DecodeError


def decode_path(raw_segment: str | bytes) -> str:
    """Decode a percent-encoded UTF-8 segment into a logical path string.

    Accepts the segment as text or as the raw bytes of the request line.
    Invalid UTF-8 after decoding raises DecodeError instead of being
    replaced with U+FFFD.
    """
    try:
        return unquote_to_bytes(raw_segment).decode("utf-8")
    except UnicodeDecodeError as exc:
        if isinstance(raw_segment, bytes):
            raw_segment = raw_segment.decode("ascii", "backslashreplace")
        raise DecodeError(raw_segment) from exc


def strip_trailing_separator(segment: str) -> str:
    """Drop trailing '/' added by upstream path normalization."""
    return segment.rstrip("/")
