from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space without stripping."""
    return _WHITESPACE_RE.sub(" ", text or "")


def strip_comment(line: str, marker: str = "#") -> str:
    """Drop a trailing comment and surrounding whitespace from a line."""
    return line.split(marker, 1)[0].strip()
