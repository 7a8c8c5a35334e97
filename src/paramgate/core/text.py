"""Small text helpers shared by the admission and binding layers."""
from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_space(text: object) -> str:
    """Collapse whitespace runs (including CR/LF) into single spaces.

    Applied to every caller-supplied string before it reaches a log
    record so that a parameter cannot forge additional log lines.
    """
    if text is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(text)).strip()


def comma_delimited_to_list(text: str | None) -> list[str]:
    """Split a comma-delimited string into stripped, unique, non-empty items.

    First-seen order is preserved.

    >>> comma_delimited_to_list(" a , b,,a ")
    ['a', 'b']
    """
    if not text:
        return []
    items = (item.strip() for item in text.split(","))
    return list(dict.fromkeys(item for item in items if item))
