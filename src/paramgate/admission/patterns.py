"""Compiled pattern sets for parameter names and values.

A :class:`PatternSet` is an immutable, compiled accept-list or deny-list
built from comma-delimited configuration text.  Matching is
case-insensitive and *anchored*: a rule matches only when it matches the
whole candidate string.

Compilation is cached at module level so repeated reloads of the same
configuration reuse compiled objects.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from functools import lru_cache
from typing import Any

from paramgate.core.errors import InvalidPattern
from paramgate.core.text import comma_delimited_to_list


@lru_cache(maxsize=512)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile and cache a case-insensitive regex.

    Raises
    ------
    re.error
        If the pattern is syntactically invalid.
    """
    return re.compile(pattern, re.IGNORECASE)


class PatternSet:
    """An immutable set of compiled, case-insensitive, anchored rules.

    Parameters
    ----------
    patterns:
        The textual rules, already split.  Duplicates are dropped while
        preserving first-seen order.

    Raises
    ------
    InvalidPattern
        If any rule is not a valid regular expression.
    """

    __slots__ = ("_patterns", "_compiled")

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        texts = tuple(dict.fromkeys(patterns))
        compiled: list[re.Pattern[str]] = []
        for text in texts:
            try:
                compiled.append(_compile_pattern(text))
            except re.error as exc:
                raise InvalidPattern(
                    f"Invalid pattern {text!r}: {exc}",
                    details={"pattern": text, "error": str(exc)},
                ) from exc
        self._patterns = texts
        self._compiled = tuple(compiled)

    # -- constructors ---------------------------------------------------

    @classmethod
    def compile(cls, comma_delimited_patterns: str | None) -> PatternSet:
        """Build a set from comma-delimited configuration text.

        ``None`` and blank text yield an empty set.
        """
        return cls(comma_delimited_to_list(comma_delimited_patterns))

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> PatternSet:
        """Build a set from already-split rules (rules may contain commas)."""
        return cls(patterns)

    # -- matching -------------------------------------------------------

    def first_match(self, candidate: str) -> str | None:
        """Return the text of the first rule matching *candidate*, or ``None``."""
        for text, compiled in zip(self._patterns, self._compiled):
            if compiled.fullmatch(candidate) is not None:
                return text
        return None

    def matches(self, candidate: str) -> bool:
        """Return ``True`` if any rule matches the whole of *candidate*."""
        return any(c.fullmatch(candidate) is not None for c in self._compiled)

    # -- introspection --------------------------------------------------

    @property
    def patterns(self) -> tuple[str, ...]:
        """The textual rules, in evaluation order."""
        return self._patterns

    def describe(self) -> str:
        """Comma-joined rule text for log messages."""
        return ", ".join(self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PatternSet):
            return self._patterns == other._patterns
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"PatternSet({list(self._patterns)!r})"

    # -- cache management -----------------------------------------------

    @staticmethod
    def clear_cache() -> None:
        """Clear the compiled pattern cache."""
        _compile_pattern.cache_clear()

    @staticmethod
    def cache_info() -> Any:
        """Return cache statistics."""
        return _compile_pattern.cache_info()


def is_configured(pattern_set: PatternSet | None) -> bool:
    """``True`` when *pattern_set* exists and holds at least one rule.

    An absent set and an empty set are treated alike: a deny-list with no
    rules denies nothing and an accept-list with no rules accepts
    everything.
    """
    return pattern_set is not None and bool(pattern_set)
