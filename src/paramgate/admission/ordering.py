"""Depth ordering of parameter names.

Nested and indexed properties can only be bound once their parent
container exists, so in ordered mode parameters are applied
shallow-first.  Depth is the number of path separators (``.``) and index
openers (``[``) anywhere in the name; ties break on plain string
comparison, which makes the order total and stable.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable

from paramgate.core.types import Parameter, ParameterCollection

_STRUCTURAL_CHARS = (".", "[")


def depth(name: str) -> int:
    """Count the structural characters in *name*.

    >>> depth("items[0].price")
    2
    """
    return sum(name.count(ch) for ch in _STRUCTURAL_CHARS)


def depth_key(name: str) -> tuple[int, str]:
    """Sort key: shallower names first, then lexical order."""
    return depth(name), name


class OrderingPolicy:
    """Chooses between arrival order and depth order.

    Parameters
    ----------
    ordered:
        When ``True``, collections produced by :meth:`collection` iterate
        in depth order.  Otherwise they keep insertion order.
    """

    def __init__(self, *, ordered: bool = False) -> None:
        self._ordered = ordered

    @property
    def ordered(self) -> bool:
        return self._ordered

    @property
    def sort_key(self) -> Callable[[str], tuple[int, str]] | None:
        """The key handed to :class:`ParameterCollection`, or ``None``."""
        return depth_key if self._ordered else None

    def collection(self, parameters: Iterable[Parameter]) -> ParameterCollection:
        """Collect *parameters* under this policy's order."""
        return ParameterCollection(parameters, sort_key=self.sort_key)
