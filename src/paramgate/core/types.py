"""Parameter gate shared domain types.

Key design decisions:
* ``Parameter`` keeps the caller's raw payload untouched.  Admission
  inspects the derived string scalars; the binding target receives the
  raw payload.
* ``ParameterCollection`` is an immutable ``Mapping`` built fresh for
  every request.  Duplicate names keep the last value written.
* Admission decisions are plain data (``AdmissionResult``), never
  exceptions.
* Enums use *string* values so they serialise cleanly to JSON.
"""
from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Parameter
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Parameter:
    """A single submitted (name, value) pair.

    Attributes
    ----------
    name:
        The parameter name as submitted.
    raw:
        The opaque submitted payload: ``None``, a scalar, or a
        list/tuple of scalars.
    """

    name: str
    raw: Any = None

    @property
    def values(self) -> tuple[str, ...]:
        """All scalar values rendered as strings (``None`` entries dropped)."""
        if self.raw is None:
            return ()
        if isinstance(self.raw, (list, tuple)):
            return tuple(str(v) for v in self.raw if v is not None)
        return (str(self.raw),)

    @property
    def value(self) -> str | None:
        """The primary scalar value, or ``None`` when there is none."""
        values = self.values
        return values[0] if values else None

    @property
    def is_multiple(self) -> bool:
        """``True`` when the payload carries more than one scalar."""
        return len(self.values) > 1


# ---------------------------------------------------------------------------
# ParameterCollection
# ---------------------------------------------------------------------------

class ParameterCollection(Mapping[str, Parameter]):
    """An immutable, ordered mapping of parameter name to :class:`Parameter`.

    Two variants exist: *insertion-ordered* (the default, ``sort_key`` is
    ``None``) and *key-ordered*, where names iterate sorted by
    ``sort_key``.  The depth-ordered variant used by the admission
    pipeline passes :func:`paramgate.admission.ordering.depth_key`.
    """

    __slots__ = ("_items", "_sort_key")

    def __init__(
        self,
        parameters: Iterable[Parameter] = (),
        *,
        sort_key: Callable[[str], Any] | None = None,
    ) -> None:
        items: dict[str, Parameter] = {}
        for param in parameters:
            items[param.name] = param
        if sort_key is not None:
            items = {name: items[name] for name in sorted(items, key=sort_key)}
        self._items = items
        self._sort_key = sort_key

    # -- constructors ---------------------------------------------------

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, Any]],
        *,
        sort_key: Callable[[str], Any] | None = None,
    ) -> ParameterCollection:
        """Build a collection from ``(name, raw)`` pairs."""
        return cls((Parameter(name, raw) for name, raw in pairs), sort_key=sort_key)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        sort_key: Callable[[str], Any] | None = None,
    ) -> ParameterCollection:
        """Build a collection from a ``name -> raw`` mapping."""
        return cls.from_pairs(mapping.items(), sort_key=sort_key)

    # -- Mapping protocol -----------------------------------------------

    def __getitem__(self, name: str) -> Parameter:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ParameterCollection({list(self._items)!r})"

    # -- helpers --------------------------------------------------------

    @property
    def sort_key(self) -> Callable[[str], Any] | None:
        """The ordering key, or ``None`` for insertion order."""
        return self._sort_key

    @property
    def is_ordered(self) -> bool:
        """``True`` for the key-ordered variant."""
        return self._sort_key is not None

    def names(self) -> list[str]:
        """Parameter names in iteration order."""
        return list(self._items)

    def as_pairs(self) -> tuple[tuple[str, Any], ...]:
        """``(name, raw)`` pairs in iteration order."""
        return tuple((name, p.raw) for name, p in self._items.items())


# ---------------------------------------------------------------------------
# Admission results
# ---------------------------------------------------------------------------

class RejectionReason(enum.StrEnum):
    """Why a parameter was not admitted."""

    DMI_RESERVED = "dmi_reserved"
    NAME_TOO_LONG = "name_too_long"
    NAME_EXCLUDED = "name_excluded"
    NAME_NOT_ACCEPTED = "name_not_accepted"
    NAME_VETOED = "name_vetoed"
    NAME_NOT_ANNOTATED = "name_not_annotated"
    VALUE_EXCLUDED = "value_excluded"
    VALUE_NOT_ACCEPTED = "value_not_accepted"
    VALUE_VETOED = "value_vetoed"


@dataclass(frozen=True, slots=True)
class AdmissionResult:
    """Outcome of a single name or value admission check.

    Truthiness follows :attr:`accepted`, so ``if result:`` reads naturally.
    """

    accepted: bool
    reason: RejectionReason | None = None
    offending_pattern: str | None = None

    @classmethod
    def accept(cls) -> AdmissionResult:
        return _ACCEPTED

    @classmethod
    def reject(
        cls,
        reason: RejectionReason,
        offending_pattern: str | None = None,
    ) -> AdmissionResult:
        return cls(False, reason, offending_pattern)

    def __bool__(self) -> bool:
        return self.accepted


_ACCEPTED = AdmissionResult(True)


@dataclass(frozen=True, slots=True)
class Rejection:
    """A parameter dropped by the admission pipeline."""

    name: str
    value: str | None
    reason: RejectionReason
    offending_pattern: str | None = None


@dataclass(frozen=True, slots=True)
class AdmissionOutcome:
    """Everything a single admission pass decided."""

    admitted: ParameterCollection
    rejections: tuple[Rejection, ...] = ()


# ---------------------------------------------------------------------------
# Binding results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BindingOutcome:
    """Result of applying one admitted parameter to the binding target.

    ``code`` is the ``PG-E3xx`` error code when the target raised a coded
    binding error, ``None`` otherwise.
    """

    name: str
    succeeded: bool
    error: str | None = None
    code: str | None = None


@dataclass(frozen=True, slots=True)
class BindingReport:
    """Batch report for one ``process`` / ``apply`` call.

    Attributes
    ----------
    outcomes:
        One entry per admitted parameter, in application order.
    rejections:
        Parameters dropped during admission (empty when the report comes
        straight from the applier).
    """

    outcomes: tuple[BindingOutcome, ...] = ()
    rejections: tuple[Rejection, ...] = ()

    @property
    def applied(self) -> int:
        """Number of parameters successfully set on the target."""
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> int:
        """Number of set-operations that failed."""
        return sum(1 for o in self.outcomes if not o.succeeded)

    @property
    def failures(self) -> list[BindingOutcome]:
        """The failed outcomes, in application order."""
        return [o for o in self.outcomes if not o.succeeded]


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

class DiagnosticKind(enum.StrEnum):
    """Kinds of event delivered to a diagnostics sink."""

    REJECTION = "rejection"
    BINDING_FAILURE = "binding_failure"


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """A structured admission or binding event."""

    kind: DiagnosticKind
    name: str
    reason: RejectionReason | None = None
    pattern: str | None = None
    message: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
