"""Parameter gate capability interfaces and in-memory implementations.

This module defines the *structural* interfaces (``typing.Protocol``) a
binding target or diagnostics sink may implement, plus lightweight
in-memory implementations suitable for testing and local development.

Capabilities are optional: the gate probes a target with ``isinstance``
against the ``@runtime_checkable`` protocols below and only calls the
methods the target actually provides.  A target with neither veto
capability is simply never asked.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from paramgate.core.errors import (
    BindingError,
    ConversionFailed,
    NestedPathUnsupported,
    PropertyNotFound,
)
from paramgate.core.types import DiagnosticEvent

# ===================================================================
# Protocol (interface) definitions
# ===================================================================

@runtime_checkable
class BindingTarget(Protocol):
    """The object graph parameters are written into."""

    def try_set(self, name: str, value: Any) -> None:
        """Set the property addressed by *name* to *value*.

        Raises :class:`~paramgate.core.errors.BindingError` (or any other
        exception) if the property cannot be set.
        """
        ...


@runtime_checkable
class NameAware(Protocol):
    """A target that can veto parameter names."""

    def acceptable_parameter_name(self, name: str) -> bool:
        """Return ``False`` to reject *name*."""
        ...


@runtime_checkable
class ValueAware(Protocol):
    """A target that can veto parameter values."""

    def acceptable_parameter_value(self, value: str | None) -> bool:
        """Return ``False`` to reject *value*."""
        ...


@runtime_checkable
class ActionMessageAware(Protocol):
    """A target that collects messages for the requester (developer mode)."""

    def add_action_message(self, message: str) -> None:
        """Append *message* to the target's action messages."""
        ...


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receives structured admission and binding events."""

    def record_rejection(self, event: DiagnosticEvent) -> None:
        """Record a parameter dropped during admission."""
        ...

    def record_binding_failure(self, event: DiagnosticEvent) -> None:
        """Record a failed set-operation (developer mode only)."""
        ...


class NoParameters:
    """Marker base class for targets that never receive parameters.

    The gate returns an empty report for such targets without evaluating
    a single parameter.
    """

    __slots__ = ()


# ===================================================================
# In-memory implementations
# ===================================================================

_STRUCTURAL_CHARS = frozenset(".[(")
_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0", ""})


class InMemoryBindingTarget:
    """Dict-backed binding target for testing and development.

    Every name is accepted as a flat key.  Names listed in *failing* raise
    :class:`BindingError` instead of being stored.
    """

    def __init__(self, failing: Iterable[str] = ()) -> None:
        self.values: dict[str, Any] = {}
        self._failing = frozenset(failing)

    def try_set(self, name: str, value: Any) -> None:
        """Store *value* under *name*, or fail for configured names."""
        if name in self._failing:
            raise BindingError(f"Cannot set '{name}'", details={"name": name})
        self.values[name] = value


class AttributeBindingTarget:
    """Binds parameters onto the plain attributes of a wrapped object.

    Only flat names are supported; the gate does not evaluate property
    path expressions.  Existing attributes only: unknown names fail with
    :class:`PropertyNotFound` so that a caller cannot create arbitrary
    attributes on the wrapped object.

    A string submitted for an attribute currently holding a ``bool``,
    ``int`` or ``float`` is converted to that type first; a value that
    does not convert fails with :class:`ConversionFailed`.
    """

    def __init__(self, obj: Any) -> None:
        self._obj = obj

    @property
    def target(self) -> Any:
        """The wrapped object."""
        return self._obj

    def try_set(self, name: str, value: Any) -> None:
        if any(ch in _STRUCTURAL_CHARS for ch in name):
            raise NestedPathUnsupported(
                f"Cannot address nested property '{name}'",
                details={"name": name},
            )
        if name.startswith("_") or not hasattr(self._obj, name):
            raise PropertyNotFound(
                f"No property '{name}' on {type(self._obj).__name__}",
                details={"name": name, "target": type(self._obj).__name__},
            )
        current = getattr(self._obj, name)
        if isinstance(value, str) and isinstance(current, (bool, int, float)):
            value = _convert(name, value, type(current))
        setattr(self._obj, name, value)


def _convert(name: str, text: str, kind: type) -> Any:
    if kind is bool:
        lowered = text.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    else:
        try:
            return kind(text)
        except ValueError:
            pass
    raise ConversionFailed(
        f"Cannot convert '{text}' to {kind.__name__} for '{name}'",
        details={"name": name, "type": kind.__name__},
    )


class InMemoryDiagnosticsSink:
    """Collects diagnostic events in memory.

    Not thread-safe; intended for tests and single-request inspection.
    """

    def __init__(self) -> None:
        self.rejections: list[DiagnosticEvent] = []
        self.binding_failures: list[DiagnosticEvent] = []

    def record_rejection(self, event: DiagnosticEvent) -> None:
        self.rejections.append(event)

    def record_binding_failure(self, event: DiagnosticEvent) -> None:
        self.binding_failures.append(event)

    def clear(self) -> None:
        """Drop all collected events."""
        self.rejections.clear()
        self.binding_failures.clear()
