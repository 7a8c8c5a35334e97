"""Parameter gate error-code hierarchy.

Hierarchy
---------
::

    ParamGateError
    +-- ConfigurationError   (PG-E1xx)
    +-- BindingError         (PG-E3xx)

Admission rejections are *not* errors.  They are returned as
:class:`~paramgate.core.types.AdmissionResult` data and never cross the
admission boundary as exceptions.

Usage
-----
Raise concrete subclasses directly::

    raise InvalidPattern("excluded value pattern is not a valid regex")

Catch by category::

    try:
        ...
    except ConfigurationError:
        # handles InvalidPattern, InvalidConfiguration
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class ParamGateError(Exception):
    """Base exception for all parameter gate errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"PG-E100"``.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "PG-E000"
    message: str = "Unknown parameter gate error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a JSON-friendly mapping."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class ConfigurationError(ParamGateError):
    """PG-E1xx -- Invalid configuration detected at load time.

    Fatal to the configuration unit being loaded.  A gate never falls
    back to "accept all" because of a configuration error.
    """

    code = "PG-E1XX"


class BindingError(ParamGateError):
    """PG-E3xx -- A single set-operation on the binding target failed."""

    code = "PG-E3XX"


# ===================================================================
# PG-E1xx  Configuration Errors
# ===================================================================

class InvalidPattern(ConfigurationError):
    """PG-E100 -- A configured pattern is not a valid regular expression."""

    code = "PG-E100"
    message = "Configured pattern is not a valid regular expression"
    resolution = (
        "Fix the pattern syntax.  Pattern lists are comma-delimited, so a "
        "single rule cannot itself contain a comma."
    )


class InvalidConfiguration(ConfigurationError):
    """PG-E101 -- A configuration property is unknown or has an invalid value."""

    code = "PG-E101"
    message = "Invalid parameter gate configuration"
    resolution = "Check property names and value types against GateConfig."


# ===================================================================
# PG-E3xx  Binding Errors
# ===================================================================

class PropertyNotFound(BindingError):
    """PG-E300 -- The binding target has no property with the given name."""

    code = "PG-E300"
    message = "No such property on the binding target"


class NestedPathUnsupported(BindingError):
    """PG-E301 -- The binding target cannot address a nested or indexed path."""

    code = "PG-E301"
    message = "Binding target does not support nested property paths"


class ConversionFailed(BindingError):
    """PG-E302 -- The value could not be converted to the property's type."""

    code = "PG-E302"
    message = "Parameter value could not be converted"
