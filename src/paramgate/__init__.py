"""paramgate -- parameter admission and binding.

Decides which untrusted (name, value) pairs submitted by a caller may be
bound onto a mutable target object, in what order, and applies them one
at a time while isolating per-parameter failures.

Layers
------
* Core types, errors, config, interfaces (:mod:`paramgate.core`)
* Admission (:mod:`paramgate.admission`)
* Binding (:mod:`paramgate.binding`)
* Orchestrator (:mod:`paramgate.gate`)
"""
from __future__ import annotations

__version__ = "1.0.0a1"

# ---------------------------------------------------------------------------
# Admission
# ---------------------------------------------------------------------------
from paramgate.admission import (
    AdmissionPipeline,
    AdmissionPolicy,
    NameAdmission,
    OrderingPolicy,
    PatternSet,
    PolicyHolder,
    ValueAdmission,
)

# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------
from paramgate.binding import BindingApplier

# ---------------------------------------------------------------------------
# Core types, errors, config, interfaces
# ---------------------------------------------------------------------------
from paramgate.core.config import GateConfig
from paramgate.core.errors import (
    BindingError,
    ConfigurationError,
    ConversionFailed,
    InvalidConfiguration,
    InvalidPattern,
    NestedPathUnsupported,
    ParamGateError,
    PropertyNotFound,
)
from paramgate.core.interfaces import (
    ActionMessageAware,
    BindingTarget,
    DiagnosticsSink,
    NameAware,
    NoParameters,
    ValueAware,
)
from paramgate.core.types import (
    AdmissionOutcome,
    AdmissionResult,
    BindingOutcome,
    BindingReport,
    DiagnosticEvent,
    DiagnosticKind,
    Parameter,
    ParameterCollection,
    Rejection,
    RejectionReason,
)

# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------
from paramgate.gate import ParameterGate, parameter_log_map

__all__ = [
    "__version__",
    # Core
    "GateConfig",
    "Parameter",
    "ParameterCollection",
    "AdmissionResult",
    "AdmissionOutcome",
    "Rejection",
    "RejectionReason",
    "BindingOutcome",
    "BindingReport",
    "DiagnosticEvent",
    "DiagnosticKind",
    "BindingTarget",
    "NameAware",
    "ValueAware",
    "ActionMessageAware",
    "DiagnosticsSink",
    "NoParameters",
    # Errors
    "ParamGateError",
    "ConfigurationError",
    "InvalidPattern",
    "InvalidConfiguration",
    "BindingError",
    "PropertyNotFound",
    "NestedPathUnsupported",
    "ConversionFailed",
    # Admission
    "PatternSet",
    "AdmissionPolicy",
    "PolicyHolder",
    "NameAdmission",
    "ValueAdmission",
    "OrderingPolicy",
    "AdmissionPipeline",
    # Binding
    "BindingApplier",
    # Orchestrator
    "ParameterGate",
    "parameter_log_map",
]
