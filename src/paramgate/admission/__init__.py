"""Parameter admission.

This subpackage decides which submitted parameters may be bound:

* **PatternSet** -- compiled, case-insensitive, anchored accept/deny rules.
* **AdmissionPolicy** / **PolicyHolder** -- immutable policy snapshots
  published to concurrent readers and swapped on reload.
* **NameAdmission** -- DMI guard, length limit, name patterns, target veto.
* **ValueAdmission** -- value patterns and target veto.
* **OrderingPolicy** -- optional shallow-first ordering of names.
* **AdmissionPipeline** -- runs name then value admission over a batch.
"""
from __future__ import annotations

from paramgate.admission.names import DMI_IGNORED_PATTERN, NameAdmission
from paramgate.admission.ordering import OrderingPolicy, depth, depth_key
from paramgate.admission.patterns import PatternSet, is_configured
from paramgate.admission.pipeline import AdmissionPipeline
from paramgate.admission.policy import AdmissionPolicy, PolicyHolder
from paramgate.admission.standard import (
    STANDARD_ACCEPTED_NAME_PATTERNS,
    STANDARD_EXCLUDED_NAME_PATTERNS,
    standard_accepted_names,
    standard_excluded_names,
)
from paramgate.admission.values import ValueAdmission

__all__ = [
    "DMI_IGNORED_PATTERN",
    "STANDARD_ACCEPTED_NAME_PATTERNS",
    "STANDARD_EXCLUDED_NAME_PATTERNS",
    "AdmissionPipeline",
    "AdmissionPolicy",
    "NameAdmission",
    "OrderingPolicy",
    "PatternSet",
    "PolicyHolder",
    "ValueAdmission",
    "depth",
    "depth_key",
    "is_configured",
    "standard_accepted_names",
    "standard_excluded_names",
]
