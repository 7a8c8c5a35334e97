"""Shared fixtures for paramgate conformance tests.

Provides gates in the common configurations plus reusable targets.
"""
from __future__ import annotations

from typing import Any

import pytest

from paramgate import GateConfig, ParameterGate
from paramgate.admission import AdmissionPipeline
from paramgate.core.interfaces import InMemoryBindingTarget, InMemoryDiagnosticsSink

# ---------------------------------------------------------------------------
# Common inputs
# ---------------------------------------------------------------------------
DMI_NAMES = [
    "method:delete",
    "action:save",
    "METHOD:execute",
    "Action:list",
    "method:",
]
ALLOW_ALL = ".*"


class OrderRecorder:
    """Target that records set order and fails for chosen names."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.order: list[str] = []
        self.values: dict[str, Any] = {}
        self._failing = failing or set()

    def try_set(self, name: str, value: Any) -> None:
        self.order.append(name)
        if name in self._failing:
            raise ValueError(f"cannot convert {value!r}")
        self.values[name] = value


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def target() -> InMemoryBindingTarget:
    return InMemoryBindingTarget()


@pytest.fixture()
def recorder() -> OrderRecorder:
    return OrderRecorder()


@pytest.fixture()
def sink() -> InMemoryDiagnosticsSink:
    return InMemoryDiagnosticsSink()


@pytest.fixture()
def dmi_gate() -> ParameterGate:
    return ParameterGate(GateConfig(dmi_enabled=True))


@pytest.fixture()
def ordered_pipeline() -> AdmissionPipeline:
    return AdmissionPipeline.from_config(GateConfig(ordered=True))
