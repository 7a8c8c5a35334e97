"""Parameter gate -- the main orchestrator.

This module implements the :class:`ParameterGate` class, the primary
entry point for request code.  It composes the admission pipeline and
the binding applier behind a single synchronous call.

Pipeline
--------

1. **Opt-out** -- targets marked :class:`NoParameters` receive nothing.
2. **Collect** -- raw pairs become a :class:`ParameterCollection`.
3. **Admit** -- name then value admission; rejections are reported to
   the diagnostics sink and never raised.
4. **Apply** -- each admitted parameter is set on the target once;
   failures are isolated per parameter.
5. **Return** the :class:`BindingReport`.

Usage
-----
::

    from paramgate import GateConfig, ParameterGate
    from paramgate.core.interfaces import InMemoryBindingTarget

    gate = ParameterGate(GateConfig(dmi_enabled=True, ordered=True))
    target = InMemoryBindingTarget()
    report = gate.process({"user.name": "Alice", "method:delete": "1"}, target)
    assert report.applied == 1
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from paramgate.admission.pipeline import AdmissionPipeline
from paramgate.admission.policy import AdmissionPolicy, PolicyHolder
from paramgate.binding.applier import BindingApplier
from paramgate.core.config import GateConfig
from paramgate.core.interfaces import DiagnosticsSink, NoParameters
from paramgate.core.text import normalize_space
from paramgate.core.types import (
    BindingReport,
    DiagnosticEvent,
    DiagnosticKind,
    ParameterCollection,
)

logger = logging.getLogger(__name__)

RawParameters = ParameterCollection | Mapping[str, Any] | Iterable[tuple[str, Any]]


def parameter_log_map(parameters: ParameterCollection | None) -> str:
    """Render *parameters* as ``name => value`` pairs for debug logging."""
    if parameters is None:
        return "NONE"
    return "".join(f"{name} => {param.value} " for name, param in parameters.items())


def to_collection(raw: RawParameters) -> ParameterCollection:
    """Coerce a mapping or an iterable of pairs into a collection."""
    if isinstance(raw, ParameterCollection):
        return raw
    if isinstance(raw, Mapping):
        return ParameterCollection.from_mapping(raw)
    return ParameterCollection.from_pairs(raw)


class ParameterGate:
    """Admits untrusted parameters and binds the survivors onto a target.

    Parameters
    ----------
    config:
        Gate configuration.  Defaults to :class:`GateConfig` defaults.
    diagnostics:
        Optional sink for rejection and binding-failure events.  When
        ``None``, events are only logged.

    Raises
    ------
    InvalidPattern
        If *config* contains an invalid pattern.
    """

    def __init__(
        self,
        config: GateConfig | None = None,
        *,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        self._policies = PolicyHolder(AdmissionPolicy.from_config(config or GateConfig()))
        self._diagnostics = diagnostics
        self._pipeline = AdmissionPipeline(self._policies)
        self._applier = BindingApplier(diagnostics)

    # ------------------------------------------------------------------
    # Properties for introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> GateConfig:
        """The configuration currently in force."""
        return self._policies.current.config

    @property
    def policy(self) -> AdmissionPolicy:
        """The compiled admission policy currently in force."""
        return self._policies.current

    @property
    def pipeline(self) -> AdmissionPipeline:
        return self._pipeline

    @property
    def applier(self) -> BindingApplier:
        return self._applier

    # ------------------------------------------------------------------
    # Core pipeline
    # ------------------------------------------------------------------

    def process(self, raw_parameters: RawParameters | None, target: Any) -> BindingReport:
        """Admit *raw_parameters* and apply the survivors to *target*.

        Never raises for rejected parameters or failed set-operations;
        both are reported in the returned :class:`BindingReport`.
        """
        if isinstance(target, NoParameters) or raw_parameters is None:
            return BindingReport()

        parameters = to_collection(raw_parameters)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Setting params %s", normalize_space(parameter_log_map(parameters)))

        policy = self._policies.current
        outcome = self._pipeline.evaluate(parameters, target, policy=policy)
        if self._diagnostics is not None:
            for rejection in outcome.rejections:
                self._diagnostics.record_rejection(
                    DiagnosticEvent(
                        kind=DiagnosticKind.REJECTION,
                        name=rejection.name,
                        reason=rejection.reason,
                        pattern=rejection.offending_pattern,
                    )
                )

        report = self._applier.apply(
            target, outcome.admitted, dev_mode=policy.config.dev_mode
        )
        return BindingReport(outcomes=report.outcomes, rejections=outcome.rejections)

    # ------------------------------------------------------------------
    # Configuration updates
    # ------------------------------------------------------------------

    def reload(self, config: GateConfig) -> None:
        """Replace the whole configuration.

        An invalid pattern raises before anything is swapped, leaving the
        previous configuration in force.
        """
        self._policies.reload(config)

    def set_accepted_param_names(self, comma_delimited: str | None) -> None:
        self._policies.set_patterns("accepted_names", comma_delimited)

    def set_excluded_params(self, comma_delimited: str | None) -> None:
        self._policies.set_patterns("excluded_names", comma_delimited)

    def set_accepted_value_patterns(self, comma_delimited: str | None) -> None:
        self._policies.set_patterns("accepted_values", comma_delimited)

    def set_excluded_value_patterns(self, comma_delimited: str | None) -> None:
        self._policies.set_patterns("excluded_values", comma_delimited)
