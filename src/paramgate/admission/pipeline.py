"""The admission pipeline.

Runs :class:`NameAdmission` then :class:`ValueAdmission` over every
submitted parameter and collects the survivors into a new
:class:`ParameterCollection`, depth-ordered when the policy says so.

The pipeline is a pure decision step: it never touches the binding
target beyond asking its optional veto capabilities, and calling it
twice with the same input and policy yields the same output.
"""
from __future__ import annotations

from typing import Any

from paramgate.admission.names import NameAdmission
from paramgate.admission.ordering import OrderingPolicy
from paramgate.admission.policy import AdmissionPolicy, PolicyHolder
from paramgate.admission.values import ValueAdmission
from paramgate.core.config import GateConfig
from paramgate.core.types import (
    AdmissionOutcome,
    Parameter,
    ParameterCollection,
    Rejection,
)


class AdmissionPipeline:
    """Filters submitted parameters down to the admissible ones.

    Parameters
    ----------
    policies:
        Source of the current :class:`AdmissionPolicy`.  The policy is
        read once per call, so a concurrent reload never splits a batch.
    """

    def __init__(self, policies: PolicyHolder) -> None:
        self._policies = policies

    @classmethod
    def from_config(cls, config: GateConfig) -> AdmissionPipeline:
        """Build a pipeline with its own policy holder."""
        return cls(PolicyHolder(AdmissionPolicy.from_config(config)))

    @property
    def policy(self) -> AdmissionPolicy:
        """The policy currently in force."""
        return self._policies.current

    def evaluate(
        self,
        parameters: ParameterCollection,
        target: Any = None,
        *,
        policy: AdmissionPolicy | None = None,
    ) -> AdmissionOutcome:
        """Decide every parameter and report both survivors and rejections.

        Names are checked first; a parameter whose name is rejected never
        has its value inspected.  *policy* pins the snapshot to use;
        by default the current one is taken.
        """
        if policy is None:
            policy = self._policies.current
        names = NameAdmission(policy)
        values = ValueAdmission(policy)
        ordering = OrderingPolicy(ordered=policy.config.ordered)

        admitted: list[Parameter] = []
        rejections: list[Rejection] = []
        for name, param in parameters.items():
            value = param.value
            result = names.is_acceptable_name(name, target)
            if result:
                result = values.is_acceptable_value(name, value, target)
            if result:
                admitted.append(param)
            else:
                rejections.append(
                    Rejection(
                        name=name,
                        value=value,
                        reason=result.reason,  # type: ignore[arg-type]
                        offending_pattern=result.offending_pattern,
                    )
                )

        return AdmissionOutcome(
            admitted=ordering.collection(admitted),
            rejections=tuple(rejections),
        )

    def filter(
        self,
        parameters: ParameterCollection,
        target: Any = None,
    ) -> ParameterCollection:
        """Return only the admissible parameters, in policy order."""
        return self.evaluate(parameters, target).admitted
