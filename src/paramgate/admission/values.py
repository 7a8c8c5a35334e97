"""Parameter value admission.

Empty and absent values are always admitted.  Otherwise the primary
scalar of the parameter is checked against the excluded value patterns,
then the accepted value patterns, then the target's
:class:`~paramgate.core.interfaces.ValueAware` veto.  With no value
patterns configured and no veto, every value is admitted.
"""
from __future__ import annotations

import logging
from typing import Any

from paramgate.admission.patterns import is_configured
from paramgate.admission.policy import AdmissionPolicy
from paramgate.core.interfaces import ValueAware
from paramgate.core.text import normalize_space
from paramgate.core.types import AdmissionResult, RejectionReason

logger = logging.getLogger(__name__)

_VALUES_HINT = (
    "See accepted / excluded parameter value patterns in the gate configuration."
)


class ValueAdmission:
    """Decides whether a parameter value may be bound.

    Parameters
    ----------
    policy:
        The admission policy snapshot to evaluate against.
    """

    def __init__(self, policy: AdmissionPolicy) -> None:
        self._policy = policy
        self._config = policy.config

    def is_acceptable_value(
        self,
        name: str,
        value: str | None,
        target: Any = None,
    ) -> AdmissionResult:
        """Evaluate *value* (submitted under *name*) against every value check."""
        if not value:
            return AdmissionResult.accept()

        result = self._check_excluded(name, value)
        if result:
            result = self._check_accepted(name, value)
        if not result:
            return result

        if isinstance(target, ValueAware) and not target.acceptable_parameter_value(value):
            level = logging.WARNING if self._config.dev_mode else logging.DEBUG
            logger.log(
                level,
                "Value [%s] of parameter [%s] was rejected by the target",
                normalize_space(value),
                normalize_space(name),
            )
            return AdmissionResult.reject(RejectionReason.VALUE_VETOED)

        return AdmissionResult.accept()

    def _check_excluded(self, name: str, value: str) -> AdmissionResult:
        excluded = self._policy.excluded_values
        if not is_configured(excluded):
            logger.debug("No excluded value patterns defined so anything is allowed")
            return AdmissionResult.accept()
        pattern = excluded.first_match(value)
        if pattern is None:
            return AdmissionResult.accept()
        if self._config.dev_mode:
            logger.warning(
                "Value [%s] of parameter [%s] matches excluded pattern [%s]! %s",
                normalize_space(value),
                normalize_space(name),
                pattern,
                _VALUES_HINT,
            )
        else:
            logger.debug(
                "Value [%s] of parameter [%s] matches excluded pattern [%s]",
                normalize_space(value),
                normalize_space(name),
                pattern,
            )
        return AdmissionResult.reject(RejectionReason.VALUE_EXCLUDED, pattern)

    def _check_accepted(self, name: str, value: str) -> AdmissionResult:
        accepted = self._policy.accepted_values
        if not is_configured(accepted):
            logger.debug("No accepted value patterns defined so anything is allowed")
            return AdmissionResult.accept()
        if accepted.matches(value):
            return AdmissionResult.accept()
        described = accepted.describe()
        if self._config.dev_mode:
            logger.warning(
                "Value [%s] of parameter [%s] didn't match accepted pattern [%s]! %s",
                normalize_space(value),
                normalize_space(name),
                described,
                _VALUES_HINT,
            )
        else:
            logger.debug(
                "Value [%s] of parameter [%s] was not accepted!",
                normalize_space(value),
                normalize_space(name),
            )
        return AdmissionResult.reject(RejectionReason.VALUE_NOT_ACCEPTED, described)
