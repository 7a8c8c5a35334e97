"""Parameter name admission.

Checks run in a fixed order and stop at the first rejection:

1. **DMI guard** -- with dynamic method invocation enabled, names such as
   ``action:save`` or ``method:delete`` are control tokens, not data.
2. **Length** -- names longer than ``param_name_max_length`` are rejected.
   This bounds the path depth handed to the target's reflection layer.
3. **Excluded patterns** -- reject on any match.
4. **Accepted patterns** -- when configured, reject unless one matches.
5. **Target veto** -- targets implementing
   :class:`~paramgate.core.interfaces.NameAware` may decline the name.
6. **Annotation requirement** -- see :meth:`NameAdmission.is_parameter_annotated`.

Production and developer modes reach identical decisions; developer
mode only raises log verbosity.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from paramgate.admission.patterns import is_configured
from paramgate.admission.policy import AdmissionPolicy
from paramgate.core.interfaces import NameAware
from paramgate.core.text import normalize_space
from paramgate.core.types import AdmissionResult, RejectionReason

logger = logging.getLogger(__name__)

DMI_IGNORED_PATTERN = re.compile(r"^(action|method):.*", re.IGNORECASE)

_PATTERNS_HINT = (
    "See accepted / excluded parameter name patterns in the gate configuration."
)


class NameAdmission:
    """Decides whether a parameter name may be bound.

    Parameters
    ----------
    policy:
        The admission policy snapshot to evaluate against.
    """

    def __init__(self, policy: AdmissionPolicy) -> None:
        self._policy = policy
        self._config = policy.config

    def is_acceptable_name(self, name: str, target: Any = None) -> AdmissionResult:
        """Evaluate *name* against every name check, in order."""
        if self.is_ignored_dmi(name):
            logger.debug(
                "DMI is enabled, ignoring DMI method: %s", normalize_space(name)
            )
            return AdmissionResult.reject(
                RejectionReason.DMI_RESERVED, DMI_IGNORED_PATTERN.pattern
            )

        result = self._check_length(name)
        if result:
            result = self._check_excluded(name)
        if result:
            result = self._check_accepted(name)
        if not result:
            return result

        if isinstance(target, NameAware) and not target.acceptable_parameter_name(name):
            self._log_rejection(
                "Parameter [%s] was rejected by the target", normalize_space(name)
            )
            return AdmissionResult.reject(RejectionReason.NAME_VETOED)

        if not self.is_parameter_annotated(name, target):
            self._log_rejection(
                "Parameter [%s] is not declared bindable by the target",
                normalize_space(name),
            )
            return AdmissionResult.reject(RejectionReason.NAME_NOT_ANNOTATED)

        if self._config.dev_mode:
            logger.debug(
                "Parameter [%s] was accepted and will be appended to the target!",
                normalize_space(name),
            )
        return AdmissionResult.accept()

    def is_ignored_dmi(self, name: str) -> bool:
        """``True`` when DMI is enabled and *name* is a reserved control token."""
        if not self._config.dmi_enabled:
            return False
        return DMI_IGNORED_PATTERN.match(name) is not None

    def is_parameter_annotated(self, name: str, target: Any) -> bool:
        """Check *name* against the target's declared bindable fields.

        Only consulted when ``require_annotations`` is configured.
        """
        if not self._config.require_annotations:
            return True
        # TODO: look up bindable-field metadata declared on the target's type
        # and reject names it does not list.
        return True

    # -- individual checks ----------------------------------------------

    def _check_length(self, name: str) -> AdmissionResult:
        limit = self._config.param_name_max_length
        if len(name) <= limit:
            return AdmissionResult.accept()
        if self._config.dev_mode:
            logger.warning(
                "Parameter [%s] is too long, allowed length is [%d]. Override "
                "param_name_max_length in the gate configuration to change the limit.",
                normalize_space(name),
                limit,
            )
        else:
            logger.warning(
                "Parameter [%s] is too long, allowed length is [%d]",
                normalize_space(name),
                limit,
            )
        return AdmissionResult.reject(RejectionReason.NAME_TOO_LONG)

    def _check_excluded(self, name: str) -> AdmissionResult:
        excluded = self._policy.excluded_names
        if not is_configured(excluded):
            return AdmissionResult.accept()
        pattern = excluded.first_match(name)
        if pattern is None:
            return AdmissionResult.accept()
        if self._config.dev_mode:
            logger.warning(
                "Parameter [%s] matches excluded pattern [%s]! %s",
                normalize_space(name),
                pattern,
                _PATTERNS_HINT,
            )
        else:
            logger.debug(
                "Parameter [%s] matches excluded pattern [%s]!",
                normalize_space(name),
                pattern,
            )
        return AdmissionResult.reject(RejectionReason.NAME_EXCLUDED, pattern)

    def _check_accepted(self, name: str) -> AdmissionResult:
        accepted = self._policy.accepted_names
        if not is_configured(accepted) or accepted.matches(name):
            return AdmissionResult.accept()
        described = accepted.describe()
        if self._config.dev_mode:
            logger.warning(
                "Parameter [%s] didn't match accepted pattern [%s]! %s",
                normalize_space(name),
                described,
                _PATTERNS_HINT,
            )
        else:
            logger.debug(
                "Parameter [%s] didn't match accepted pattern [%s]!",
                normalize_space(name),
                described,
            )
        return AdmissionResult.reject(RejectionReason.NAME_NOT_ACCEPTED, described)

    def _log_rejection(self, message: str, *args: Any) -> None:
        level = logging.WARNING if self._config.dev_mode else logging.DEBUG
        logger.log(level, message, *args)
