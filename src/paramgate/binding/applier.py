"""Best-effort application of admitted parameters to a binding target.

Each admitted parameter is set exactly once, in collection order.  A
failure on one parameter is recorded and the batch moves on; earlier
successes are never rolled back and later parameters are still
attempted.  In developer mode failures are additionally logged at ERROR,
appended to the target's action messages when it is
:class:`~paramgate.core.interfaces.ActionMessageAware`, and forwarded to
the diagnostics sink.
"""
from __future__ import annotations

import logging
from typing import Any

from paramgate.core.errors import ParamGateError
from paramgate.core.interfaces import ActionMessageAware, DiagnosticsSink
from paramgate.core.text import normalize_space
from paramgate.core.types import (
    BindingOutcome,
    BindingReport,
    DiagnosticEvent,
    DiagnosticKind,
    ParameterCollection,
)

logger = logging.getLogger(__name__)


class BindingApplier:
    """Applies admitted parameters and isolates per-parameter failures.

    Parameters
    ----------
    diagnostics:
        Optional sink for developer-mode binding failures.
    """

    def __init__(self, diagnostics: DiagnosticsSink | None = None) -> None:
        self._diagnostics = diagnostics

    def apply(
        self,
        target: Any,
        admitted: ParameterCollection,
        *,
        dev_mode: bool = False,
    ) -> BindingReport:
        """Set every admitted parameter on *target*.

        Returns
        -------
        BindingReport
            One outcome per parameter; ``report.applied`` is the number
            of successful set-operations.
        """
        outcomes: list[BindingOutcome] = []
        for name, param in admitted.items():
            try:
                target.try_set(name, param.raw)
            except Exception as exc:
                message = str(exc) or type(exc).__name__
                code = exc.code if isinstance(exc, ParamGateError) else None
                outcomes.append(BindingOutcome(name, False, message, code))
                if dev_mode:
                    self.notify_developer(target, name, exc)
                else:
                    logger.debug(
                        "Setting parameter [%s] failed: %s",
                        normalize_space(name),
                        normalize_space(message),
                    )
            else:
                outcomes.append(BindingOutcome(name, True))
        return BindingReport(outcomes=tuple(outcomes))

    def notify_developer(self, target: Any, name: str, exc: Exception) -> None:
        """Surface a binding failure to the operator and the requester.

        Coded errors carry their ``to_dict()`` payload to the diagnostics
        sink under ``extra["error"]``.
        """
        message = str(exc) or type(exc).__name__
        logger.error(
            "Unexpected exception caught setting '%s' on '%s': %s",
            normalize_space(name),
            type(target).__qualname__,
            normalize_space(message),
        )
        if isinstance(target, ActionMessageAware):
            target.add_action_message(message)
        if self._diagnostics is not None:
            extra: dict[str, Any] = {"target": type(target).__qualname__}
            if isinstance(exc, ParamGateError):
                extra["error"] = exc.to_dict()["error"]
            self._diagnostics.record_binding_failure(
                DiagnosticEvent(
                    kind=DiagnosticKind.BINDING_FAILURE,
                    name=name,
                    message=message,
                    extra=extra,
                )
            )
