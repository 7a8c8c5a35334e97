"""Admission policy snapshots.

An :class:`AdmissionPolicy` bundles a :class:`GateConfig` with the four
compiled pattern sets derived from it.  Policies are immutable; a
:class:`PolicyHolder` publishes the current one and replaces it
wholesale on reload.  Readers take ``holder.current`` once per request
and never lock, so an in-flight request sees either the old or the new
policy in full, never a mix of the two.  Writers serialise on a lock so
that two concurrent partial updates cannot lose each other's change.
"""
from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from paramgate.admission.patterns import PatternSet, is_configured
from paramgate.admission.standard import (
    standard_accepted_names,
    standard_excluded_names,
)
from paramgate.core.config import GateConfig

logger = logging.getLogger(__name__)

# policy attribute -> (config field, label used in log messages)
_PATTERN_FIELDS: dict[str, tuple[str, str]] = {
    "accepted_names": ("accepted_param_names", "accepted name patterns"),
    "excluded_names": ("excluded_params", "excluded name patterns"),
    "accepted_values": ("accepted_value_patterns", "accepted value patterns"),
    "excluded_values": ("excluded_value_patterns", "excluded value patterns"),
}

_STANDARD_FALLBACKS: dict[str, Callable[[], PatternSet]] = {
    "accepted_names": standard_accepted_names,
    "excluded_names": standard_excluded_names,
}


@dataclass(frozen=True, slots=True)
class AdmissionPolicy:
    """An immutable snapshot of everything admission decisions depend on.

    Attributes
    ----------
    config:
        Scalar flags and the raw pattern text.
    accepted_names / excluded_names / accepted_values / excluded_values:
        Compiled pattern sets.  ``None`` means "not configured".
    """

    config: GateConfig
    accepted_names: PatternSet | None = None
    excluded_names: PatternSet | None = None
    accepted_values: PatternSet | None = None
    excluded_values: PatternSet | None = None

    @classmethod
    def from_config(cls, config: GateConfig) -> AdmissionPolicy:
        """Compile every pattern string in *config*.

        Raises
        ------
        InvalidPattern
            If any configured rule is not a valid regular expression.
        """
        return cls(
            config=config,
            **{
                attribute: _compile_for(attribute, config)
                for attribute in _PATTERN_FIELDS
            },
        )


def _compile_optional(text: str | None) -> PatternSet | None:
    if text is None:
        return None
    return PatternSet.compile(text)


def _compile_for(attribute: str, config: GateConfig) -> PatternSet | None:
    """Compile the pattern set *config* implies for *attribute*.

    Name sets left unset fall back to the built-in rules when
    ``standard_patterns`` is on.
    """
    config_field, _ = _PATTERN_FIELDS[attribute]
    patterns = _compile_optional(getattr(config, config_field))
    if patterns is None and config.standard_patterns:
        fallback = _STANDARD_FALLBACKS.get(attribute)
        if fallback is not None:
            patterns = fallback()
    return patterns


class PolicyHolder:
    """Publishes the current :class:`AdmissionPolicy` to concurrent readers.

    Parameters
    ----------
    policy:
        The initial policy.
    """

    def __init__(self, policy: AdmissionPolicy) -> None:
        self._policy = policy
        self._write_lock = threading.Lock()

    @property
    def current(self) -> AdmissionPolicy:
        """The policy in force.  Lock-free; take it once per request."""
        return self._policy

    def replace(self, policy: AdmissionPolicy) -> None:
        """Publish *policy* in place of the current one."""
        with self._write_lock:
            self._policy = policy

    def reload(self, config: GateConfig) -> AdmissionPolicy:
        """Compile *config* and publish it.

        Compilation happens before the swap, so an invalid pattern leaves
        the current policy untouched.
        """
        policy = AdmissionPolicy.from_config(config)
        self.replace(policy)
        logger.debug("Admission policy reloaded")
        return policy

    def set_patterns(self, attribute: str, comma_delimited: str | None) -> PatternSet | None:
        """Replace one of the four pattern sets from comma-delimited text.

        ``None`` removes the set, or restores the built-in name rules when
        ``standard_patterns`` is on.  The result always equals what
        :meth:`AdmissionPolicy.from_config` builds from the updated config.

        Raises
        ------
        KeyError
            If *attribute* is not one of the four pattern attributes.
        InvalidPattern
            If a rule is not a valid regular expression.
        """
        config_field, label = _PATTERN_FIELDS[attribute]

        with self._write_lock:
            current = self._policy
            config = current.config.model_copy(update={config_field: comma_delimited})
            new_set = _compile_for(attribute, config)
            old_set: PatternSet | None = getattr(current, attribute)
            if is_configured(old_set):
                logger.warning(
                    "Replacing %s [%s] with [%s], be aware that this may "
                    "impact safety of your application!",
                    label,
                    old_set.describe(),
                    new_set.describe() if new_set is not None else "",
                )
            else:
                logger.debug(
                    "Setting %s to [%s]",
                    label,
                    new_set.describe() if new_set is not None else "",
                )
            self._policy = dataclasses.replace(
                current, config=config, **{attribute: new_set}
            )
        return new_set
