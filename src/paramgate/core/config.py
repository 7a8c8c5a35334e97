"""Parameter gate configuration.

Defines the validated, immutable configuration model consumed by the
admission pipeline and binding applier.  A configuration is built once
when a gate is initialised (or reloaded) and never mutated afterwards;
reloading swaps in a new instance.
"""
from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from paramgate.core.errors import InvalidConfiguration

PARAM_NAME_MAX_LENGTH = 100
"""Default upper bound on parameter name length."""

# camelCase property keys accepted by :meth:`GateConfig.from_properties`
_PROPERTY_ALIASES: dict[str, str] = {
    "paramNameMaxLength": "param_name_max_length",
    "enableDynamicMethodInvocation": "dmi_enabled",
    "dmiEnabled": "dmi_enabled",
    "requireAnnotations": "require_annotations",
    "devMode": "dev_mode",
    "acceptParamNames": "accepted_param_names",
    "excludeParams": "excluded_params",
    "acceptedValuePatterns": "accepted_value_patterns",
    "excludedValuePatterns": "excluded_value_patterns",
    "standardPatterns": "standard_patterns",
}


class GateConfig(BaseModel):
    """Configuration for a :class:`~paramgate.gate.ParameterGate`.

    All fields carry permissive defaults: no pattern sets are configured,
    so every name not rejected by the always-on length check is accepted
    and every value is accepted.  A deployment strengthens the posture by
    supplying accept/exclude pattern strings or by enabling
    ``standard_patterns``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    param_name_max_length: int = Field(
        default=PARAM_NAME_MAX_LENGTH,
        ge=1,
        description="Names longer than this are rejected.",
    )
    dmi_enabled: bool = Field(
        default=False,
        description=(
            "Dynamic method invocation is enabled; ``action:`` and "
            "``method:`` prefixed names are reserved control tokens."
        ),
    )
    require_annotations: bool = Field(
        default=False,
        description="Only names declared bindable by the target are admitted.",
    )
    ordered: bool = Field(
        default=False,
        description="Admit parameters shallow-first instead of in arrival order.",
    )
    dev_mode: bool = Field(
        default=False,
        description=(
            "Developer mode: rejections log at WARNING and binding failures "
            "are surfaced to the target."
        ),
    )
    accepted_param_names: str | None = Field(
        default=None,
        description="Comma-delimited regexes a parameter name must match.",
    )
    excluded_params: str | None = Field(
        default=None,
        description="Comma-delimited regexes a parameter name must not match.",
    )
    accepted_value_patterns: str | None = Field(
        default=None,
        description="Comma-delimited regexes a parameter value must match.",
    )
    excluded_value_patterns: str | None = Field(
        default=None,
        description="Comma-delimited regexes a parameter value must not match.",
    )
    standard_patterns: bool = Field(
        default=False,
        description=(
            "Fall back to the built-in name patterns when no accepted or "
            "excluded name patterns are configured."
        ),
    )

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        *,
        prefix: str = "paramgate.",
    ) -> GateConfig:
        """Build a configuration from a flat property mapping.

        Only keys starting with *prefix* are considered.  The remainder of
        each key may be a field name or its camelCase alias
        (``devMode``, ``excludeParams`` ...).  Values are strings and are
        coerced leniently (``"true"``, ``"yes"``, ``"on"`` and ``"1"`` are
        all truthy).

        Raises
        ------
        InvalidConfiguration
            If a key is unknown or a value fails validation.
        """
        values: dict[str, str] = {}
        for key, value in properties.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):]
            values[_PROPERTY_ALIASES.get(name, name)] = value

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise InvalidConfiguration(
                f"Invalid parameter gate configuration: {exc.error_count()} error(s)",
                details={
                    "errors": [
                        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                        for err in exc.errors()
                    ],
                },
            ) from exc
