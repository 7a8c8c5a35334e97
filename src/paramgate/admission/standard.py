"""Built-in name patterns.

Used when :attr:`GateConfig.standard_patterns` is enabled and the
deployment has not supplied its own accepted or excluded name patterns.
The rules are kept as already-split tuples because several of them
contain commas and could not survive a round trip through
comma-delimited configuration text.
"""
from __future__ import annotations

from paramgate.admission.patterns import PatternSet

# Property paths: words joined by ``.name``, ``[0]``, ``(0)``, ``['key']``
# or ``('key')`` segments.
STANDARD_ACCEPTED_NAME_PATTERNS: tuple[str, ...] = (
    r"\w+((\.\w+)|(\[\d+\])|(\(\d+\))|(\['[\w-]+'\])|(\('[\w-]+'\)))*",
)

STANDARD_EXCLUDED_NAME_PATTERNS: tuple[str, ...] = (
    # Framework context roots, optionally reached via #, top or %{...}
    r"(^|%\{)((#?)(top(\.|\['|\[\")|\[\d\]\.)?)"
    r"(session|request|response|application|servlet(Request|Response|Context)"
    r"|parameters|context|_memberAccess)(\.|\[).*",
    # Class / class-loader traversal
    r".*(^|\.|\[|'|\"|get)class(\(|\.|\[|'|\").*",
    # Dynamic method invocation control tokens
    r"^(action|method):.*",
)


def standard_accepted_names() -> PatternSet:
    """The built-in accepted-name rules."""
    return PatternSet.from_patterns(STANDARD_ACCEPTED_NAME_PATTERNS)


def standard_excluded_names() -> PatternSet:
    """The built-in excluded-name rules."""
    return PatternSet.from_patterns(STANDARD_EXCLUDED_NAME_PATTERNS)
