#!/usr/bin/env python3
"""paramgate quickstart -- binding a form submission.

Demonstrates the core workflow:

1. Load a gate configuration from flat properties.
2. Create a gate with an in-memory diagnostics sink.
3. Process an untrusted submission against a plain object.
4. Inspect what was bound, what was rejected, and what failed.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import logging

from paramgate import GateConfig, ParameterGate
from paramgate.core.interfaces import AttributeBindingTarget, InMemoryDiagnosticsSink


class SignupForm:
    """The object the submission is bound onto."""

    username = ""
    email = ""
    newsletter = ""
    comment = ""

    def __init__(self) -> None:
        self.messages: list[str] = []


class SignupTarget(AttributeBindingTarget):
    """Adds the name veto and action-message capabilities."""

    def acceptable_parameter_name(self, name: str) -> bool:
        return name != "is_admin"

    def add_action_message(self, message: str) -> None:
        self.target.messages.append(message)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # -- Step 1: Configuration -----------------------------------------------
    config = GateConfig.from_properties(
        {
            "paramgate.devMode": "true",
            "paramgate.enableDynamicMethodInvocation": "true",
            "paramgate.standardPatterns": "true",
            "paramgate.excludedValuePatterns": ".*<script>.*",
        }
    )
    print(f"[1] Config loaded: dev_mode={config.dev_mode}, dmi={config.dmi_enabled}")

    # -- Step 2: Gate ----------------------------------------------------------
    sink = InMemoryDiagnosticsSink()
    gate = ParameterGate(config, diagnostics=sink)
    print("[2] Gate created")

    # -- Step 3: Process an untrusted submission -------------------------------
    form = SignupForm()
    submission = [
        ("username", "alice"),
        ("email", "alice@example.com"),
        ("method:deleteAll", "1"),
        ("class.classLoader.resources", "x"),
        ("is_admin", "true"),
        ("comment", "<script>alert(1)</script>"),
        ("profile.avatar", "cat.png"),
        ("newsletter", ["weekly", "monthly"]),
    ]
    report = gate.process(submission, SignupTarget(form))

    # -- Step 4: Inspect -------------------------------------------------------
    print(f"[3] Applied {report.applied} parameter(s)")
    print(f"    username:   {form.username}")
    print(f"    email:      {form.email}")
    print(f"    newsletter: {form.newsletter}")
    for rejection in report.rejections:
        print(f"    rejected:   {rejection.name} ({rejection.reason})")
    for failure in report.failures:
        print(f"    failed:     {failure.name} [{failure.code}]: {failure.error}")
    print(f"    messages:   {form.messages}")
    print(f"    sink saw {len(sink.rejections)} rejection(s), "
          f"{len(sink.binding_failures)} binding failure(s)")


if __name__ == "__main__":
    main()
