"""Binding of admitted parameters onto a target.

* **BindingApplier** -- best-effort batch application with per-parameter
  failure isolation.
"""
from __future__ import annotations

from paramgate.binding.applier import BindingApplier

__all__ = [
    "BindingApplier",
]
