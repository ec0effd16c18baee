# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
testgroup Host Runner

Hierarchical, thread-backed test scopes and their reports. The execution
engine only talks to this package through the public Scope API.
"""

from .outcomes import FailNow, ScopeExit, SkipNow
from .report import format_report
from .scope import SEPARATOR, Scope

__all__ = [
    "Scope",
    "SEPARATOR",
    "format_report",
    # Signals
    "ScopeExit",
    "FailNow",
    "SkipNow",
]
