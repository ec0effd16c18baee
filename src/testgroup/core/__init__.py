# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
testgroup Core

Settings and enumerations shared by the host runner, the classifier and the
execution engine.
"""

from .enums import DiagnosticKind, HookName, Outcome, RunMode
from .model import Model
from .settings import DEFAULT_PARALLEL_PARENT_NAME, RunSettings

__all__ = [
    # Models
    "Model",
    "RunSettings",
    "DEFAULT_PARALLEL_PARENT_NAME",
    # Enums
    "DiagnosticKind",
    "HookName",
    "Outcome",
    "RunMode",
]
