# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
testgroup - Group related tests as methods of one object

A group is any object whose public methods are tests. Tests share state
through the group and lifecycle hooks (``pre_group``, ``post_group``,
``pre_test``, ``post_test``), and run serially or in parallel as named
subtests.

Key Entry Points:
- testgroup.run_serially() / testgroup.run_in_parallel() - Run a group under a host scope
- T.run_serially() / T.run_in_parallel() / T.run() - Nest groups and subtests
- the ``group_runner`` pytest fixture - Run a group from a pytest test
- testgroup.classify() - Inspect a group without running it

Example Usage:
    ```python
    import testgroup

    def test_abs(group_runner):
        group_runner.run_serially(AbsTests())

    class AbsTests:
        def keeps_positive_numbers(self, t: testgroup.T) -> None:
            t.equal(1, abs(1))

        def flips_negative_numbers(self, t: testgroup.T) -> None:
            t.equal(1, abs(-1))
    ```
"""

import logging

from .assertions import Assertions
from .classifier import Classification, Diagnostic, TestMethod, classify
from .context import T
from .core import DiagnosticKind, HookName, Outcome, RunMode, RunSettings
from .engine import (
    main,
    run,
    run_in_parallel,
    run_parallel,
    run_serial,
    run_serially,
)
from .hooks import PostGrouper, PostTester, PreGrouper, PreTester
from .host import FailNow, Scope, SkipNow, format_report

# Libraries should not configure logging; applications attach their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.4.0"

__all__ = [
    # Running groups
    "run",
    "run_serially",
    "run_in_parallel",
    "run_serial",
    "run_parallel",
    "main",
    # Context
    "T",
    "Assertions",
    # Classification
    "classify",
    "Classification",
    "Diagnostic",
    "TestMethod",
    # Hooks
    "PreGrouper",
    "PostGrouper",
    "PreTester",
    "PostTester",
    # Host
    "Scope",
    "FailNow",
    "SkipNow",
    "format_report",
    # Configuration
    "RunSettings",
    "RunMode",
    "HookName",
    "DiagnosticKind",
    "Outcome",
]
