# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Text rendering of finished scope trees.

The layout follows the verbose output of Go's test runner, which is what
the hierarchical naming of scopes is modelled on:

    --- FAIL: TestGroup (0.01s)
        --- PASS: TestGroup/A (0.00s)
        --- FAIL: TestGroup/B (0.00s)
            expected 1, got 2
"""

from __future__ import annotations

from typing import List

from ..core import Outcome
from .scope import Scope

INDENT = "    "


def _render(scope: Scope, depth: int, lines: List[str], only_failures: bool) -> None:
    outcome = scope.outcome
    if only_failures and outcome is not Outcome.FAIL:
        return

    pad = INDENT * depth
    lines.append(f"{pad}--- {outcome.value}: {scope.name} ({scope.duration:.2f}s)")
    for message in scope.messages:
        for line in message.splitlines() or [""]:
            lines.append(f"{pad}{INDENT}{line}")
    for child in scope.children:
        _render(child, depth + 1, lines, only_failures)


def format_report(scope: Scope, only_failures: bool = False) -> str:
    """
    Render ``scope`` and its descendants as an indented text tree.

    Args:
        scope: A finished scope, usually the root returned by Scope.main
        only_failures: Leave out passed and skipped scopes

    Returns:
        The report, one scope header per line followed by its log messages
    """
    lines: List[str] = []
    _render(scope, 0, lines, only_failures)
    return "\n".join(lines)
