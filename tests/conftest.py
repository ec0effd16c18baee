# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for testgroup testing.

This module provides helpers for running groups under throwaway root scopes
and for recording the order in which hooks and tests are called.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, List, Optional

import pytest

from testgroup import RunMode, RunSettings, Scope, run


class CallLog:
    """
    Thread-safe record of calls, shared by the hooks and tests of a group.

    Example:
        >>> log = CallLog()
        >>> log.record("pre_group")
        >>> log.calls
        ['pre_group']
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: List[str] = []

    def record(self, call: str) -> None:
        with self._lock:
            self._calls.append(call)

    @property
    def calls(self) -> List[str]:
        with self._lock:
            return list(self._calls)


def run_group(
    group: Any,
    mode: RunMode = RunMode.SERIAL,
    name: str = "TestGroup",
    settings: Optional[RunSettings] = None,
) -> Scope:
    """
    Run a group under a new root scope and return the finished root.

    Args:
        group: Group object to run
        mode: RunMode.SERIAL or RunMode.PARALLEL
        name: Name of the root scope
        settings: Optional run settings

    Returns:
        The finished root scope
    """
    return Scope.main(name, lambda scope: run(scope, mode, group, settings=settings))


def find_scope(root: Scope, name: str) -> Scope:
    """Find a descendant scope by its full name."""
    pending = [root]
    while pending:
        scope = pending.pop()
        if scope.name == name:
            return scope
        pending.extend(scope.children)
    raise KeyError(name)


# Pytest Fixtures
@pytest.fixture
def call_log() -> CallLog:
    """Create an empty call log."""
    return CallLog()


@pytest.fixture
def group_run() -> Callable[..., Scope]:
    """Factory fixture wrapping run_group()."""
    return run_group


@pytest.fixture
def scope_lookup() -> Callable[[Scope, str], Scope]:
    """Factory fixture wrapping find_scope()."""
    return find_scope
