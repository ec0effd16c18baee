# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Group Execution Engine

This module runs the tests of a group under a host scope, in the order:

    pre_group -> (pre_test -> test -> post_test)* -> post_group

Execution workflow:
1. **Context** - A group-level ``T`` is built on the caller's scope and used
   for ``pre_group`` and ``post_group``.
2. **Classification** - The group is classified once. Any diagnostic is
   reported through the scope and nothing runs.
3. **Group hooks** - ``pre_group`` runs synchronously first. ``post_group``
   runs after every test has finished, whatever their outcome; it does not
   run when ``pre_group`` itself stops the scope.
4. **Tests** - Each test runs in its own child scope with a fresh ``T``.
   ``post_test`` always follows the test body, including failed and skipped
   tests.

In serial mode tests run one after another in name order. In parallel mode
they run in child scopes of one intermediate scope (named by
``RunSettings.parallel_parent_name``); each test declares itself parallel
before ``pre_test``, and the call that runs the intermediate scope blocks
until all of them are done.

Example:
    ```python
    from testgroup import Scope, run_in_parallel

    root = Scope.main("TestCache", lambda scope: run_in_parallel(scope, CacheTests()))
    assert not root.failed
    ```
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Callable, List, Optional

from .classifier import TestMethod, classify
from .context import T
from .core import RunMode, RunSettings
from .hooks import PostGrouper, PostTester, PreGrouper, PreTester
from .host import Scope

logger = logging.getLogger(__name__)

DIAGNOSTIC_PREFIX = "testgroup: "


def run(
    scope: Scope,
    mode: RunMode,
    group: Any,
    settings: Optional[RunSettings] = None,
) -> None:
    """
    Run every test of ``group`` as a subtest of ``scope``.

    Args:
        scope: Host scope the group runs under
        mode: RunMode.SERIAL or RunMode.PARALLEL
        group: The group object (normally an instance)
        settings: Run configuration; defaults to RunSettings()
    """
    settings = settings if settings is not None else RunSettings()
    mode = RunMode(mode)
    group_t = T(scope, settings)

    classification = classify(group)
    if not classification.ok:
        logger.warning(
            "Not running %s: %d classification problem(s)",
            classification.group_name,
            len(classification.diagnostics),
        )
        for diagnostic in classification.diagnostics:
            scope.error(DIAGNOSTIC_PREFIX + diagnostic.message)
        return

    logger.debug(
        "Running %s %s under %s: %s",
        classification.group_name,
        mode.value,
        scope.name,
        ", ".join(classification.test_names),
    )

    if isinstance(group, PreGrouper):
        group.pre_group(group_t)

    try:
        if mode is RunMode.PARALLEL:
            # Blocks until every parallel test and its hooks have finished
            scope.run(
                settings.parallel_parent_name,
                lambda parent: _run_all(parent, mode, group, classification.tests, settings),
            )
        else:
            _run_all(scope, mode, group, classification.tests, settings)
    finally:
        if isinstance(group, PostGrouper):
            group.post_group(group_t)


def _run_all(
    scope: Scope,
    mode: RunMode,
    group: Any,
    tests: List[TestMethod],
    settings: RunSettings,
) -> None:
    for test in tests:
        scope.run(test.name, lambda child, test=test: _run_one(child, mode, group, test, settings))


def _run_one(
    scope: Scope,
    mode: RunMode,
    group: Any,
    test: TestMethod,
    settings: RunSettings,
) -> None:
    if mode is RunMode.PARALLEL:
        scope.parallel()

    t = T(scope, settings)

    if isinstance(group, PreTester):
        group.pre_test(t)

    try:
        test(t)
    finally:
        if isinstance(group, PostTester):
            group.post_test(t)


def run_serially(scope: Scope, group: Any, settings: Optional[RunSettings] = None) -> None:
    """Run the tests of ``group`` one at a time in lexicographic order."""
    run(scope, RunMode.SERIAL, group, settings=settings)


def run_in_parallel(scope: Scope, group: Any, settings: Optional[RunSettings] = None) -> None:
    """Run the tests of ``group`` concurrently and wait for all of them to finish."""
    run(scope, RunMode.PARALLEL, group, settings=settings)


def run_serial(scope: Scope, group: Any, settings: Optional[RunSettings] = None) -> None:
    """Deprecated alias of run_serially()."""
    warnings.warn(
        "run_serial() is deprecated, use run_serially()",
        DeprecationWarning,
        stacklevel=2,
    )
    run_serially(scope, group, settings=settings)


def run_parallel(scope: Scope, group: Any, settings: Optional[RunSettings] = None) -> None:
    """Deprecated alias of run_in_parallel()."""
    warnings.warn(
        "run_parallel() is deprecated, use run_in_parallel()",
        DeprecationWarning,
        stacklevel=2,
    )
    run_in_parallel(scope, group, settings=settings)


def main(name: str, fn: Callable[[T], None], settings: Optional[RunSettings] = None) -> Scope:
    """
    Run ``fn`` with a fresh ``T`` under a new root scope called ``name``.

    Entry point for callers without a host test runner. Returns the finished
    root scope; pass it to ``format_report`` for a readable summary.
    """
    return Scope.main(name, lambda scope: fn(T(scope, settings)))
