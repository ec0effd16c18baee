# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
pytest integration.

Registered through the ``pytest11`` entry point, so installing the package
is enough to get the fixtures:

    def test_cache(group_runner):
        group_runner.run_in_parallel(CacheTests())

Each run executes the group under a root scope named after the pytest test.
A failed root becomes ``pytest.fail`` with the scope report as message, and
a skipped root becomes ``pytest.skip``.

Configuration (pytest.ini / pyproject.toml):

    [tool.pytest.ini_options]
    testgroup_parallel_parent_name = "parallel"
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import pytest

from .core import DEFAULT_PARALLEL_PARENT_NAME, RunMode, RunSettings
from .engine import run
from .host import Scope, format_report

logger = logging.getLogger(__name__)

PARALLEL_PARENT_NAME_INI = "testgroup_parallel_parent_name"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        PARALLEL_PARENT_NAME_INI,
        help="Name of the intermediate scope of groups run in parallel.",
        default=DEFAULT_PARALLEL_PARENT_NAME,
    )


class GroupRunner:
    """Runs groups on behalf of one pytest test."""

    def __init__(self, name: str, settings: RunSettings):
        self.name = name
        self.settings = settings
        self.last_scope: Optional[Scope] = None

    def run_serially(self, group: Any) -> Scope:
        return self._run(RunMode.SERIAL, group)

    def run_in_parallel(self, group: Any) -> Scope:
        return self._run(RunMode.PARALLEL, group)

    def _run(self, mode: RunMode, group: Any) -> Scope:
        scope = Scope.main(
            self.name, lambda root: run(root, mode, group, settings=self.settings)
        )
        self.last_scope = scope
        logger.debug("%s finished: %s", scope.name, scope.outcome.value)

        if scope.failed:
            pytest.fail(format_report(scope, only_failures=True), pytrace=False)
        if scope.skipped:
            reason = scope.messages[-1] if scope.messages else f"{scope.name} skipped"
            pytest.skip(reason)
        return scope


@pytest.fixture
def group_settings(request: pytest.FixtureRequest) -> RunSettings:
    """RunSettings built from the pytest configuration."""
    return RunSettings(
        parallel_parent_name=request.config.getini(PARALLEL_PARENT_NAME_INI)
    )


@pytest.fixture
def group_runner(request: pytest.FixtureRequest, group_settings: RunSettings) -> GroupRunner:
    """Runner whose root scopes are named after the requesting test."""
    return GroupRunner(request.node.name, group_settings)
