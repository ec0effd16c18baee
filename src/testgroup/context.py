# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Capability context passed to every hook and test.

``T`` bundles the reporting handle of the current scope with assertion
helpers, and lets a running test start nested subtests and nested groups.
A new ``T`` is created for every invocation; shared state belongs on the
group, never on the context.

Example:
    ```python
    class AbsTests:
        def keeps_positive_numbers(self, t: T) -> None:
            t.equal(1, abs(1))

        def flips_negative_numbers(self, t: T) -> None:
            t.require.equal(1, abs(-1))
            t.run("zero", lambda t: t.equal(0, abs(0)))
    ```
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .assertions import Assertions
from .core import RunSettings
from .host import Scope


class T(Assertions):
    """
    Per-invocation context: scope handle plus assertions.

    Non-fatal assertions are available directly (``t.equal(...)``); their
    fatal counterparts live on ``t.require``.
    """

    def __init__(self, scope: Scope, settings: Optional[RunSettings] = None):
        super().__init__(scope)
        self.scope = scope
        self.settings = settings if settings is not None else RunSettings()
        self.require = Assertions(scope, fatal=True)

    # --- Scope state ------------------------------------------------------

    @property
    def name(self) -> str:
        return self.scope.name

    @property
    def failed(self) -> bool:
        return self.scope.failed

    @property
    def skipped(self) -> bool:
        return self.scope.skipped

    def log(self, *args: Any) -> None:
        self.scope.log(*args)

    def error(self, *args: Any) -> None:
        self.scope.error(*args)

    def fatal(self, *args: Any) -> None:
        self.scope.fatal(*args)

    def fail(self) -> None:
        self.scope.fail()

    def fail_now(self) -> None:
        self.scope.fail_now()

    def skip(self, *args: Any) -> None:
        self.scope.skip(*args)

    def skip_now(self) -> None:
        self.scope.skip_now()

    # --- Nested invocation ------------------------------------------------

    def run(self, name: str, fn: Callable[["T"], None]) -> bool:
        """
        Run ``fn`` as a subtest called ``name`` with its own fresh context.

        Returns False if the subtest failed.
        """
        settings = self.settings
        return self.scope.run(name, lambda scope: fn(T(scope, settings)))

    def run_serially(self, group: Any) -> None:
        """Run the tests of ``group`` one at a time, as subtests of this test."""
        from .engine import run_serially

        run_serially(self.scope, group, settings=self.settings)

    def run_in_parallel(self, group: Any) -> None:
        """Run the tests of ``group`` concurrently and wait for all of them."""
        from .engine import run_in_parallel

        run_in_parallel(self.scope, group, settings=self.settings)

    def __repr__(self) -> str:
        return f"T({self.name!r})"
