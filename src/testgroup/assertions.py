# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Assertion helpers bound to a scope.

Assertions reuses the comparison and diff logic of ``unittest.TestCase`` but
reports failures through a Scope instead of raising. Two flavours exist:

- non-fatal (the methods available directly on ``T``): the failure is
  recorded, the method returns False and the test keeps going;
- fatal (``t.require``): the failure is recorded and the scope stops
  immediately via ``fail_now()``.

Every method returns True when the check passed.
"""

from __future__ import annotations

import contextlib
import os
import traceback
import unittest
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Type

from .host import Scope, ScopeExit

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep
_CONTEXTLIB_FILE = os.path.abspath(contextlib.__file__)


class _Checker(unittest.TestCase):
    """TestCase used only for its assert* methods."""

    maxDiff = None

    def runTest(self) -> None:  # pragma: no cover - never run as a test
        pass


def _caller_location() -> str:
    """file:line of the first frame outside this package."""
    for frame in reversed(traceback.extract_stack()):
        filename = os.path.abspath(frame.filename)
        if filename != _CONTEXTLIB_FILE and not filename.startswith(_PACKAGE_DIR):
            return f"{os.path.basename(frame.filename)}:{frame.lineno}"
    return "<unknown>"


class Assertions:
    """
    Assertion methods reporting to ``scope``.

    Args:
        scope: Scope that failures are recorded against
        fatal: Stop the scope on the first failed check
    """

    def __init__(self, scope: Scope, fatal: bool = False):
        self._scope = scope
        self._fatal = fatal
        self._checker = _Checker()

    def _report(self, message: str, msg: Optional[str]) -> bool:
        text = f"{_caller_location()}: {message}"
        if msg:
            text = f"{text}\nMessages: {msg}"
        self._scope.error(text)
        if self._fatal:
            self._scope.fail_now()
        return False

    def _check(self, assertion: Callable[..., None], *args: Any, msg: Optional[str] = None, **kwargs: Any) -> bool:
        try:
            assertion(*args, **kwargs)
        except self._checker.failureException as exc:
            return self._report(str(exc), msg)
        return True

    # --- Equality ---------------------------------------------------------

    def equal(self, expected: Any, actual: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertEqual, expected, actual, msg=msg)

    def not_equal(self, expected: Any, actual: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertNotEqual, expected, actual, msg=msg)

    def almost_equal(
        self,
        expected: float,
        actual: float,
        places: Optional[int] = None,
        delta: Optional[float] = None,
        msg: Optional[str] = None,
    ) -> bool:
        return self._check(
            self._checker.assertAlmostEqual, expected, actual, places=places, delta=delta, msg=msg
        )

    def count_equal(self, expected: Any, actual: Any, msg: Optional[str] = None) -> bool:
        """Same elements in any order."""
        return self._check(self._checker.assertCountEqual, expected, actual, msg=msg)

    # --- Truth and identity -----------------------------------------------

    def true(self, value: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertTrue, value, msg=msg)

    def false(self, value: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertFalse, value, msg=msg)

    def is_none(self, value: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertIsNone, value, msg=msg)

    def is_not_none(self, value: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertIsNotNone, value, msg=msg)

    def is_instance(self, value: Any, cls: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertIsInstance, value, cls, msg=msg)

    # --- Containers -------------------------------------------------------

    def contains(self, container: Any, member: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertIn, member, container, msg=msg)

    def not_contains(self, container: Any, member: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertNotIn, member, container, msg=msg)

    def length(self, container: Any, expected: int, msg: Optional[str] = None) -> bool:
        try:
            actual = len(container)
        except TypeError:
            return self._report(f"{container!r} has no length", msg)
        if actual != expected:
            return self._report(
                f"{container!r} should have {expected} item(s), but has {actual}", msg
            )
        return True

    def empty(self, container: Any, msg: Optional[str] = None) -> bool:
        if container:
            return self._report(f"should be empty, but was {container!r}", msg)
        return True

    def not_empty(self, container: Any, msg: Optional[str] = None) -> bool:
        if not container:
            return self._report(f"should not be empty, but was {container!r}", msg)
        return True

    def regex(self, text: str, pattern: str, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertRegex, text, pattern, msg=msg)

    # --- Ordering ---------------------------------------------------------

    def greater(self, first: Any, second: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertGreater, first, second, msg=msg)

    def greater_or_equal(self, first: Any, second: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertGreaterEqual, first, second, msg=msg)

    def less(self, first: Any, second: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertLess, first, second, msg=msg)

    def less_or_equal(self, first: Any, second: Any, msg: Optional[str] = None) -> bool:
        return self._check(self._checker.assertLessEqual, first, second, msg=msg)

    # --- Exceptions -------------------------------------------------------

    @contextmanager
    def raises(self, expected: Type[BaseException], msg: Optional[str] = None) -> Iterator[None]:
        """
        Check that the ``with`` body raises ``expected``.

        The expected exception is swallowed; any other exception propagates.
        """
        try:
            yield
        except ScopeExit:
            raise
        except expected:
            return
        self._report(f"{expected.__name__} not raised", msg)
