# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Hierarchical Test Scopes

This module provides Scope, the host test-runner handle that every group
and every test runs under. A scope is a named node in a tree of results:
it can be failed, skipped and logged to, and it can start child scopes.

Concurrency model:
    - ``run(name, fn)`` starts a child scope on its own thread and blocks
      until the child finishes or declares itself parallel.
    - ``parallel()`` (called from inside the child) releases the waiting
      parent, then pauses the child until the parent's body has returned.
    - When a scope's body returns, it resumes its paused parallel children
      and waits for every child to finish before it is itself finished.

The last rule is the only synchronization barrier the execution engine
relies on: wrapping parallel children in one intermediate ``run`` call
blocks until all of them are done.

Example:
    ```python
    from testgroup.host import Scope

    def body(scope):
        scope.run("fast", lambda s: s.log("ran"))
        scope.run("broken", lambda s: s.error("nope"))

    root = Scope.main("Example", body)
    assert root.failed
    ```
"""

from __future__ import annotations

import logging
import sys
import threading
import time
import traceback
from typing import Callable, Dict, List, Optional

from ..core import Outcome
from .outcomes import FailNow, SkipNow

logger = logging.getLogger(__name__)

SEPARATOR = "/"


def _is_pytest_skip(exc: BaseException) -> bool:
    """True for the exception raised by pytest.skip(), if pytest is loaded."""
    pytest = sys.modules.get("pytest")
    return pytest is not None and isinstance(exc, pytest.skip.Exception)


def _rewrite(name: str) -> str:
    """Normalize a subtest name so it stays on one line and one level."""
    if not name:
        return "#00"
    return "".join("_" if ch.isspace() else ch for ch in name)


class Scope:
    """
    A named, hierarchical test result.

    Scopes are created by the host (``Scope.main``) or by a parent
    (``Scope.run``); authors never construct them directly.
    """

    def __init__(self, name: str, parent: Optional["Scope"] = None):
        self._parent = parent
        self._base_name = name
        self._name = name if parent is None else f"{parent.name}{SEPARATOR}{name}"
        self._lock = threading.RLock()

        self._failed = False
        self._skipped = False
        self._finished = False
        self._is_parallel = False
        self._messages: List[str] = []
        self._children: List[Scope] = []
        self._seen_names: Dict[str, int] = {}

        self._started_at: Optional[float] = None
        self._duration = 0.0

        # Set once the parent may stop waiting in run(): on parallel() or finish
        self._signal = threading.Event()
        # Set when this scope's own body has returned; resumes parallel children
        self._release = threading.Event()
        self._done = threading.Event()

    # --- Construction -----------------------------------------------------

    @classmethod
    def main(cls, name: str, fn: Callable[["Scope"], None]) -> "Scope":
        """
        Run ``fn`` under a new root scope on the calling thread.

        Returns the finished scope; all children (including parallel ones)
        have completed by the time this returns.
        """
        root = cls(_rewrite(name))
        logger.debug("=== RUN   %s", root.name)
        root._execute(fn)
        return root

    # --- State ------------------------------------------------------------

    @property
    def name(self) -> str:
        """Full slash-separated name of this scope."""
        return self._name

    @property
    def base_name(self) -> str:
        return self._base_name

    @property
    def parent(self) -> Optional["Scope"]:
        return self._parent

    @property
    def children(self) -> List["Scope"]:
        with self._lock:
            return list(self._children)

    @property
    def messages(self) -> List[str]:
        with self._lock:
            return list(self._messages)

    @property
    def failed(self) -> bool:
        with self._lock:
            return self._failed

    @property
    def skipped(self) -> bool:
        with self._lock:
            return self._skipped

    @property
    def finished(self) -> bool:
        with self._lock:
            return self._finished

    @property
    def is_parallel(self) -> bool:
        return self._is_parallel

    @property
    def duration(self) -> float:
        """Wall-clock seconds the scope took, including its children."""
        return self._duration

    @property
    def outcome(self) -> Outcome:
        if self.failed:
            return Outcome.FAIL
        if self.skipped:
            return Outcome.SKIP
        return Outcome.PASS

    # --- Reporting --------------------------------------------------------

    def log(self, *args: object) -> None:
        """Record a message against this scope."""
        message = " ".join(str(arg) for arg in args)
        with self._lock:
            self._messages.append(message)
        logger.debug("%s: %s", self._name, message)

    def fail(self) -> None:
        """Mark the scope failed but keep running."""
        with self._lock:
            self._failed = True

    def fail_now(self) -> None:
        """Mark the scope failed and stop its body."""
        self.fail()
        raise FailNow(self._name)

    def error(self, *args: object) -> None:
        """log() followed by fail()."""
        self.log(*args)
        self.fail()

    def fatal(self, *args: object) -> None:
        """log() followed by fail_now()."""
        self.log(*args)
        self.fail_now()

    def skip_now(self) -> None:
        """Mark the scope skipped and stop its body."""
        with self._lock:
            self._skipped = True
        raise SkipNow(self._name)

    def skip(self, *args: object) -> None:
        """log() followed by skip_now()."""
        self.log(*args)
        self.skip_now()

    # --- Children ---------------------------------------------------------

    def _unique_name(self, name: str) -> str:
        name = _rewrite(name)
        with self._lock:
            count = self._seen_names.get(name, 0)
            self._seen_names[name] = count + 1
        if count == 0:
            return name
        return f"{name}#{count:02d}"

    def run(self, name: str, fn: Callable[["Scope"], None]) -> bool:
        """
        Run ``fn`` in a new child scope called ``name``.

        Blocks until the child finishes or calls ``parallel()``. Returns
        False if the child already failed by then, True otherwise.
        """
        with self._lock:
            if self._finished:
                raise RuntimeError(
                    f"testgroup: run({name!r}) called on finished scope {self._name}"
                )
            child = Scope(self._unique_name(name), parent=self)
            self._children.append(child)

        logger.debug("=== RUN   %s", child.name)
        thread = threading.Thread(
            target=child._execute, args=(fn,), name=child.name, daemon=True
        )
        thread.start()
        child._signal.wait()

        if not child.is_parallel:
            thread.join()
        return not child.failed

    def parallel(self) -> None:
        """
        Declare that this scope may run concurrently with its siblings.

        Must be called from the scope's own body. Returns once the parent's
        body has finished starting children.
        """
        if self._parent is None:
            raise RuntimeError(f"testgroup: root scope {self._name} cannot run in parallel")
        if self._is_parallel:
            raise RuntimeError(
                f"testgroup: parallel() called multiple times on {self._name}"
            )
        self._is_parallel = True
        logger.debug("=== PAUSE %s", self._name)
        self._signal.set()
        self._parent._release.wait()
        logger.debug("=== CONT  %s", self._name)

    # --- Execution --------------------------------------------------------

    def _execute(self, fn: Callable[["Scope"], None]) -> None:
        self._started_at = time.perf_counter()
        try:
            fn(self)
        except FailNow:
            pass
        except SkipNow:
            pass
        except Exception as exc:  # A crash ends this scope only
            self.error(
                f"panic: {exc!r}\n"
                + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            )
            logger.debug("%s raised %r", self._name, exc)
        except KeyboardInterrupt:
            raise
        except BaseException as exc:  # pytest.fail(), pytest.skip(), sys.exit()
            if _is_pytest_skip(exc):
                self.log(str(exc))
                with self._lock:
                    self._skipped = True
            else:
                self.error(f"{type(exc).__name__}: {exc}")
            logger.debug("%s raised %r", self._name, exc)
        finally:
            self._finish()

    def _finish(self) -> None:
        self._release.set()
        for child in self.children:
            child._done.wait()

        with self._lock:
            self._finished = True
            self._duration = time.perf_counter() - (self._started_at or 0.0)
            failed = self._failed

        if failed and self._parent is not None:
            self._parent.fail()

        logger.debug("--- %s: %s (%.2fs)", self.outcome.value, self._name, self._duration)
        self._done.set()
        self._signal.set()

    def __repr__(self) -> str:
        return f"Scope({self._name!r}, outcome={self.outcome.value})"
