# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Optional lifecycle capabilities of a group.

A group implements a hook simply by defining the method; these protocols let
the engine (and type checkers) ask whether it did.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .context import T


@runtime_checkable
class PreGrouper(Protocol):
    def pre_group(self, t: "T") -> None:
        """Runs once, before any test of the group."""


@runtime_checkable
class PostGrouper(Protocol):
    def post_group(self, t: "T") -> None:
        """Runs once, after every test of the group has finished."""


@runtime_checkable
class PreTester(Protocol):
    def pre_test(self, t: "T") -> None:
        """Runs before each test, with that test's context."""


@runtime_checkable
class PostTester(Protocol):
    def post_test(self, t: "T") -> None:
        """Runs after each test, even if it failed or was skipped."""
