# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Control-flow signals used to stop a running scope.

Both derive from BaseException so that test code catching ``Exception``
cannot accidentally swallow a fatal assertion or a skip. They are caught
only at the scope boundary by the host runner.
"""

from __future__ import annotations


class ScopeExit(BaseException):
    """Base class for signals that end the body of the current scope."""

    def __init__(self, scope_name: str):
        super().__init__(scope_name)
        self.scope_name = scope_name


class FailNow(ScopeExit):
    """Raised by fail_now(): the scope is failed and its body stops here."""


class SkipNow(ScopeExit):
    """Raised by skip_now(): the scope is skipped and its body stops here."""
