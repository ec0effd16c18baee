# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class RunMode(str, Enum):
    """Execution order policy for the tests of a group."""

    SERIAL = "serial"  # Lexicographic order, one test at a time
    PARALLEL = "parallel"  # All tests declared parallel to the host


class HookName(str, Enum):
    """
    Reserved lifecycle method names.

    A public method with one of these names is never treated as a test, and
    must have the same signature as a test method.
    """

    PRE_GROUP = "pre_group"
    POST_GROUP = "post_group"
    PRE_TEST = "pre_test"
    POST_TEST = "post_test"


class DiagnosticKind(str, Enum):
    """
    Categories of problems found while classifying a group.

    MIXED_RECEIVERS and NO_TESTS describe the group as a whole; the others
    are attributed to a single method.
    """

    MIXED_RECEIVERS = "mixed_receivers"
    BAD_HOOK_SIGNATURE = "bad_hook_signature"
    WRONG_CONTEXT_TYPE = "wrong_context_type"
    UNEXPECTED_SIGNATURE = "unexpected_signature"
    NO_TESTS = "no_tests"


class Outcome(str, Enum):
    """Final state of a finished scope, as shown in reports."""

    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"
