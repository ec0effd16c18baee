# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from testgroup.core import DiagnosticKind, HookName, Outcome, RunMode


def test_enum_member_values():
    """Test that key enum members have the correct string value."""
    assert RunMode.SERIAL == "serial"
    assert RunMode.PARALLEL == "parallel"
    assert Outcome.FAIL == "FAIL"
    assert DiagnosticKind.NO_TESTS == "no_tests"


def test_hook_names_are_the_reserved_method_names():
    """Test that the reserved hook set is exactly the four lifecycle methods."""
    assert {hook.value for hook in HookName} == {
        "pre_group",
        "post_group",
        "pre_test",
        "post_test",
    }


def test_run_mode_from_string():
    """Test that run modes can be built from their values."""
    assert RunMode("parallel") is RunMode.PARALLEL
