# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for testgroup components.

Groups are run under root scopes created with Scope.main, so a group that is
expected to fail can be asserted on without failing the surrounding test.
"""
