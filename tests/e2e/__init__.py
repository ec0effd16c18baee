# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end tests for testgroup.

These run real groups through the pytest plugin fixtures, the way a user
of the library would.
"""
