# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
testgroup test suite.

Unit tests cover each layer on its own (settings, host scopes, assertions,
classifier, engine); end-to-end tests run groups through the pytest plugin.
"""
