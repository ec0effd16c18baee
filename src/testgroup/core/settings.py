# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import Field, field_validator

from .model import Model

DEFAULT_PARALLEL_PARENT_NAME = "_"


class RunSettings(Model):
    """
    Configuration for running a group.

    Settings are passed explicitly into the engine and carried by every
    capability context, so nested runs inherit the settings of the run that
    started them.

    Usage Examples:
        # Default: parallel tests appear as Test/_/A, Test/_/B
        settings = RunSettings()

        # Parallel tests appear as Test/parallel/A, Test/parallel/B
        settings = RunSettings(parallel_parent_name="parallel")
    """

    parallel_parent_name: str = Field(
        default=DEFAULT_PARALLEL_PARENT_NAME,
        min_length=1,
        description=(
            "Name of the intermediate scope that holds the tests of a group run "
            "in parallel. Only affects naming in output, not behavior."
        ),
    )

    @field_validator("parallel_parent_name")
    @classmethod
    def check_parallel_parent_name(cls, value: str) -> str:
        """Reject names that would be split into several scope levels."""
        if "/" in value:
            raise ValueError("parallel_parent_name must not contain '/'")
        if not value.strip():
            raise ValueError("parallel_parent_name must not be blank")
        return value
