# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable models. Settings are shared by every scope of a run
    (including concurrently running tests), so they must never change in place.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",  # Catches typos in setting names immediately
    )
