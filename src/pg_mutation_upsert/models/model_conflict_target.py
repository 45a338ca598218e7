# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Conflict target resolution result."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.enums import EnumConflictTargetSource


class ModelConflictTarget(BaseModel):
    """The constraint chosen as ``ON CONFLICT`` target and how it was chosen.

    Attributes:
        constraint_name: Selected constraint (first fully matching candidate).
        source: Resolution step that produced the match.
        candidates: Every constraint that fully matched at that step, in
            declared order. More than one entry means the choice was made by
            declaration order alone; narrow the where clause to pick another.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    constraint_name: str = Field(..., min_length=1)
    source: EnumConflictTargetSource
    candidates: tuple[str, ...] = Field(..., min_length=1)

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1


__all__ = ["ModelConflictTarget"]
