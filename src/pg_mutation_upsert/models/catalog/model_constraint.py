# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog unique/primary constraint model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.enums import EnumConstraintKind


class ModelConstraint(BaseModel):
    """A unique or primary key constraint of a relation.

    Member positions refer to ``ModelAttribute.num`` of the owning relation.
    That they all resolve is a catalog invariant checked when the constraint
    is used (see ``ModelRelation.constraint_columns``).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(..., min_length=1, description="Constraint name")
    kind: EnumConstraintKind = Field(..., description="Primary or unique")
    key_attribute_nums: tuple[int, ...] = Field(
        ...,
        min_length=1,
        description="Ordered member attribute positions (pg_constraint.conkey)",
    )

    @property
    def is_primary_key(self) -> bool:
        return self.kind is EnumConstraintKind.PRIMARY


__all__ = ["ModelConstraint"]
