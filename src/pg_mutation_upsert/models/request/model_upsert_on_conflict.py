# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query-defined conflict resolution tuning model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.enums import EnumOnConflictUpdateValue


class ModelUpsertOnConflict(BaseModel):
    """Per-request override of the conflict action.

    Only honoured when the engine is configured with
    ``enable_query_defined_conflict_resolution_tuning``.

    Attributes:
        do_nothing: Emit ``DO NOTHING`` regardless of assignments.
        do_update: Column name to replacement choice. ``IGNORE`` keeps the
            stored value; ``CURRENT_TIMESTAMP`` assigns the current time.

    Example:
        >>> ModelUpsertOnConflict(
        ...     do_update={
        ...         "name": EnumOnConflictUpdateValue.IGNORE,
        ...         "updated": EnumOnConflictUpdateValue.CURRENT_TIMESTAMP,
        ...     }
        ... )
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    do_nothing: bool = Field(default=False)
    do_update: dict[str, EnumOnConflictUpdateValue] = Field(default_factory=dict)

    def columns_with(self, value: EnumOnConflictUpdateValue) -> frozenset[str]:
        """Column names mapped to the given choice."""
        return frozenset(
            column for column, choice in self.do_update.items() if choice is value
        )


__all__ = ["ModelUpsertOnConflict"]
