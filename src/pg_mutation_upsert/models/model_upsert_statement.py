# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Built upsert statement."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.enums import EnumConflictAction


class ModelUpsertStatement(BaseModel):
    """SQL text plus ordered parameters, ready for the execution adapter.

    Attributes:
        sql: Statement text; every value is a ``$n`` placeholder.
        params: Values for ``$1..$n`` in order.
        columns: Inserted column names, in the same order as ``params``.
        constraint_name: Conflict target, None for DEFAULT VALUES.
        conflict_action: Rendered conflict action.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    sql: str = Field(..., min_length=1)
    params: tuple[object, ...] = Field(default=())
    columns: tuple[str, ...] = Field(default=())
    constraint_name: str | None = Field(default=None)
    conflict_action: EnumConflictAction = Field(default=EnumConflictAction.NONE)


__all__ = ["ModelUpsertStatement"]
