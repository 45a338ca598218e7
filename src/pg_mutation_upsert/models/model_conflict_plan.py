# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Conflict plan: the reconciled insert payload for one request.

Plans are created fresh per request by the reconciler and discarded once
the statement is built. Nothing is cached between requests.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelPlannedColumn(BaseModel):
    """One column of the insert list.

    Attributes:
        name: Column name.
        value: Coerced value to bind.
        update_excluded: True when the column must not appear in the
            conflict-update assignment list.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str
    value: object = None
    update_excluded: bool = False


class ModelConflictPlan(BaseModel):
    """Reconciled columns and conflict behaviour for one upsert.

    Attributes:
        constraint_name: Conflict target constraint.
        columns: Insert columns in declared order (not input order).
        timestamp_columns: Columns assigned CURRENT_TIMESTAMP on conflict,
            in declared order, whether or not they are inserted.
        force_do_nothing: The request asked for DO NOTHING explicitly.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    constraint_name: str = Field(..., min_length=1)
    columns: tuple[ModelPlannedColumn, ...] = Field(default=())
    timestamp_columns: tuple[str, ...] = Field(default=())
    force_do_nothing: bool = Field(default=False)

    @property
    def is_default_values(self) -> bool:
        """True when nothing qualifies for the insert list."""
        return not self.columns

    def update_columns(self) -> tuple[str, ...]:
        """Inserted columns that take ``excluded.<col>`` on conflict."""
        timestamped = set(self.timestamp_columns)
        return tuple(
            column.name
            for column in self.columns
            if not column.update_excluded and column.name not in timestamped
        )


__all__ = ["ModelConflictPlan", "ModelPlannedColumn"]
