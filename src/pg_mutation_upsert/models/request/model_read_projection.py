# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Read projection applied to the upserted row."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.utils import quote_identifier


class ModelReadProjection(BaseModel):
    """Columns to return from the upserted row.

    The mutation runs as a CTE and the projection selects from it, so a
    single round trip both writes the row and shapes the result::

        WITH "__upserted" AS (INSERT ... RETURNING *)
        SELECT "id", "model" FROM "__upserted"
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    columns: tuple[str, ...] = Field(..., min_length=1)
    alias: str = Field(default="__upserted", min_length=1)

    def wrap(self, mutation_sql: str) -> str:
        """Wrap a ``RETURNING *`` mutation in the projecting query."""
        alias = quote_identifier(self.alias)
        select_list = ", ".join(quote_identifier(column) for column in self.columns)
        # S608: identifiers quoted, mutation text built by the statement builder
        return f"WITH {alias} AS ({mutation_sql}) SELECT {select_list} FROM {alias}"  # noqa: S608


__all__ = ["ModelReadProjection"]
