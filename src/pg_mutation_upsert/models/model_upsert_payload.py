# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert mutation payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelUpsertPayload(BaseModel):
    """Result of one upsert.

    Attributes:
        client_mutation_id: The exact token supplied in the request,
            unchanged and unused.
        row: The upserted row (or its projection). None only when the
            statement resolved to DO NOTHING against an existing row.
        constraint_name: Conflict target used, None for DEFAULT VALUES.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    client_mutation_id: str | None = Field(default=None)
    row: dict[str, object] | None = Field(default=None)
    constraint_name: str | None = Field(default=None)


__all__ = ["ModelUpsertPayload"]
