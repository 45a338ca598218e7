# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog attribute (column) model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.enums import EnumOmitCapability
from pg_mutation_upsert.utils import camel_case


class ModelAttribute(BaseModel):
    """One column of a relation as seen in the catalog snapshot.

    ``type_id``, ``type_name`` and ``type_modifier`` are opaque to the
    engine; they are only handed to value coercion.

    Attributes:
        name: Column name.
        num: Declared-order position (``pg_attribute.attnum``), starting at 1.
        type_name: ``pg_type.typname`` (``int4``, ``varchar``, ``float4``).
        type_id: Type OID when loaded from a live database.
        type_modifier: ``atttypmod``, None when the type is unconstrained.
        omit: Capabilities withdrawn from this column by smart comments.
        comment: Column comment with smart tags, if any.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(..., min_length=1, description="Column name")
    num: int = Field(..., ge=1, description="Declared-order position")
    type_name: str = Field(..., min_length=1, description="pg_type.typname")
    type_id: int | None = Field(default=None, description="Type OID")
    type_modifier: int | None = Field(default=None, description="atttypmod")
    omit: frozenset[EnumOmitCapability] = Field(
        default_factory=frozenset,
        description="Capabilities withdrawn by @omit smart comments",
    )
    comment: str | None = Field(default=None, description="Column comment")

    @property
    def field_name(self) -> str:
        """Client-facing camelCase field name for this column."""
        return camel_case(self.name)


__all__ = ["ModelAttribute"]
