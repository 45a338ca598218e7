# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog snapshot model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.models.catalog.model_relation import ModelRelation


class ModelCatalogSnapshot(BaseModel):
    """Immutable point-in-time view of every introspected relation.

    The snapshot is passed explicitly into every engine call; there is no
    process-wide catalog. Rebuild it wholesale when the schema changes.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    relations: tuple[ModelRelation, ...] = Field(
        default=(),
        description="Relations in introspection order",
    )

    def get_relation(self, namespace: str | None, name: str) -> ModelRelation | None:
        """Find a relation by namespace and name.

        Args:
            namespace: Schema name. None matches on ``name`` alone and
                returns the first relation with that name.
            name: Relation name.

        Returns:
            The relation, or None if the snapshot has no such relation.
        """
        for relation in self.relations:
            if relation.name != name:
                continue
            if namespace is None or relation.namespace == namespace:
                return relation
        return None

    def upsertable_relations(self) -> tuple[ModelRelation, ...]:
        """Relations eligible for an upsert mutation, in snapshot order."""
        return tuple(relation for relation in self.relations if relation.is_upsertable)


__all__ = ["ModelCatalogSnapshot"]
