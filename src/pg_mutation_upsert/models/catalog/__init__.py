# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog snapshot models: relations, attributes and constraints."""

from pg_mutation_upsert.models.catalog.model_attribute import ModelAttribute
from pg_mutation_upsert.models.catalog.model_catalog_snapshot import (
    ModelCatalogSnapshot,
)
from pg_mutation_upsert.models.catalog.model_constraint import ModelConstraint
from pg_mutation_upsert.models.catalog.model_relation import ModelRelation

__all__: list[str] = [
    "ModelAttribute",
    "ModelCatalogSnapshot",
    "ModelConstraint",
    "ModelRelation",
]
