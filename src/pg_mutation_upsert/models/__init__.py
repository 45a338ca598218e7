# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pydantic models for the upsert engine.

Catalog models describe the schema snapshot, request models describe what
the caller asked for, and the remaining models carry the derived conflict
plan, the built statement and the returned payload.
"""

from pg_mutation_upsert.models.catalog import (
    ModelAttribute,
    ModelCatalogSnapshot,
    ModelConstraint,
    ModelRelation,
)
from pg_mutation_upsert.models.model_conflict_plan import (
    ModelConflictPlan,
    ModelPlannedColumn,
)
from pg_mutation_upsert.models.model_conflict_target import ModelConflictTarget
from pg_mutation_upsert.models.model_upsert_config import (
    ModelUpsertEngineConfig,
    ModelUpsertExecutorConfig,
)
from pg_mutation_upsert.models.model_upsert_payload import ModelUpsertPayload
from pg_mutation_upsert.models.model_upsert_statement import ModelUpsertStatement
from pg_mutation_upsert.models.request import (
    ModelReadProjection,
    ModelUpsertOnConflict,
    ModelUpsertRequest,
)

__all__: list[str] = [
    "ModelAttribute",
    "ModelCatalogSnapshot",
    "ModelConflictPlan",
    "ModelConflictTarget",
    "ModelConstraint",
    "ModelPlannedColumn",
    "ModelReadProjection",
    "ModelRelation",
    "ModelUpsertEngineConfig",
    "ModelUpsertExecutorConfig",
    "ModelUpsertOnConflict",
    "ModelUpsertPayload",
    "ModelUpsertRequest",
    "ModelUpsertStatement",
]
