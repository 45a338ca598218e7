# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Request-side models: upsert request, conflict tuning and read projection."""

from pg_mutation_upsert.models.request.model_read_projection import (
    ModelReadProjection,
)
from pg_mutation_upsert.models.request.model_upsert_on_conflict import (
    ModelUpsertOnConflict,
)
from pg_mutation_upsert.models.request.model_upsert_request import ModelUpsertRequest

__all__: list[str] = [
    "ModelReadProjection",
    "ModelUpsertOnConflict",
    "ModelUpsertRequest",
]
