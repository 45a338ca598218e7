# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Runtime adapters: PostgreSQL execution and the upsert service."""

from pg_mutation_upsert.runtime.upsert_executor_postgres import (
    UpsertExecutorPostgres,
)
from pg_mutation_upsert.runtime.upsert_service import UpsertService

__all__: list[str] = ["UpsertExecutorPostgres", "UpsertService"]
