# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert engine: conflict target resolution, reconciliation and SQL rendering."""

from pg_mutation_upsert.engine.column_reconciler import (
    caller_ignored_columns,
    reconcile,
)
from pg_mutation_upsert.engine.conflict_target_resolver import (
    resolve_conflict_target,
)
from pg_mutation_upsert.engine.statement_builder import build_statement
from pg_mutation_upsert.engine.upsert_engine import UpsertEngine

__all__: list[str] = [
    "UpsertEngine",
    "build_statement",
    "caller_ignored_columns",
    "reconcile",
    "resolve_conflict_target",
]
