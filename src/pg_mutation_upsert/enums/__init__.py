# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enumerations for the upsert engine."""

from pg_mutation_upsert.enums.enum_conflict_action import EnumConflictAction
from pg_mutation_upsert.enums.enum_conflict_target_source import (
    EnumConflictTargetSource,
)
from pg_mutation_upsert.enums.enum_constraint_kind import EnumConstraintKind
from pg_mutation_upsert.enums.enum_omit_capability import EnumOmitCapability
from pg_mutation_upsert.enums.enum_on_conflict_update_value import (
    EnumOnConflictUpdateValue,
)
from pg_mutation_upsert.enums.enum_upsert_error_code import EnumUpsertErrorCode

__all__: list[str] = [
    "EnumConflictAction",
    "EnumConflictTargetSource",
    "EnumConstraintKind",
    "EnumOmitCapability",
    "EnumOnConflictUpdateValue",
    "EnumUpsertErrorCode",
]
