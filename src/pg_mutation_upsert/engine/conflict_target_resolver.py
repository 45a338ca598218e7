# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Conflict target resolution.

Picks the unique or primary key constraint used as ``ON CONFLICT ON
CONSTRAINT`` target for one request. Constraints are scanned in
catalog-declared order and the first full match wins:

    1. where supplied (non-empty): first constraint whose every member
       column is a where key. No fallback; no match is an error.
    2. no where: first constraint whose every member column is an input
       column.
    3. no where and nothing matched in step 2: the primary key.

When several constraints match at the winning step the choice is made by
declaration order alone. Every match is returned in ``candidates`` and a
warning is logged, so callers can narrow their where clause.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from uuid import UUID

from pg_mutation_upsert.enums import EnumConflictTargetSource
from pg_mutation_upsert.errors import ModelUpsertErrorContext, NoMatchingConstraintError
from pg_mutation_upsert.models.catalog import ModelConstraint, ModelRelation
from pg_mutation_upsert.models.model_conflict_target import ModelConflictTarget

logger = logging.getLogger(__name__)


def _full_matches(
    member_names: Mapping[str, frozenset[str]],
    supplied: frozenset[str],
) -> tuple[str, ...]:
    return tuple(
        name for name, members in member_names.items() if members <= supplied
    )


def resolve_conflict_target(
    relation: ModelRelation,
    where: Mapping[str, object] | None,
    input_columns: Iterable[str],
    *,
    correlation_id: UUID | None = None,
) -> ModelConflictTarget:
    """Select the conflict target constraint for a request.

    Args:
        relation: Relation being upserted.
        where: Column name to match value. None and ``{}`` both mean
            "no where clause".
        input_columns: Column names present in the input.
        correlation_id: Request correlation ID for error context.

    Returns:
        The selected constraint with its resolution step and every
        constraint that matched at that step.

    Raises:
        CatalogConsistencyError: If any constraint references a position
            that is not a column of the relation. Checked for every
            constraint before matching starts.
        NoMatchingConstraintError: If no constraint qualifies.
    """
    # Resolve every constraint up front so a broken snapshot aborts
    # regardless of which constraint would have matched.
    member_names: dict[str, frozenset[str]] = {}
    constraints_by_name: dict[str, ModelConstraint] = {}
    for constraint in relation.constraints:
        columns = relation.constraint_columns(constraint)
        member_names[constraint.name] = frozenset(col.name for col in columns)
        constraints_by_name[constraint.name] = constraint

    input_names = tuple(input_columns)

    if where:
        source = EnumConflictTargetSource.WHERE
        attempted = tuple(where)
        candidates = _full_matches(member_names, frozenset(where))
    else:
        source = EnumConflictTargetSource.INPUT
        attempted = input_names
        candidates = _full_matches(member_names, frozenset(input_names))
        if not candidates:
            primary_key = relation.primary_key_constraint
            if primary_key is not None and primary_key.name in constraints_by_name:
                source = EnumConflictTargetSource.PRIMARY_KEY
                candidates = (primary_key.name,)

    if not candidates:
        raise NoMatchingConstraintError(
            attempted,
            context=ModelUpsertErrorContext(
                operation="resolve_conflict_target",
                relation=relation.qualified_name,
                correlation_id=correlation_id,
            ),
        )

    target = ModelConflictTarget(
        constraint_name=candidates[0],
        source=source,
        candidates=candidates,
    )

    if target.is_ambiguous:
        logger.warning(
            "Ambiguous conflict target for %s: %s matched, using %s",
            relation.qualified_name,
            ", ".join(candidates),
            target.constraint_name,
            extra={
                "relation": relation.qualified_name,
                "constraint": target.constraint_name,
                "candidates": list(candidates),
                "source": source.value,
                "correlation_id": str(correlation_id) if correlation_id else None,
            },
        )

    return target


__all__ = ["resolve_conflict_target"]
