# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert statement builder.

Renders a ModelConflictPlan into one of two statement shapes::

    INSERT INTO "ns"."t" ("a", "b") VALUES ($1, $2)
        ON CONFLICT ON CONSTRAINT "c" DO UPDATE SET "a" = excluded."a"
        RETURNING *

    INSERT INTO "ns"."t" DEFAULT VALUES RETURNING *

The statement is emitted on a single line. Every identifier goes through
quote_identifier and every value is a ``$n`` placeholder; no request text
is ever interpolated. A conflict clause with zero assignments is invalid
SQL, so it becomes ``DO NOTHING``.
"""

from __future__ import annotations

from pg_mutation_upsert.enums import EnumConflictAction, EnumOnConflictUpdateValue
from pg_mutation_upsert.errors import UpsertNotSupportedError
from pg_mutation_upsert.models.catalog import ModelRelation
from pg_mutation_upsert.models.model_conflict_plan import ModelConflictPlan
from pg_mutation_upsert.models.model_upsert_statement import ModelUpsertStatement
from pg_mutation_upsert.utils import quote_identifier, quote_qualified_name


def _assignments(plan: ModelConflictPlan) -> list[str]:
    assignments = [
        f"{quote_identifier(name)} = excluded.{quote_identifier(name)}"
        for name in plan.update_columns()
    ]
    timestamp = EnumOnConflictUpdateValue.CURRENT_TIMESTAMP.sql_expression
    assignments.extend(
        f"{quote_identifier(name)} = {timestamp}" for name in plan.timestamp_columns
    )
    return assignments


def build_statement(
    relation: ModelRelation,
    plan: ModelConflictPlan,
) -> ModelUpsertStatement:
    """Render the upsert statement for a plan.

    Args:
        relation: Relation being upserted; must have a namespace.
        plan: Reconciled conflict plan.

    Returns:
        Statement text with ordered parameters.

    Raises:
        UpsertNotSupportedError: If the relation has no namespace.
    """
    if relation.namespace is None:
        raise UpsertNotSupportedError(
            f"Relation {relation.name} has no namespace",
            relation=relation.name,
        )
    target = quote_qualified_name(relation.namespace, relation.name)

    if plan.is_default_values:
        # S608: identifiers quoted, no values interpolated
        return ModelUpsertStatement(
            sql=f"INSERT INTO {target} DEFAULT VALUES RETURNING *",  # noqa: S608
        )

    names = [column.name for column in plan.columns]
    column_list = ", ".join(quote_identifier(name) for name in names)
    placeholders = ", ".join(f"${index}" for index in range(1, len(names) + 1))
    constraint = quote_identifier(plan.constraint_name)

    assignments = [] if plan.force_do_nothing else _assignments(plan)
    if assignments:
        action = EnumConflictAction.DO_UPDATE
        conflict_clause = f"DO UPDATE SET {', '.join(assignments)}"
    else:
        action = EnumConflictAction.DO_NOTHING
        conflict_clause = "DO NOTHING"

    # S608: identifiers quoted, values bound as $n parameters
    sql = (
        f"INSERT INTO {target} ({column_list}) VALUES ({placeholders}) "  # noqa: S608
        f"ON CONFLICT ON CONSTRAINT {constraint} {conflict_clause} RETURNING *"
    )
    return ModelUpsertStatement(
        sql=sql,
        params=tuple(column.value for column in plan.columns),
        columns=tuple(names),
        constraint_name=plan.constraint_name,
        conflict_action=action,
    )


__all__ = ["build_statement"]
