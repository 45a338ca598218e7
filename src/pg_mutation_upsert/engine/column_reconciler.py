# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Column/value reconciliation.

Merges a request's where values and input values into the ordered insert
list of a ModelConflictPlan. Walks the relation's columns in declared
order, so the insert list never depends on the order of the request
mappings.

Per column:
    - input value present: checked against the where value (if any) and
      inserted. A contradiction raises ValueMismatchError.
    - only a where value present: the where value is inserted.
    - neither: the column is left out and takes its default.

Whether an inserted column is excluded from the conflict-update list is a
pure function of three predicates: the column omits ``update``, the column
omits ``updateOnConflict``, or the caller ignores it.
"""

from __future__ import annotations

from uuid import UUID

from pg_mutation_upsert.enums import EnumOmitCapability, EnumOnConflictUpdateValue
from pg_mutation_upsert.errors import ModelUpsertErrorContext, ValueMismatchError
from pg_mutation_upsert.models.catalog import ModelAttribute, ModelRelation
from pg_mutation_upsert.models.model_conflict_plan import (
    ModelConflictPlan,
    ModelPlannedColumn,
)
from pg_mutation_upsert.models.request import ModelUpsertRequest
from pg_mutation_upsert.utils import coerce_value, values_match


def _schema_excludes_update(relation: ModelRelation, attr: ModelAttribute) -> bool:
    return relation.omits(attr, EnumOmitCapability.UPDATE) or relation.omits(
        attr, EnumOmitCapability.UPDATE_ON_CONFLICT
    )


def caller_ignored_columns(request: ModelUpsertRequest) -> frozenset[str]:
    """The request's ignore set plus columns tuned to ``IGNORE``."""
    if request.on_conflict is None:
        return request.ignore
    return request.ignore | request.on_conflict.columns_with(
        EnumOnConflictUpdateValue.IGNORE
    )


def reconcile(
    relation: ModelRelation,
    request: ModelUpsertRequest,
    constraint_name: str,
    *,
    correlation_id: UUID | None = None,
) -> ModelConflictPlan:
    """Build the conflict plan for a request against a resolved target.

    Args:
        relation: Relation being upserted.
        request: Validated request.
        constraint_name: Conflict target chosen by the resolver.
        correlation_id: Request correlation ID for error context.

    Returns:
        Plan with insert columns in declared order.

    Raises:
        ValueMismatchError: If an input value differs from the where value
            for the same column after coercion.
    """
    where = request.where or {}
    ignored = caller_ignored_columns(request)
    timestamped = (
        request.on_conflict.columns_with(EnumOnConflictUpdateValue.CURRENT_TIMESTAMP)
        if request.on_conflict is not None
        else frozenset()
    )

    columns: list[ModelPlannedColumn] = []
    timestamp_columns: list[str] = []

    for attr in relation.attributes_in_order():
        update_excluded = (
            _schema_excludes_update(relation, attr) or attr.name in ignored
        )

        if attr.name in timestamped and not update_excluded:
            timestamp_columns.append(attr.name)

        has_where_value = attr.name in where
        where_value = (
            coerce_value(where[attr.name], attr.type_name, attr.type_modifier)
            if has_where_value
            else None
        )

        if attr.name in request.input:
            value = coerce_value(
                request.input[attr.name], attr.type_name, attr.type_modifier
            )
            if has_where_value and not values_match(where_value, value):
                raise ValueMismatchError(
                    attr.name,
                    context=ModelUpsertErrorContext(
                        operation="reconcile",
                        relation=relation.qualified_name,
                        constraint=constraint_name,
                        correlation_id=correlation_id,
                    ),
                )
        elif has_where_value:
            value = where_value
        else:
            continue

        columns.append(
            ModelPlannedColumn(
                name=attr.name,
                value=value,
                update_excluded=update_excluded,
            )
        )

    return ModelConflictPlan(
        constraint_name=constraint_name,
        columns=tuple(columns),
        timestamp_columns=tuple(timestamp_columns),
        force_do_nothing=(
            request.on_conflict is not None and request.on_conflict.do_nothing
        ),
    )


__all__ = ["caller_ignored_columns", "reconcile"]
