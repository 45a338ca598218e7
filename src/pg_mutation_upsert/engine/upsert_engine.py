# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert engine: resolve, reconcile, build.

The engine is a stateless, synchronous pipeline. It holds only its frozen
configuration, so one instance can serve any number of concurrent
requests against any number of catalog snapshots.

Example:
    >>> engine = UpsertEngine()
    >>> request = ModelUpsertRequest.for_relation(
    ...     bikes, input={"serial_number": "123", "weight": 0.0, "model": "x"}
    ... )
    >>> statement = engine.build(bikes, request)
    >>> statement.constraint_name
    'serial_weight_unique'
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from pg_mutation_upsert.engine.column_reconciler import reconcile
from pg_mutation_upsert.engine.conflict_target_resolver import (
    resolve_conflict_target,
)
from pg_mutation_upsert.engine.statement_builder import build_statement
from pg_mutation_upsert.errors import (
    InvalidUpsertRequestError,
    ModelUpsertErrorContext,
)
from pg_mutation_upsert.models import (
    ModelConflictPlan,
    ModelConflictTarget,
    ModelRelation,
    ModelUpsertEngineConfig,
    ModelUpsertRequest,
    ModelUpsertStatement,
)

logger = logging.getLogger(__name__)


class UpsertEngine:
    """Turns an upsert request into a parameterised statement.

    Failure exits, all raised before any SQL is produced:
        InvalidUpsertRequestError: unknown columns, or on_conflict tuning
            while it is disabled.
        CatalogConsistencyError: broken constraint in the snapshot.
        NoMatchingConstraintError: no conflict target qualifies.
        ValueMismatchError: input contradicts where.
    """

    def __init__(self, config: ModelUpsertEngineConfig | None = None) -> None:
        self._config = config or ModelUpsertEngineConfig()

    @property
    def config(self) -> ModelUpsertEngineConfig:
        return self._config

    def _check_request(
        self,
        relation: ModelRelation,
        request: ModelUpsertRequest,
        correlation_id: UUID,
    ) -> None:
        request.validate_against(relation)
        if (
            request.on_conflict is not None
            and not self._config.enable_query_defined_conflict_resolution_tuning
        ):
            raise InvalidUpsertRequestError(
                "Query-defined conflict resolution tuning is disabled",
                context=ModelUpsertErrorContext(
                    operation="validate_request",
                    relation=relation.qualified_name,
                    correlation_id=correlation_id,
                ),
                field="on_conflict",
            )

    def resolve(
        self,
        relation: ModelRelation,
        request: ModelUpsertRequest,
        correlation_id: UUID | None = None,
    ) -> ModelConflictTarget:
        """Validate the request and select its conflict target."""
        correlation_id = correlation_id or uuid4()
        self._check_request(relation, request, correlation_id)
        return resolve_conflict_target(
            relation,
            request.where,
            request.input.keys(),
            correlation_id=correlation_id,
        )

    def plan(
        self,
        relation: ModelRelation,
        request: ModelUpsertRequest,
        correlation_id: UUID | None = None,
        *,
        target: ModelConflictTarget | None = None,
    ) -> ModelConflictPlan:
        """Resolve the conflict target and reconcile the request's columns.

        A ``target`` already returned by ``resolve`` for the same request
        is reused as is; the request is then not validated a second time.
        """
        correlation_id = correlation_id or uuid4()
        if target is None:
            target = self.resolve(relation, request, correlation_id)
        plan = reconcile(
            relation,
            request,
            target.constraint_name,
            correlation_id=correlation_id,
        )
        logger.debug(
            "Planned upsert for %s on %s",
            relation.qualified_name,
            target.constraint_name,
            extra={
                "relation": relation.qualified_name,
                "constraint": target.constraint_name,
                "source": target.source.value,
                "columns": [column.name for column in plan.columns],
                "correlation_id": str(correlation_id),
            },
        )
        return plan

    def render(
        self,
        relation: ModelRelation,
        plan: ModelConflictPlan,
    ) -> ModelUpsertStatement:
        """Render an already reconciled plan."""
        return build_statement(relation, plan)

    def build(
        self,
        relation: ModelRelation,
        request: ModelUpsertRequest,
        correlation_id: UUID | None = None,
    ) -> ModelUpsertStatement:
        """Run the full pipeline: resolve, reconcile, build.

        Args:
            relation: Relation being upserted, from a catalog snapshot.
            request: Upsert request keyed by column names.
            correlation_id: Optional correlation ID; generated when absent.

        Returns:
            The statement to hand to an execution adapter.
        """
        correlation_id = correlation_id or uuid4()
        plan = self.plan(relation, request, correlation_id)
        statement = self.render(relation, plan)
        logger.debug(
            "Built upsert statement for %s (%s)",
            relation.qualified_name,
            statement.conflict_action.value,
            extra={
                "relation": relation.qualified_name,
                "constraint": statement.constraint_name,
                "conflict_action": statement.conflict_action.value,
                "param_count": len(statement.params),
                "correlation_id": str(correlation_id),
            },
        )
        return statement


__all__ = ["UpsertEngine"]
