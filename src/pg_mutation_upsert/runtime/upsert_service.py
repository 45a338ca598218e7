# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert service: request in, payload out.

Connects the synchronous engine to an asynchronous executor for one
logical row per call. The service holds no per-request state.
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from pg_mutation_upsert.engine import UpsertEngine
from pg_mutation_upsert.errors import ModelUpsertErrorContext, UpsertNotSupportedError
from pg_mutation_upsert.models import (
    ModelReadProjection,
    ModelRelation,
    ModelUpsertPayload,
    ModelUpsertRequest,
)
from pg_mutation_upsert.protocols import ProtocolUpsertExecutor

logger = logging.getLogger(__name__)


class UpsertService:
    """Runs the resolve, reconcile, build and execute pipeline.

    Example:
        >>> service = UpsertService(UpsertEngine(), executor)
        >>> payload = await service.upsert(
        ...     roles,
        ...     ModelUpsertRequest.for_relation(
        ...         roles,
        ...         input={"project_name": "p", "title": "t", "name": "n"},
        ...         client_mutation_id="abc",
        ...     ),
        ... )
        >>> payload.client_mutation_id
        'abc'
    """

    def __init__(
        self,
        engine: UpsertEngine,
        executor: ProtocolUpsertExecutor,
    ) -> None:
        self._engine = engine
        self._executor = executor

    async def upsert(
        self,
        relation: ModelRelation,
        request: ModelUpsertRequest,
        projection: ModelReadProjection | None = None,
        correlation_id: UUID | None = None,
    ) -> ModelUpsertPayload:
        """Upsert one row.

        Args:
            relation: Target relation from a catalog snapshot.
            request: Upsert request keyed by column names.
            projection: Columns to return; None returns the whole row.
            correlation_id: Optional correlation ID; generated when absent.

        Returns:
            Payload with the row and the untouched client mutation id.

        Raises:
            UpsertNotSupportedError: If the relation is not eligible.
            UpsertEngineError: Any engine failure, before execution.
            asyncpg.PostgresError: Database errors, unmodified.
        """
        correlation_id = correlation_id or uuid4()

        if not relation.is_upsertable:
            raise UpsertNotSupportedError(
                f"Upsert is not available for {relation.qualified_name}",
                context=ModelUpsertErrorContext(
                    operation="upsert",
                    relation=relation.qualified_name,
                    correlation_id=correlation_id,
                ),
            )

        statement = self._engine.build(relation, request, correlation_id)
        row = await self._executor.execute(statement, projection, correlation_id)

        logger.info(
            "Upserted row into %s",
            relation.qualified_name,
            extra={
                "relation": relation.qualified_name,
                "constraint": statement.constraint_name,
                "conflict_action": statement.conflict_action.value,
                "correlation_id": str(correlation_id),
            },
        )
        return ModelUpsertPayload(
            client_mutation_id=request.client_mutation_id,
            row=row,
            constraint_name=statement.constraint_name,
        )


__all__ = ["UpsertService"]
