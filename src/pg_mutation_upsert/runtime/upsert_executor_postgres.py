# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""PostgreSQL upsert executor backed by an asyncpg connection pool.

Runs one built statement per call. With a read projection the mutation is
wrapped in a CTE so a single round trip both writes the row and returns
the requested columns.

Error Handling:
    asyncpg errors (unique violations from concurrent writers, deadlocks,
    connection loss, statement timeouts) are logged and re-raised exactly
    as asyncpg raised them. This adapter never retries and never wraps.

Thread Safety:
    Coroutine-safe: every call acquires its own pooled connection.
"""

from __future__ import annotations

import logging
from uuid import UUID

import asyncpg

from pg_mutation_upsert.errors import ModelUpsertErrorContext, UpsertEngineError
from pg_mutation_upsert.models import (
    ModelReadProjection,
    ModelUpsertExecutorConfig,
    ModelUpsertStatement,
)

logger = logging.getLogger(__name__)


class UpsertExecutorPostgres:
    """Executes upsert statements on an asyncpg pool.

    The pool is either injected (shared with the rest of the application)
    or created by ``initialize()`` from the configured DSN. Only a pool the
    executor created itself is closed by ``shutdown()``.

    Example:
        >>> config = ModelUpsertExecutorConfig.from_env()
        >>> executor = UpsertExecutorPostgres(config)
        >>> await executor.initialize()
        >>> row = await executor.execute(statement)
        >>> await executor.shutdown()
    """

    def __init__(
        self,
        config: ModelUpsertExecutorConfig,
        pool: asyncpg.Pool | None = None,
    ) -> None:
        self._config = config
        self._pool = pool
        self._owns_pool = False

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    async def initialize(self) -> None:
        """Create the connection pool if none was injected."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            dsn=self._config.dsn,
            min_size=self._config.min_pool_size,
            max_size=self._config.max_pool_size,
        )
        self._owns_pool = True
        logger.info(
            "Upsert executor pool created",
            extra={
                "dsn": self._config.sanitized_dsn,
                "pool_min_size": self._config.min_pool_size,
                "pool_max_size": self._config.max_pool_size,
            },
        )

    async def shutdown(self) -> None:
        """Close the pool if this executor created it."""
        if self._pool is not None and self._owns_pool:
            await self._pool.close()
        self._pool = None
        self._owns_pool = False

    async def execute(
        self,
        statement: ModelUpsertStatement,
        projection: ModelReadProjection | None = None,
        correlation_id: UUID | None = None,
    ) -> dict[str, object] | None:
        """Execute a statement and return the upserted row.

        Args:
            statement: Statement built by the engine.
            projection: Columns to return; None returns ``RETURNING *``.
            correlation_id: Request correlation ID for logging.

        Returns:
            The row as a dict, or None when ``DO NOTHING`` returned no row.

        Raises:
            UpsertEngineError: If the executor has not been initialized.
            asyncpg.PostgresError: Any database error, unmodified.
        """
        if self._pool is None:
            raise UpsertEngineError(
                "Executor not initialized - call initialize() first",
                context=ModelUpsertErrorContext(
                    operation="execute",
                    constraint=statement.constraint_name,
                    correlation_id=correlation_id,
                ),
            )

        sql = statement.sql if projection is None else projection.wrap(statement.sql)
        log_extra = {
            "constraint": statement.constraint_name,
            "conflict_action": statement.conflict_action.value,
            "param_count": len(statement.params),
            "correlation_id": str(correlation_id) if correlation_id else None,
        }

        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    sql,
                    *statement.params,
                    timeout=self._config.query_timeout_seconds,
                )
        except (asyncpg.PostgresError, OSError, TimeoutError) as e:
            logger.warning(
                "Upsert execution failed: %s",
                type(e).__name__,
                extra={**log_extra, "error_type": type(e).__name__},
            )
            raise

        logger.debug(
            "Upsert executed",
            extra={**log_extra, "returned_row": row is not None},
        )
        return dict(row) if row is not None else None


__all__ = ["UpsertExecutorPostgres"]
