# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol for upsert statement execution.

The engine never talks to a database. It hands a built statement to an
executor, which owns connections, timeouts and transactions.

Design Decisions:
    - runtime_checkable: Enables isinstance() checks for duck typing
    - Async: execution is the only suspension point of an upsert
    - Errors: database errors reach the caller unmodified
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable
from uuid import UUID

if TYPE_CHECKING:
    from pg_mutation_upsert.models import ModelReadProjection, ModelUpsertStatement


@runtime_checkable
class ProtocolUpsertExecutor(Protocol):
    """Runs an upsert statement and returns the resulting row.

    Implementations:
        - UpsertExecutorPostgres: asyncpg pool implementation
    """

    async def execute(
        self,
        statement: ModelUpsertStatement,
        projection: ModelReadProjection | None = None,
        correlation_id: UUID | None = None,
    ) -> dict[str, object] | None:
        """Execute the statement once.

        Args:
            statement: Statement built by the engine.
            projection: Columns to return; None returns the whole row.
            correlation_id: Request correlation ID for logging.

        Returns:
            The upserted row, or None when ``DO NOTHING`` kept an existing
            row and nothing was returned.
        """
        ...


__all__ = ["ProtocolUpsertExecutor"]
