# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""PostgreSQL upsert engine - conflict target resolution and statement construction.

Given a catalog snapshot of a relation and a request carrying match
conditions (``where``), new values (``input``) and columns to keep on
conflict (``ignore``), the engine selects the ``ON CONFLICT`` constraint,
reconciles where and input values, and renders a parameterised
``INSERT ... ON CONFLICT ON CONSTRAINT ... RETURNING *`` statement.

Key Components:
    - engine.UpsertEngine: resolve, reconcile, build
    - runtime.UpsertService: engine plus asyncpg execution
    - catalog: snapshot loaders for PostgreSQL and YAML
    - cli: ``pg-upsert`` command line
"""

__all__: list[str] = []
