# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
# S106 disabled: Test password fixtures are intentional for integration testing
"""Pytest fixtures for upsert integration tests.

Spins up a real PostgreSQL instance with testcontainers, creates the test
tables, and introspects them with load_catalog_from_postgres so the
engine runs against a catalog snapshot read from the live database.

Fixture Scoping Strategy
------------------------
Session-scoped:
    - postgres_container: PostgreSQL testcontainer (expensive startup)

Function-scoped:
    - pg_pool: Fresh pool with the test tables dropped and recreated
    - live_catalog: Snapshot introspected from the fresh schema
    - executor: UpsertExecutorPostgres sharing pg_pool
"""

from __future__ import annotations

import subprocess
from collections.abc import AsyncGenerator, Generator

import asyncpg
import pytest
from testcontainers.postgres import PostgresContainer

from pg_mutation_upsert.catalog import load_catalog_from_postgres
from pg_mutation_upsert.models import ModelCatalogSnapshot, ModelUpsertExecutorConfig
from pg_mutation_upsert.runtime import UpsertExecutorPostgres

SCHEMA_SQL = """
DROP TABLE IF EXISTS bikes, roles, car, no_primary_keys CASCADE;

CREATE TABLE bikes (
    id serial PRIMARY KEY,
    weight real,
    make varchar,
    model varchar,
    serial_number varchar,
    CONSTRAINT serial_weight_unique UNIQUE (serial_number, weight)
);

CREATE TABLE roles (
    id serial PRIMARY KEY,
    project_name varchar,
    title varchar,
    name varchar,
    rank integer,
    updated timestamptz,
    UNIQUE (project_name, title)
);
COMMENT ON COLUMN roles.rank IS E'@omit updateOnConflict';

CREATE TABLE car (
    id serial PRIMARY KEY,
    make text NOT NULL,
    model text NOT NULL,
    trim varchar DEFAULT 'standard',
    active boolean,
    UNIQUE (make, model, trim)
);

CREATE TABLE no_primary_keys (
    name text
);
"""


def _check_docker_available() -> bool:
    """Check if Docker daemon is available and running."""
    try:
        result = subprocess.run(
            ["docker", "info"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
            shell=False,
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return False


DOCKER_AVAILABLE = _check_docker_available()


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL testcontainer.

    Raises:
        pytest.skip: If Docker is not available.
    """
    if not DOCKER_AVAILABLE:
        pytest.skip("Docker daemon not available for testcontainers")

    container = PostgresContainer(
        image="postgres:16-alpine",
        username="test_user",
        password="test_password",
        dbname="test_upsert",
    )
    container.start()

    yield container

    container.stop()


@pytest.fixture
def postgres_dsn(postgres_container: PostgresContainer) -> str:
    # psycopg2 URL -> asyncpg DSN
    return postgres_container.get_connection_url().replace(
        "postgresql+psycopg2://", "postgresql://"
    )


@pytest.fixture
async def pg_pool(postgres_dsn: str) -> AsyncGenerator[asyncpg.Pool, None]:
    """Function-scoped pool over a freshly recreated schema."""
    pool = await asyncpg.create_pool(dsn=postgres_dsn, min_size=1, max_size=5)

    async with pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL)

    yield pool

    await pool.close()


@pytest.fixture
async def live_catalog(pg_pool: asyncpg.Pool) -> ModelCatalogSnapshot:
    async with pg_pool.acquire() as conn:
        return await load_catalog_from_postgres(conn)


@pytest.fixture
async def executor(
    pg_pool: asyncpg.Pool, postgres_dsn: str
) -> AsyncGenerator[UpsertExecutorPostgres, None]:
    executor = UpsertExecutorPostgres(
        ModelUpsertExecutorConfig(dsn=postgres_dsn, query_timeout_seconds=10.0),
        pool=pg_pool,
    )
    await executor.initialize()

    yield executor

    await executor.shutdown()
