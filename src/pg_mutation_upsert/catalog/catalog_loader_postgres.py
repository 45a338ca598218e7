# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog snapshot loader for a live PostgreSQL database.

Reads ``pg_class``, ``pg_namespace``, ``pg_attribute``, ``pg_type`` and
``pg_constraint`` with three read-only queries and assembles an immutable
ModelCatalogSnapshot. Nothing is cached; call again to pick up schema
changes.

Ordering:
    - relations by namespace, then name
    - attributes by ``attnum`` (dropped columns skipped)
    - constraints by OID, which follows creation order and therefore the
      order they were declared in ``CREATE TABLE``

Privileges:
    ``has_table_privilege`` for the connected role decides the selectable,
    insertable and updatable flags, so the snapshot reflects what the
    caller can actually do.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence

import asyncpg

from pg_mutation_upsert.enums import EnumConstraintKind
from pg_mutation_upsert.models import (
    ModelAttribute,
    ModelCatalogSnapshot,
    ModelConstraint,
    ModelRelation,
)
from pg_mutation_upsert.utils import omit_capabilities

logger = logging.getLogger(__name__)

_RELATIONS_SQL = """
    SELECT
        c.oid AS relid,
        n.nspname AS namespace,
        c.relname AS name,
        obj_description(c.oid, 'pg_class') AS comment,
        has_table_privilege(c.oid, 'SELECT') AS is_selectable,
        has_table_privilege(c.oid, 'INSERT') AS is_insertable,
        has_table_privilege(c.oid, 'UPDATE') AS is_updatable
    FROM pg_catalog.pg_class c
    JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
    WHERE n.nspname = ANY($1::text[])
      AND c.relkind IN ('r', 'p')
    ORDER BY n.nspname, c.relname
"""

_ATTRIBUTES_SQL = """
    SELECT
        a.attrelid AS relid,
        a.attnum AS num,
        a.attname AS name,
        a.atttypid AS type_id,
        t.typname AS type_name,
        a.atttypmod AS type_modifier,
        col_description(a.attrelid, a.attnum) AS comment
    FROM pg_catalog.pg_attribute a
    JOIN pg_catalog.pg_type t ON t.oid = a.atttypid
    WHERE a.attrelid = ANY($1::oid[])
      AND a.attnum > 0
      AND NOT a.attisdropped
    ORDER BY a.attrelid, a.attnum
"""

_CONSTRAINTS_SQL = """
    SELECT
        con.conrelid AS relid,
        con.conname AS name,
        con.contype AS kind,
        con.conkey AS key_attribute_nums
    FROM pg_catalog.pg_constraint con
    WHERE con.conrelid = ANY($1::oid[])
      AND con.contype IN ('p', 'u')
    ORDER BY con.oid
"""


async def load_catalog_from_postgres(
    conn: asyncpg.Connection,
    namespaces: Sequence[str] = ("public",),
) -> ModelCatalogSnapshot:
    """Introspect the given schemas into a catalog snapshot.

    Args:
        conn: Open asyncpg connection; only read queries are issued.
        namespaces: Schema names to include.

    Returns:
        Snapshot with one relation per ordinary or partitioned table.

    Raises:
        asyncpg.PostgresError: Query failures, unmodified.
    """
    relation_rows = await conn.fetch(_RELATIONS_SQL, list(namespaces))
    relids = [row["relid"] for row in relation_rows]

    attributes: dict[int, list[ModelAttribute]] = defaultdict(list)
    constraints: dict[int, list[ModelConstraint]] = defaultdict(list)

    if relids:
        for row in await conn.fetch(_ATTRIBUTES_SQL, relids):
            type_modifier = row["type_modifier"]
            attributes[row["relid"]].append(
                ModelAttribute(
                    name=row["name"],
                    num=row["num"],
                    type_name=row["type_name"],
                    type_id=row["type_id"],
                    type_modifier=type_modifier if type_modifier >= 0 else None,
                    omit=omit_capabilities(row["comment"]),
                    comment=row["comment"],
                )
            )
        for row in await conn.fetch(_CONSTRAINTS_SQL, relids):
            constraints[row["relid"]].append(
                ModelConstraint(
                    name=row["name"],
                    kind=EnumConstraintKind(row["kind"]),
                    key_attribute_nums=tuple(row["key_attribute_nums"]),
                )
            )

    relations = tuple(
        ModelRelation(
            namespace=row["namespace"],
            name=row["name"],
            attributes=tuple(attributes[row["relid"]]),
            constraints=tuple(constraints[row["relid"]]),
            is_selectable=row["is_selectable"],
            is_insertable=row["is_insertable"],
            is_updatable=row["is_updatable"],
            omit=omit_capabilities(row["comment"]),
            comment=row["comment"],
        )
        for row in relation_rows
    )

    logger.info(
        "Loaded catalog snapshot with %d relation(s)",
        len(relations),
        extra={
            "namespaces": list(namespaces),
            "relation_count": len(relations),
        },
    )
    return ModelCatalogSnapshot(relations=relations)


__all__ = ["load_catalog_from_postgres"]
