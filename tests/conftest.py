# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for pg_mutation_upsert tests.

The relation fixtures mirror the tables used by the integration suite::

    bikes(id serial pk, weight real, make, model, serial_number,
          CONSTRAINT serial_weight_unique UNIQUE (serial_number, weight))
    roles(id serial pk, project_name, title, name, rank int, updated timestamptz,
          UNIQUE (project_name, title))   -- rank: @omit updateOnConflict
    car(id serial pk, make text not null, model text not null,
        trim default 'standard', active boolean, UNIQUE (make, model, trim))
    no_primary_keys(name text)
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pg_mutation_upsert.enums import EnumConstraintKind, EnumOmitCapability
from pg_mutation_upsert.models import (
    ModelAttribute,
    ModelCatalogSnapshot,
    ModelConstraint,
    ModelRelation,
)


def make_relation(
    name: str,
    columns: list[tuple[str, str]],
    constraints: list[tuple[str, EnumConstraintKind, tuple[int, ...]]],
    *,
    namespace: str | None = "public",
    omit: dict[str, frozenset[EnumOmitCapability]] | None = None,
    type_modifiers: dict[str, int] | None = None,
    **flags: bool,
) -> ModelRelation:
    """Build a relation from ``(column, type)`` pairs numbered from 1."""
    omit = omit or {}
    type_modifiers = type_modifiers or {}
    return ModelRelation(
        namespace=namespace,
        name=name,
        attributes=tuple(
            ModelAttribute(
                name=column,
                num=num,
                type_name=type_name,
                type_modifier=type_modifiers.get(column),
                omit=omit.get(column, frozenset()),
            )
            for num, (column, type_name) in enumerate(columns, start=1)
        ),
        constraints=tuple(
            ModelConstraint(name=con_name, kind=kind, key_attribute_nums=nums)
            for con_name, kind, nums in constraints
        ),
        **flags,
    )


@pytest.fixture
def relation_factory() -> Callable[..., ModelRelation]:
    """Factory for ad-hoc relations, see make_relation."""
    return make_relation


@pytest.fixture
def bikes() -> ModelRelation:
    return make_relation(
        "bikes",
        [
            ("id", "int4"),
            ("weight", "float4"),
            ("make", "varchar"),
            ("model", "varchar"),
            ("serial_number", "varchar"),
        ],
        [
            ("bikes_pkey", EnumConstraintKind.PRIMARY, (1,)),
            ("serial_weight_unique", EnumConstraintKind.UNIQUE, (5, 2)),
        ],
    )


@pytest.fixture
def roles() -> ModelRelation:
    return make_relation(
        "roles",
        [
            ("id", "int4"),
            ("project_name", "varchar"),
            ("title", "varchar"),
            ("name", "varchar"),
            ("rank", "int4"),
            ("updated", "timestamptz"),
        ],
        [
            ("roles_pkey", EnumConstraintKind.PRIMARY, (1,)),
            ("roles_project_name_title_key", EnumConstraintKind.UNIQUE, (2, 3)),
        ],
        omit={"rank": frozenset({EnumOmitCapability.UPDATE_ON_CONFLICT})},
    )


@pytest.fixture
def car() -> ModelRelation:
    return make_relation(
        "car",
        [
            ("id", "int4"),
            ("make", "text"),
            ("model", "text"),
            ("trim", "varchar"),
            ("active", "bool"),
        ],
        [
            ("car_pkey", EnumConstraintKind.PRIMARY, (1,)),
            ("car_make_model_trim_key", EnumConstraintKind.UNIQUE, (2, 3, 4)),
        ],
    )


@pytest.fixture
def no_primary_keys() -> ModelRelation:
    return make_relation("no_primary_keys", [("name", "text")], [])


@pytest.fixture
def catalog_snapshot(
    bikes: ModelRelation,
    roles: ModelRelation,
    car: ModelRelation,
    no_primary_keys: ModelRelation,
) -> ModelCatalogSnapshot:
    return ModelCatalogSnapshot(relations=(bikes, roles, car, no_primary_keys))
