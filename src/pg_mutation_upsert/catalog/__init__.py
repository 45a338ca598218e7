# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog snapshot loaders (live PostgreSQL and YAML)."""

from pg_mutation_upsert.catalog.catalog_loader_postgres import (
    load_catalog_from_postgres,
)
from pg_mutation_upsert.catalog.catalog_loader_yaml import (
    MAX_CATALOG_SIZE_BYTES,
    dump_catalog_to_yaml,
    load_catalog_from_yaml,
)

__all__: list[str] = [
    "MAX_CATALOG_SIZE_BYTES",
    "dump_catalog_to_yaml",
    "load_catalog_from_postgres",
    "load_catalog_from_yaml",
]
