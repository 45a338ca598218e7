# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Command line interface for the upsert engine."""

from pg_mutation_upsert.cli.commands import cli

__all__: list[str] = ["cli"]
