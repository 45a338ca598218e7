# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocols implemented by upsert runtime adapters."""

from pg_mutation_upsert.protocols.protocol_upsert_executor import (
    ProtocolUpsertExecutor,
)

__all__: list[str] = ["ProtocolUpsertExecutor"]
