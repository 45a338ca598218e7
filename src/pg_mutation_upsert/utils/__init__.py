# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Utility functions for the upsert engine."""

from pg_mutation_upsert.utils.util_inflection import camel_case
from pg_mutation_upsert.utils.util_smart_comments import (
    ParsedSmartComment,
    omit_capabilities,
    parse_smart_comment,
)
from pg_mutation_upsert.utils.util_sql_identifiers import (
    quote_identifier,
    quote_qualified_name,
)
from pg_mutation_upsert.utils.util_value_coercion import coerce_value, values_match

__all__: list[str] = [
    "ParsedSmartComment",
    "camel_case",
    "coerce_value",
    "omit_capabilities",
    "parse_smart_comment",
    "quote_identifier",
    "quote_qualified_name",
    "values_match",
]
