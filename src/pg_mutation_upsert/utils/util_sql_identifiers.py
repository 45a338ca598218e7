# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""PostgreSQL identifier quoting utilities.

Every identifier that reaches generated SQL (namespace, relation, column,
constraint, CTE alias) goes through ``quote_identifier``. Catalog names are
arbitrary strings (mixed case, spaces, embedded quotes are all legal in
PostgreSQL), so identifiers are always quoted rather than validated against
a bare-word pattern.

Trust Boundary:
    Identifiers come from the catalog snapshot, not from request payloads.
    Request payloads only ever choose WHICH catalog identifiers appear, and
    their values are bound as ``$n`` parameters.
"""

from __future__ import annotations


def quote_identifier(identifier: str) -> str:
    """Quote a PostgreSQL identifier.

    Wraps the identifier in double quotes and doubles any embedded double
    quote, which is the complete escaping rule for quoted identifiers.

    Args:
        identifier: Raw identifier from the catalog.

    Returns:
        Quoted identifier safe to splice into SQL text.

    Raises:
        ValueError: If the identifier is empty or contains a NUL byte, neither
            of which PostgreSQL accepts inside a quoted identifier.

    Example:
        >>> quote_identifier("serial_number")
        '"serial_number"'
        >>> quote_identifier('odd"name')
        '"odd""name"'
    """
    if not identifier:
        raise ValueError("Invalid identifier: empty string")
    if "\x00" in identifier:
        raise ValueError("Invalid identifier: contains NUL byte")
    return '"' + identifier.replace('"', '""') + '"'


def quote_qualified_name(*parts: str) -> str:
    """Quote and dot-join a qualified name such as namespace and relation.

    Example:
        >>> quote_qualified_name("public", "bikes")
        '"public"."bikes"'
    """
    return ".".join(quote_identifier(part) for part in parts)


__all__ = [
    "quote_identifier",
    "quote_qualified_name",
]
