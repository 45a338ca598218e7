# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Column name inflection for client-facing field names.

Clients address columns by camelCase field names (``serialNumber``), the
catalog by column names (``serial_number``). Only this mapping lives here;
type-name inflection belongs to the schema layer.
"""

from __future__ import annotations


def camel_case(name: str) -> str:
    """Convert a snake_case column name to its camelCase field name.

    Leading underscores are preserved so that ``_private`` stays distinct
    from ``private``.

    Example:
        >>> camel_case("serial_number")
        'serialNumber'
        >>> camel_case("_row_id")
        '_rowId'
    """
    stripped = name.lstrip("_")
    prefix = name[: len(name) - len(stripped)]
    parts = [part for part in stripped.split("_") if part]
    if not parts:
        return name
    head, *tail = parts
    return (
        prefix
        + head[:1].lower()
        + head[1:]
        + "".join(part[:1].upper() + part[1:] for part in tail)
    )


__all__ = ["camel_case"]
