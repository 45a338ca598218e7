# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Scalar value coercion and comparison for bound parameters.

Request values arrive as JSON-ish scalars (str, int, float, bool, None).
Before binding they are coerced according to the target column's type so
that asyncpg encodes them with the right codec, and so that where/input
comparisons happen on the values PostgreSQL would actually store.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

_FLOAT_TYPES = frozenset({"float4", "float8"})
_NUMERIC_TYPES = frozenset({"numeric"})

# atttypmod for numeric packs ((precision << 16) | scale) + VARHDRSZ. The
# scale is an 11-bit signed field (PostgreSQL 15 allows negative scales).
_VARHDRSZ = 4
_SCALE_MASK = 0x7FF
_SCALE_SIGN = 0x400


def _numeric_typmod(type_modifier: int | None) -> tuple[int, int] | None:
    """Decode a numeric atttypmod into (precision, scale)."""
    if type_modifier is None or type_modifier < _VARHDRSZ:
        return None
    packed = type_modifier - _VARHDRSZ
    precision = (packed >> 16) & 0xFFFF
    scale = packed & _SCALE_MASK
    if scale & _SCALE_SIGN:
        scale -= _SCALE_MASK + 1
    return precision, scale


def coerce_value(
    value: object,
    type_name: str,
    type_modifier: int | None = None,
) -> object:
    """Coerce a request scalar for binding to a column of the given type.

    Args:
        value: Scalar from the request.
        type_name: ``pg_type.typname`` of the column (``float4``, ``numeric``).
        type_modifier: ``atttypmod`` of the column, or None when unconstrained.

    Returns:
        The value to bind. Booleans, None and non-numeric values pass through
        unchanged.

    Example:
        >>> coerce_value(0, "float4")
        0.0
        >>> coerce_value(1.005, "numeric", (10 << 16 | 2) + 4)
        Decimal('1.01')
    """
    if value is None or isinstance(value, bool):
        return value

    if type_name in _FLOAT_TYPES and isinstance(value, int):
        return float(value)

    if type_name in _NUMERIC_TYPES and isinstance(value, (int, float, Decimal)):
        number = value if isinstance(value, Decimal) else Decimal(str(value))
        typmod = _numeric_typmod(type_modifier)
        if typmod is not None and number.is_finite():
            precision, scale = typmod
            with localcontext() as ctx:
                # quantize fails once the result needs more digits than prec
                ctx.prec = max(ctx.prec, precision, number.adjusted() + 1 + scale)
                number = number.quantize(
                    Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP
                )
        return number

    return value


def values_match(where_value: object, input_value: object) -> bool:
    """Compare a where value and an input value for the same column.

    Numbers compare by value, so ``0`` matches ``0.0``. Booleans only match
    booleans: ``True`` never matches ``1`` even though Python says they are
    equal. ``None`` only matches ``None``.
    """
    if isinstance(where_value, bool) or isinstance(input_value, bool):
        return (
            isinstance(where_value, bool)
            and isinstance(input_value, bool)
            and where_value == input_value
        )
    return where_value == input_value


__all__ = ["coerce_value", "values_match"]
