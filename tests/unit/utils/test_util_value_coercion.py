# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for value coercion and where/input comparison."""

from __future__ import annotations

from decimal import Decimal

import pytest

from pg_mutation_upsert.utils import coerce_value, values_match

pytestmark = [pytest.mark.unit]

# numeric(10, 2)
NUMERIC_10_2 = (10 << 16 | 2) + 4
# numeric(40, 10)
NUMERIC_40_10 = (40 << 16 | 10) + 4
# numeric(5, -2): the scale is stored as an 11-bit two's complement field
NUMERIC_5_NEG2 = (5 << 16 | (-2 & 0x7FF)) + 4


class TestCoerceValue:
    """Type-driven coercion before binding."""

    @pytest.mark.parametrize("type_name", ["float4", "float8"])
    def test_int_to_float(self, type_name: str) -> None:
        value = coerce_value(0, type_name)

        assert value == 0.0
        assert isinstance(value, float)

    def test_numeric_becomes_decimal(self) -> None:
        assert coerce_value(3, "numeric") == Decimal("3")
        assert coerce_value(0.1, "numeric") == Decimal("0.1")

    def test_numeric_rounded_to_scale(self) -> None:
        assert coerce_value(1.005, "numeric", NUMERIC_10_2) == Decimal("1.01")
        assert coerce_value(2, "numeric", NUMERIC_10_2) == Decimal("2.00")

    def test_unconstrained_numeric_modifier_ignored(self) -> None:
        assert coerce_value(1.23456, "numeric", -1) == Decimal("1.23456")

    def test_numeric_wider_than_default_context(self) -> None:
        value = coerce_value(10**25, "numeric", NUMERIC_40_10)

        assert isinstance(value, Decimal)
        assert value == Decimal(10**25)
        assert value.as_tuple().exponent == -10

    def test_numeric_negative_scale(self) -> None:
        value = coerce_value(1234, "numeric", NUMERIC_5_NEG2)

        assert isinstance(value, Decimal)
        assert value == Decimal(1200)
        assert value.as_tuple().exponent == 2

    def test_numeric_infinity_not_quantized(self) -> None:
        value = coerce_value(Decimal("Infinity"), "numeric", NUMERIC_10_2)

        assert isinstance(value, Decimal)
        assert value.is_infinite()

    @pytest.mark.parametrize(
        ("value", "type_name"),
        [
            (None, "float4"),
            (True, "float4"),
            (False, "numeric"),
            ("abc", "varchar"),
            (7, "int4"),
            (1.5, "float8"),
        ],
    )
    def test_pass_through(self, value: object, type_name: str) -> None:
        assert coerce_value(value, type_name) is value


class TestValuesMatch:
    """Scalar equality used by reconciliation."""

    def test_zero_int_matches_zero_float(self) -> None:
        assert values_match(0.0, 0)
        assert values_match(0, 0.0)

    def test_booleans_only_match_booleans(self) -> None:
        assert values_match(True, True)
        assert not values_match(True, 1)
        assert not values_match(0, False)
        assert not values_match(True, False)

    def test_none_matches_only_none(self) -> None:
        assert values_match(None, None)
        assert not values_match(None, 0)
        assert not values_match("", None)

    def test_strings(self) -> None:
        assert values_match("123", "123")
        assert not values_match("123", 123)
