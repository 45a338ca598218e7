# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for smart comment parsing and column name inflection."""

from __future__ import annotations

import pytest

from pg_mutation_upsert.enums import EnumOmitCapability
from pg_mutation_upsert.utils import camel_case, omit_capabilities, parse_smart_comment

pytestmark = [pytest.mark.unit]


class TestParseSmartComment:
    """Tag and description splitting."""

    def test_empty(self) -> None:
        parsed = parse_smart_comment(None)

        assert parsed.tags == {}
        assert parsed.description == ""

    def test_tags_and_description(self) -> None:
        parsed = parse_smart_comment(
            "@omit update\n@name people\nEveryone we know.\nSecond line."
        )

        assert parsed.tags == {"omit": ("update",), "name": ("people",)}
        assert parsed.description == "Everyone we know.\nSecond line."

    def test_repeated_and_bare_tags(self) -> None:
        parsed = parse_smart_comment("@omit read\n@omit\n@deprecated")

        assert parsed.tags["omit"] == ("read", "")
        assert parsed.tags["deprecated"] == ("",)

    def test_lone_at_sign_is_description(self) -> None:
        assert parse_smart_comment("@").description == "@"


class TestOmitCapabilities:
    """Capabilities withdrawn by @omit."""

    def test_single(self) -> None:
        assert omit_capabilities("@omit updateOnConflict") == frozenset(
            {EnumOmitCapability.UPDATE_ON_CONFLICT}
        )

    def test_list_with_unknown_tokens(self) -> None:
        assert omit_capabilities("@omit read, delete,upsert") == frozenset(
            {EnumOmitCapability.READ, EnumOmitCapability.UPSERT}
        )

    def test_bare_omit_withdraws_everything(self) -> None:
        assert omit_capabilities("@omit") == frozenset(EnumOmitCapability)

    def test_no_omit_tag(self) -> None:
        assert omit_capabilities("Just a description") == frozenset()


class TestCamelCase:
    """Column name to client field name."""

    @pytest.mark.parametrize(
        ("column", "field"),
        [
            ("serial_number", "serialNumber"),
            ("weight", "weight"),
            ("project_name", "projectName"),
            ("_row_id", "_rowId"),
            ("a__b", "aB"),
            ("___", "___"),
        ],
    )
    def test_camel_case(self, column: str, field: str) -> None:
        assert camel_case(column) == field
