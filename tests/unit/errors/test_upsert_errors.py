# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the upsert error hierarchy.

Covers:
- error codes assigned by each subclass
- context flattening into error.model
- exact user-facing messages
- exception chaining
"""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from pg_mutation_upsert.enums import EnumUpsertErrorCode
from pg_mutation_upsert.errors import (
    CatalogConsistencyError,
    InvalidUpsertRequestError,
    ModelUpsertErrorContext,
    NoMatchingConstraintError,
    ProtocolConfigurationError,
    UpsertEngineError,
    UpsertNotSupportedError,
    ValueMismatchError,
)

pytestmark = [pytest.mark.unit]


class TestUpsertEngineError:
    """Base error behaviour."""

    def test_defaults(self) -> None:
        error = UpsertEngineError("Upsert failed")

        assert str(error) == "Upsert failed"
        assert error.message == "Upsert failed"
        assert error.error_code is EnumUpsertErrorCode.INVALID_REQUEST
        assert error.model.correlation_id is None
        assert error.model.context == {}

    def test_context_is_flattened(self) -> None:
        correlation_id = uuid4()
        context = ModelUpsertErrorContext(
            operation="reconcile",
            relation="public.bikes",
            constraint="serial_weight_unique",
            correlation_id=correlation_id,
        )

        error = UpsertEngineError("Upsert failed", context=context, attempt=2)

        assert error.model.correlation_id == correlation_id
        assert error.model.context == {
            "attempt": 2,
            "operation": "reconcile",
            "relation": "public.bikes",
            "constraint": "serial_weight_unique",
        }

    def test_details_are_frozen(self) -> None:
        error = UpsertEngineError("Upsert failed")

        with pytest.raises(ValidationError):
            error.model.message = "changed"  # type: ignore[misc]

    def test_chaining(self) -> None:
        cause = ValueError("bad value")

        with pytest.raises(UpsertEngineError) as exc_info:
            try:
                raise cause
            except ValueError as e:
                raise ProtocolConfigurationError("Invalid config") from e

        assert exc_info.value.__cause__ is cause


class TestSubclasses:
    """Codes and messages of concrete errors."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (
                CatalogConsistencyError("Consistency error"),
                EnumUpsertErrorCode.CATALOG_CONSISTENCY,
            ),
            (
                NoMatchingConstraintError(["name"]),
                EnumUpsertErrorCode.NO_MATCHING_CONSTRAINT,
            ),
            (ValueMismatchError("weight"), EnumUpsertErrorCode.VALUE_MISMATCH),
            (InvalidUpsertRequestError("bad"), EnumUpsertErrorCode.INVALID_REQUEST),
            (UpsertNotSupportedError("no"), EnumUpsertErrorCode.UPSERT_NOT_SUPPORTED),
            (
                ProtocolConfigurationError("bad config"),
                EnumUpsertErrorCode.INVALID_CONFIGURATION,
            ),
        ],
    )
    def test_error_codes(
        self, error: UpsertEngineError, code: EnumUpsertErrorCode
    ) -> None:
        assert isinstance(error, UpsertEngineError)
        assert error.error_code is code

    def test_no_matching_constraint_message(self) -> None:
        error = NoMatchingConstraintError(("serial_number", "make"))

        assert error.message == (
            "Unable to determine upsert unique constraint for given upserted "
            "columns: serial_number, make"
        )
        assert error.attempted_columns == ("serial_number", "make")
        assert error.model.context["attempted_columns"] == ["serial_number", "make"]

    def test_value_mismatch_message(self) -> None:
        error = ValueMismatchError("serial_number")

        assert error.message == (
            "Value passed in the input for serial_number does not match "
            "the where clause value."
        )
        assert error.column == "serial_number"
        assert error.model.context["column"] == "serial_number"

    def test_catalog_fault_is_not_user_error(self) -> None:
        error = CatalogConsistencyError("Consistency error")

        assert error.error_code.is_catalog_fault
        assert not error.error_code.is_user_error
