# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert Engine Errors Module.

Exports:
    ModelUpsertErrorContext: Configuration model for bundled error context
    ModelUpsertErrorDetails: Structured view exposed as ``error.model``
    UpsertEngineError: Base upsert error class
    CatalogConsistencyError: Broken catalog snapshot (not user-recoverable)
    NoMatchingConstraintError: Conflict target could not be resolved
    ValueMismatchError: Input contradicts the where clause
    InvalidUpsertRequestError: Unknown columns or disabled features
    UpsertNotSupportedError: Relation is not eligible for upsert
    ProtocolConfigurationError: Configuration validation errors

Correlation ID Assignment:
    Propagate the caller's correlation_id into ModelUpsertErrorContext. The
    pipeline generates one with uuid4() when the caller does not supply it.

Error Sanitization Guidelines:
    Column and constraint names are safe to include in messages. Parameter
    VALUES are never included in messages or context; they may carry PII.
"""

from pg_mutation_upsert.errors.model_upsert_error_context import (
    ModelUpsertErrorContext,
    ModelUpsertErrorDetails,
)
from pg_mutation_upsert.errors.upsert_errors import (
    CatalogConsistencyError,
    InvalidUpsertRequestError,
    NoMatchingConstraintError,
    ProtocolConfigurationError,
    UpsertEngineError,
    UpsertNotSupportedError,
    ValueMismatchError,
)

__all__: list[str] = [
    # Context models
    "ModelUpsertErrorContext",
    "ModelUpsertErrorDetails",
    # Error classes
    "UpsertEngineError",
    "CatalogConsistencyError",
    "NoMatchingConstraintError",
    "ValueMismatchError",
    "InvalidUpsertRequestError",
    "UpsertNotSupportedError",
    "ProtocolConfigurationError",
]
