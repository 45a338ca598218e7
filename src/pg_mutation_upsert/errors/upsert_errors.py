# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert Engine Error Classes.

Error Hierarchy:
    Exception
    └── UpsertEngineError (base upsert error)
        ├── CatalogConsistencyError
        ├── NoMatchingConstraintError
        ├── ValueMismatchError
        ├── InvalidUpsertRequestError
        ├── UpsertNotSupportedError
        └── ProtocolConfigurationError

All errors:
    - Carry an EnumUpsertErrorCode for classification
    - Expose a frozen ModelUpsertErrorDetails as ``error.model``
    - Support proper error chaining with ``raise ... from e``
    - Accept ModelUpsertErrorContext for bundled context parameters

Errors raised by the database while executing a statement (unique
violations, connection loss, cancellation) are NOT wrapped in this
hierarchy; they reach the caller exactly as asyncpg raised them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from pg_mutation_upsert.enums import EnumUpsertErrorCode
from pg_mutation_upsert.errors.model_upsert_error_context import (
    ModelUpsertErrorContext,
    ModelUpsertErrorDetails,
)


class UpsertEngineError(Exception):
    """Base error class for the upsert engine.

    Structured Fields (via ModelUpsertErrorContext):
        operation: Pipeline step being performed
        relation: Qualified relation name
        constraint: Selected conflict target, if any
        correlation_id: Request correlation ID for tracking

    Example:
        >>> context = ModelUpsertErrorContext(
        ...     operation="resolve",
        ...     relation="public.bikes",
        ... )
        >>> raise UpsertEngineError("Upsert failed", context=context)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[EnumUpsertErrorCode] = None,
        context: Optional[ModelUpsertErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize UpsertEngineError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to INVALID_REQUEST)
            context: Bundled upsert context (operation, relation, etc.)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id = None
        if context is not None:
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.relation is not None:
                structured_context["relation"] = context.relation
            if context.constraint is not None:
                structured_context["constraint"] = context.constraint
            correlation_id = context.correlation_id

        super().__init__(message)
        self.model = ModelUpsertErrorDetails(
            message=message,
            error_code=error_code or EnumUpsertErrorCode.INVALID_REQUEST,
            correlation_id=correlation_id,
            context=structured_context,
        )

    @property
    def message(self) -> str:
        """Human-readable error message."""
        return self.model.message

    @property
    def error_code(self) -> EnumUpsertErrorCode:
        """Error classification code."""
        return self.model.error_code

    def __str__(self) -> str:
        return self.model.message


class CatalogConsistencyError(UpsertEngineError):
    """Raised when a constraint references an attribute the relation lacks.

    Signals a broken catalog snapshot. The request is aborted immediately;
    the constraint is never silently narrowed to the attributes that do
    resolve.

    Example:
        >>> raise CatalogConsistencyError(
        ...     "Consistency error: could not find an attribute!",
        ...     constraint="bikes_pkey",
        ...     attribute_num=7,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelUpsertErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumUpsertErrorCode.CATALOG_CONSISTENCY,
            context=context,
            **extra_context,
        )


class NoMatchingConstraintError(UpsertEngineError):
    """Raised when no unique or primary constraint can be the conflict target.

    Attributes:
        attempted_columns: Column names the resolver tried to match, in the
            order they were supplied.
    """

    def __init__(
        self,
        attempted_columns: Sequence[str],
        context: Optional[ModelUpsertErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize NoMatchingConstraintError.

        Args:
            attempted_columns: Columns supplied by the caller (where keys when
                a where clause was given, otherwise input keys)
            context: Bundled upsert context
            **extra_context: Additional context information
        """
        self.attempted_columns: tuple[str, ...] = tuple(attempted_columns)
        extra_context["attempted_columns"] = list(self.attempted_columns)
        super().__init__(
            message=(
                "Unable to determine upsert unique constraint for given "
                f"upserted columns: {', '.join(self.attempted_columns)}"
            ),
            error_code=EnumUpsertErrorCode.NO_MATCHING_CONSTRAINT,
            context=context,
            **extra_context,
        )


class ValueMismatchError(UpsertEngineError):
    """Raised when an input value contradicts the where value for a column.

    Attributes:
        column: Name of the offending column.
    """

    def __init__(
        self,
        column: str,
        context: Optional[ModelUpsertErrorContext] = None,
        **extra_context: object,
    ) -> None:
        self.column = column
        extra_context["column"] = column
        super().__init__(
            message=(
                f"Value passed in the input for {column} does not match "
                "the where clause value."
            ),
            error_code=EnumUpsertErrorCode.VALUE_MISMATCH,
            context=context,
            **extra_context,
        )


class InvalidUpsertRequestError(UpsertEngineError):
    """Raised when a request names unknown columns or a disabled feature.

    Example:
        >>> raise InvalidUpsertRequestError(
        ...     "Unknown column in ignore: 'nmae'",
        ...     field="ignore",
        ...     unknown_columns=["nmae"],
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelUpsertErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumUpsertErrorCode.INVALID_REQUEST,
            context=context,
            **extra_context,
        )


class UpsertNotSupportedError(UpsertEngineError):
    """Raised when upsert is requested for a relation that is not eligible.

    A relation is eligible when it has a namespace and a primary key, is not
    annotated ``@omit upsert``, and is selectable, insertable and updatable.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelUpsertErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumUpsertErrorCode.UPSERT_NOT_SUPPORTED,
            context=context,
            **extra_context,
        )


class ProtocolConfigurationError(UpsertEngineError):
    """Raised when engine or executor configuration validation fails.

    Used for unparsable environment variables and invalid configuration
    values.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelUpsertErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumUpsertErrorCode.INVALID_CONFIGURATION,
            context=context,
            **extra_context,
        )


__all__ = [
    "CatalogConsistencyError",
    "InvalidUpsertRequestError",
    "NoMatchingConstraintError",
    "ProtocolConfigurationError",
    "UpsertEngineError",
    "UpsertNotSupportedError",
    "ValueMismatchError",
]
