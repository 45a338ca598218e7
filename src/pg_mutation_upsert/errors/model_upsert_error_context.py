# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert Error Context and Details Models.

Bundles the structured fields shared by every upsert error so that error
constructors keep a short parameter list while remaining strongly typed.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.enums import EnumUpsertErrorCode


class ModelUpsertErrorContext(BaseModel):
    """Configuration model for upsert error context.

    Attributes:
        operation: Pipeline step being performed (resolve, reconcile, build, execute)
        relation: Qualified relation name (namespace.table)
        constraint: Conflict target constraint name, when one was selected
        correlation_id: Request correlation ID for distributed tracing

    Example:
        >>> context = ModelUpsertErrorContext(
        ...     operation="reconcile",
        ...     relation="public.bikes",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise ValueMismatchError("serial_number", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    operation: Optional[str] = Field(
        default=None,
        description="Pipeline step being performed",
    )
    relation: Optional[str] = Field(
        default=None,
        description="Qualified relation name (namespace.table)",
    )
    constraint: Optional[str] = Field(
        default=None,
        description="Conflict target constraint name",
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Request correlation ID for distributed tracing",
    )


class ModelUpsertErrorDetails(BaseModel):
    """Structured, immutable view of a raised upsert error.

    Exposed as ``error.model`` so callers can branch on ``error_code`` and
    read ``context`` without parsing the message.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    message: str = Field(..., description="Human-readable error message")
    error_code: EnumUpsertErrorCode = Field(..., description="Error classification")
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Request correlation ID for distributed tracing",
    )
    context: dict[str, object] = Field(
        default_factory=dict,
        description="Structured context fields for logging and diagnostics",
    )


__all__ = ["ModelUpsertErrorContext", "ModelUpsertErrorDetails"]
