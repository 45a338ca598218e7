# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert Error Code Enumeration.

Defines structured error codes for the upsert engine. Codes enable precise
error classification and programmatic handling by callers that surface
errors to clients.

Error Code Categories:
    - Catalog faults: the schema snapshot itself is broken
    - User errors: the request cannot be satisfied as written
    - Configuration errors: engine or executor misconfiguration

Usage:
    >>> from pg_mutation_upsert.enums import EnumUpsertErrorCode
    >>> code = EnumUpsertErrorCode.VALUE_MISMATCH
    >>> code.is_user_error
    True
"""

from enum import Enum


class EnumUpsertErrorCode(str, Enum):
    """Error codes raised by the upsert engine.

    Catalog Faults (abort, not user-recoverable):
        CATALOG_CONSISTENCY: A constraint references an attribute position
            that does not exist on the relation.

    User Errors (surfaced verbatim, never retried):
        NO_MATCHING_CONSTRAINT: No unique or primary constraint could be
            chosen as the conflict target.
        VALUE_MISMATCH: An input value contradicts the where value for the
            same column.
        INVALID_REQUEST: The request names unknown columns or uses a
            disabled feature.
        UPSERT_NOT_SUPPORTED: The relation is not eligible for upsert.

    Configuration Errors:
        INVALID_CONFIGURATION: Engine or executor configuration is invalid.
    """

    CATALOG_CONSISTENCY = "UPSERT_CATALOG_CONSISTENCY_ERROR"
    NO_MATCHING_CONSTRAINT = "UPSERT_NO_MATCHING_CONSTRAINT"
    VALUE_MISMATCH = "UPSERT_VALUE_MISMATCH"
    INVALID_REQUEST = "UPSERT_INVALID_REQUEST"
    UPSERT_NOT_SUPPORTED = "UPSERT_NOT_SUPPORTED"
    INVALID_CONFIGURATION = "UPSERT_INVALID_CONFIGURATION"

    @property
    def is_user_error(self) -> bool:
        """Check if this error is caused by the request rather than the system.

        Returns:
            True if the caller can fix the error by changing the request.
        """
        return self in {
            EnumUpsertErrorCode.NO_MATCHING_CONSTRAINT,
            EnumUpsertErrorCode.VALUE_MISMATCH,
            EnumUpsertErrorCode.INVALID_REQUEST,
            EnumUpsertErrorCode.UPSERT_NOT_SUPPORTED,
        }

    @property
    def is_catalog_fault(self) -> bool:
        """Check if this error signals a broken catalog snapshot."""
        return self is EnumUpsertErrorCode.CATALOG_CONSISTENCY

    @property
    def description(self) -> str:
        """Get human-readable description of the error code."""
        descriptions = {
            EnumUpsertErrorCode.CATALOG_CONSISTENCY: (
                "Catalog snapshot references a missing attribute"
            ),
            EnumUpsertErrorCode.NO_MATCHING_CONSTRAINT: (
                "No unique constraint matches the supplied columns"
            ),
            EnumUpsertErrorCode.VALUE_MISMATCH: (
                "Input value does not match the where clause value"
            ),
            EnumUpsertErrorCode.INVALID_REQUEST: "Upsert request is invalid",
            EnumUpsertErrorCode.UPSERT_NOT_SUPPORTED: (
                "Relation does not support upsert"
            ),
            EnumUpsertErrorCode.INVALID_CONFIGURATION: (
                "Upsert configuration is invalid"
            ),
        }
        return descriptions.get(self, "Unknown error")


__all__ = ["EnumUpsertErrorCode"]
