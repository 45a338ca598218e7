# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Omit Capability Enumeration.

Capabilities that a smart comment (``@omit read,updateOnConflict``) can
withdraw from a relation or one of its attributes.
"""

from enum import Enum


class EnumOmitCapability(str, Enum):
    """Capabilities addressable by ``@omit`` annotations.

    Values are the exact tokens used inside smart comments.

    Attributes:
        READ: Column cannot be read (excluded from where conditions)
        CREATE: Column cannot be supplied on insert
        UPDATE: Column cannot be updated
        UPDATE_ON_CONFLICT: Column is never overwritten by a conflict update
        UPSERT: Relation gets no upsert mutation at all
    """

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    UPDATE_ON_CONFLICT = "updateOnConflict"
    UPSERT = "upsert"


__all__ = ["EnumOmitCapability"]
