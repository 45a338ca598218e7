# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Conflict Action Enumeration."""

from enum import Enum


class EnumConflictAction(str, Enum):
    """Action rendered after ``ON CONFLICT ON CONSTRAINT``.

    Attributes:
        DO_UPDATE: At least one assignment survived the ignore set
        DO_NOTHING: No assignments remain, or the caller asked for it
        NONE: DEFAULT VALUES insert, no conflict clause at all
    """

    DO_UPDATE = "do_update"
    DO_NOTHING = "do_nothing"
    NONE = "none"


__all__ = ["EnumConflictAction"]
