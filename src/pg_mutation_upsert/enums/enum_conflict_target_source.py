# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Conflict Target Source Enumeration."""

from enum import Enum


class EnumConflictTargetSource(str, Enum):
    """Which resolution step picked the conflict target constraint.

    Attributes:
        WHERE: Every member column was present in the where conditions
        INPUT: Every member column was present in the input values
        PRIMARY_KEY: Nothing matched, fell back to the primary key
    """

    WHERE = "where"
    INPUT = "input"
    PRIMARY_KEY = "primary_key"


__all__ = ["EnumConflictTargetSource"]
