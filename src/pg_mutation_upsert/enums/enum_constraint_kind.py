# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Constraint Kind Enumeration.

Kinds of constraints that can serve as an ON CONFLICT target. Values match
the single-letter ``pg_constraint.contype`` codes so catalog rows can be
mapped without a lookup table.
"""

from enum import Enum


class EnumConstraintKind(str, Enum):
    """Unique-ish constraint kinds usable as a conflict target.

    Attributes:
        PRIMARY: Primary key constraint (contype 'p')
        UNIQUE: Unique constraint (contype 'u')
    """

    PRIMARY = "p"
    UNIQUE = "u"


__all__ = ["EnumConstraintKind"]
