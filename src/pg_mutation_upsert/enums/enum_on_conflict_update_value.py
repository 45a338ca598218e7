# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""On-Conflict Update Value Enumeration.

Per-column choices accepted by query-defined conflict resolution tuning
(``on_conflict.do_update``).
"""

from enum import Enum


class EnumOnConflictUpdateValue(str, Enum):
    """Replacement value for a column in the conflict-update clause.

    Attributes:
        IGNORE: Leave the stored value untouched
        CURRENT_TIMESTAMP: Assign CURRENT_TIMESTAMP on conflict
    """

    IGNORE = "ignore"
    CURRENT_TIMESTAMP = "current_timestamp"

    @property
    def sql_expression(self) -> str | None:
        """SQL keyword assigned for this choice, or None when nothing is assigned."""
        if self is EnumOnConflictUpdateValue.CURRENT_TIMESTAMP:
            return "CURRENT_TIMESTAMP"
        return None


__all__ = ["EnumOnConflictUpdateValue"]
