# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Smart comment parsing for catalog annotations.

Tables and columns can be annotated through ``COMMENT ON`` using the
PostGraphile smart-comment convention::

    COMMENT ON COLUMN roles.rank IS E'@omit updateOnConflict';
    COMMENT ON TABLE audit_log IS E'@omit upsert\\nAppend-only audit trail.';

Lines starting with ``@`` are tags (``@name`` or ``@name value``); every
other line belongs to the human description. A bare ``@omit`` withdraws
every capability. Tokens unknown to EnumOmitCapability (``delete``,
``filter``, ...) are accepted and ignored, since other tools share the
same comment.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pg_mutation_upsert.enums import EnumOmitCapability

_ALL_CAPABILITIES = frozenset(EnumOmitCapability)
_CAPABILITY_BY_TOKEN = {
    capability.value: capability for capability in EnumOmitCapability
}


@dataclass(frozen=True)
class ParsedSmartComment:
    """A comment split into tags and description."""

    tags: dict[str, tuple[str, ...]] = field(default_factory=dict)
    description: str = ""


def parse_smart_comment(comment: str | None) -> ParsedSmartComment:
    """Split a catalog comment into smart tags and free-text description.

    Repeated tags accumulate their values in order. A tag given without a
    value contributes an empty string, so ``"@omit"`` yields
    ``{"omit": ("",)}``.

    Args:
        comment: Raw ``pg_description`` text, or None.

    Returns:
        ParsedSmartComment with tags and the remaining description lines.
    """
    if not comment:
        return ParsedSmartComment()

    tags: dict[str, tuple[str, ...]] = {}
    description_lines: list[str] = []
    for line in comment.splitlines():
        stripped = line.strip()
        if not stripped.startswith("@") or len(stripped) == 1:
            description_lines.append(line)
            continue
        name, _, value = stripped[1:].partition(" ")
        tags[name] = (*tags.get(name, ()), value.strip())

    return ParsedSmartComment(
        tags=tags,
        description="\n".join(description_lines).strip(),
    )


def omit_capabilities(comment: str | None) -> frozenset[EnumOmitCapability]:
    """Compute the capabilities withdrawn by ``@omit`` tags in a comment.

    Example:
        >>> sorted(c.value for c in omit_capabilities("@omit read,updateOnConflict"))
        ['read', 'updateOnConflict']
    """
    values = parse_smart_comment(comment).tags.get("omit")
    if values is None:
        return frozenset()

    omitted: set[EnumOmitCapability] = set()
    for value in values:
        if not value:
            return _ALL_CAPABILITIES
        for token in value.split(","):
            capability = _CAPABILITY_BY_TOKEN.get(token.strip())
            if capability is not None:
                omitted.add(capability)
    return frozenset(omitted)


__all__ = [
    "ParsedSmartComment",
    "omit_capabilities",
    "parse_smart_comment",
]
