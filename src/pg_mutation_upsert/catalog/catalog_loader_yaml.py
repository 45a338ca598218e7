# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog snapshot loader for YAML documents.

Lets the engine run (and be tested, and be driven from the CLI) without a
database. The document mirrors the catalog models field for field::

    relations:
      - namespace: public
        name: roles
        attributes:
          - {name: id, num: 1, type_name: int4}
          - {name: rank, num: 5, type_name: int4, omit: [updateOnConflict]}
        constraints:
          - {name: roles_pkey, kind: p, key_attribute_nums: [1]}
          - {name: roles_project_name_title_key, kind: u, key_attribute_nums: [2, 3]}

An attribute or relation that gives a ``comment`` but no ``omit`` list
gets its omit set from the comment's ``@omit`` smart tags, exactly like
the PostgreSQL loader.

Security:
    Uses yaml.safe_load() to prevent arbitrary code execution.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pg_mutation_upsert.errors import (
    ModelUpsertErrorContext,
    ProtocolConfigurationError,
)
from pg_mutation_upsert.models import ModelCatalogSnapshot
from pg_mutation_upsert.utils import omit_capabilities

logger = logging.getLogger(__name__)

# Large enough for thousands of relations.
MAX_CATALOG_SIZE_BYTES = 10 * 1024 * 1024


def _config_error(message: str, source: str) -> ProtocolConfigurationError:
    return ProtocolConfigurationError(
        message,
        context=ModelUpsertErrorContext(operation="load_catalog_yaml"),
        source=source,
    )


def _apply_comment_omits(entry: dict[str, object]) -> dict[str, object]:
    comment = entry.get("comment")
    if "omit" in entry or not isinstance(comment, str):
        return entry
    return {
        **entry,
        "omit": sorted(capability.value for capability in omit_capabilities(comment)),
    }


def load_catalog_from_yaml(source: str | Path) -> ModelCatalogSnapshot:
    """Build a catalog snapshot from a YAML document.

    Args:
        source: A Path to a YAML file, or the YAML text itself.

    Returns:
        Validated, immutable catalog snapshot.

    Raises:
        ProtocolConfigurationError: If the file is missing or too large, the
            YAML is malformed, or the document does not describe a valid
            catalog.
    """
    if isinstance(source, Path):
        label = str(source)
        if not source.is_file():
            raise _config_error(f"Catalog file not found: {source}", label)
        file_size = source.stat().st_size
        if file_size > MAX_CATALOG_SIZE_BYTES:
            raise _config_error(
                f"Catalog file too large: {file_size} bytes "
                f"(max {MAX_CATALOG_SIZE_BYTES})",
                label,
            )
        text = source.read_text(encoding="utf-8")
    else:
        label = "<string>"
        text = source

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise _config_error(f"Invalid YAML in catalog: {e}", label) from e

    if not isinstance(document, dict) or not isinstance(
        document.get("relations"), list
    ):
        raise _config_error("Catalog must be a mapping with a 'relations' list", label)

    relations = []
    for relation in document["relations"]:
        if not isinstance(relation, dict):
            raise _config_error("Each relation must be a mapping", label)
        relation = dict(_apply_comment_omits(relation))
        attributes = relation.get("attributes") or []
        if isinstance(attributes, list):
            relation["attributes"] = [
                _apply_comment_omits(attr) if isinstance(attr, dict) else attr
                for attr in attributes
            ]
        relations.append(relation)

    try:
        snapshot = ModelCatalogSnapshot.model_validate({"relations": relations})
    except ValidationError as e:
        raise _config_error(
            f"Invalid catalog document: {e.error_count()} error(s)", label
        ) from e

    logger.debug(
        "Loaded catalog snapshot from YAML",
        extra={"source": label, "relation_count": len(snapshot.relations)},
    )
    return snapshot


def dump_catalog_to_yaml(snapshot: ModelCatalogSnapshot) -> str:
    """Serialize a snapshot to the YAML document ``load_catalog_from_yaml`` reads.

    Default-valued fields are left out and omit sets are sorted, so the
    output is stable across runs.
    """
    data = snapshot.model_dump(mode="json", exclude_defaults=True)
    for relation in data.get("relations", []):
        for entry in (relation, *relation.get("attributes", [])):
            if "omit" in entry:
                entry["omit"] = sorted(entry["omit"])
            elif "comment" in entry:
                # keep an explicit empty list so loading does not re-derive it
                entry["omit"] = []
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=None)


__all__ = ["MAX_CATALOG_SIZE_BYTES", "dump_catalog_to_yaml", "load_catalog_from_yaml"]
