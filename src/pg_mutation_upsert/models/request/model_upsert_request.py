# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upsert request model.

A request carries optional match conditions (``where``), the new values
(``input``) and the columns to leave untouched on conflict (``ignore``).
All keys are column names. Requests built from client-facing camelCase
field names go through ``from_field_args``.

Validation:
    Column names are checked against the relation eagerly, before any
    resolution happens, so a misspelt ignore column is rejected instead of
    being silently ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from pg_mutation_upsert.enums import EnumOmitCapability, EnumOnConflictUpdateValue
from pg_mutation_upsert.errors import InvalidUpsertRequestError, ModelUpsertErrorContext
from pg_mutation_upsert.models.catalog import ModelRelation
from pg_mutation_upsert.models.request.model_upsert_on_conflict import (
    ModelUpsertOnConflict,
)


class ModelUpsertRequest(BaseModel):
    """One logical row to upsert.

    Attributes:
        input: Column name to value. May be empty (DEFAULT VALUES insert).
        where: Column name to match value. None or empty means "no where".
        ignore: Columns excluded from the conflict-update assignment list.
        on_conflict: Optional query-defined conflict resolution tuning.
        client_mutation_id: Opaque token returned verbatim in the payload.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    input: dict[str, object] = Field(default_factory=dict)
    where: dict[str, object] | None = Field(default=None)
    ignore: frozenset[str] = Field(default_factory=frozenset)
    on_conflict: ModelUpsertOnConflict | None = Field(default=None)
    client_mutation_id: str | None = Field(default=None)

    @property
    def has_where(self) -> bool:
        """True when match conditions were supplied and are non-empty."""
        return bool(self.where)

    def validate_against(self, relation: ModelRelation) -> None:
        """Reject column names the relation does not accept.

        Raises:
            InvalidUpsertRequestError: If a where key is not a readable
                column, an input key is not a creatable column, an
                ignore/on_conflict column does not exist, or an ignore
                column is already omitted from conflict updates.
        """
        all_columns = frozenset(attr.name for attr in relation.attributes)
        checks: list[tuple[str, Iterable[str], frozenset[str]]] = [
            ("where", self.where or {}, relation.readable_column_names()),
            ("input", self.input, relation.creatable_column_names()),
            ("ignore", self.ignore, all_columns),
        ]
        if self.on_conflict is not None:
            checks.append(("on_conflict", self.on_conflict.do_update, all_columns))

        for field_name, names, allowed in checks:
            unknown = sorted(name for name in names if name not in allowed)
            if unknown:
                raise InvalidUpsertRequestError(
                    f"Unknown column(s) in {field_name} for "
                    f"{relation.qualified_name}: {', '.join(unknown)}",
                    context=ModelUpsertErrorContext(
                        operation="validate_request",
                        relation=relation.qualified_name,
                    ),
                    field=field_name,
                    unknown_columns=unknown,
                )

        not_updatable = sorted(
            attr.name
            for attr in relation.attributes
            if attr.name in self.ignore
            and relation.omits(attr, EnumOmitCapability.UPDATE_ON_CONFLICT)
        )
        if not_updatable:
            raise InvalidUpsertRequestError(
                f"Column(s) in ignore for {relation.qualified_name} are never "
                f"updated on conflict: {', '.join(not_updatable)}",
                context=ModelUpsertErrorContext(
                    operation="validate_request",
                    relation=relation.qualified_name,
                ),
                field="ignore",
                omitted_columns=not_updatable,
            )

    @classmethod
    def for_relation(
        cls,
        relation: ModelRelation,
        *,
        input: Mapping[str, object],  # noqa: A002
        where: Mapping[str, object] | None = None,
        ignore: Iterable[str] = (),
        on_conflict: ModelUpsertOnConflict | None = None,
        client_mutation_id: str | None = None,
    ) -> ModelUpsertRequest:
        """Build a request keyed by column names and validate it.

        Raises:
            InvalidUpsertRequestError: If any column name is unknown.
        """
        request = cls(
            input=dict(input),
            where=dict(where) if where is not None else None,
            ignore=frozenset(ignore),
            on_conflict=on_conflict,
            client_mutation_id=client_mutation_id,
        )
        request.validate_against(relation)
        return request

    @classmethod
    def from_field_args(
        cls,
        relation: ModelRelation,
        *,
        input: Mapping[str, object],  # noqa: A002
        where: Mapping[str, object] | None = None,
        ignore: Mapping[str, bool] | None = None,
        on_conflict: Mapping[str, object] | None = None,
        client_mutation_id: str | None = None,
    ) -> ModelUpsertRequest:
        """Build a request from client-facing camelCase field arguments.

        Args:
            relation: Target relation.
            input: Field name to value (``{"serialNumber": "123"}``).
            where: Field name to match value.
            ignore: Field name to flag; only fields flagged True are ignored.
            on_conflict: ``{"doNothing": bool, "doUpdate": {field: choice}}``.
            client_mutation_id: Opaque client token.

        Raises:
            InvalidUpsertRequestError: If a field name does not map to a column.
        """
        columns_by_field = {attr.field_name: attr.name for attr in relation.attributes}

        def to_columns(section: str, fields: Iterable[str]) -> list[str]:
            unknown = sorted(name for name in fields if name not in columns_by_field)
            if unknown:
                raise InvalidUpsertRequestError(
                    f"Unknown field(s) in {section} for "
                    f"{relation.qualified_name}: {', '.join(unknown)}",
                    context=ModelUpsertErrorContext(
                        operation="map_field_args",
                        relation=relation.qualified_name,
                    ),
                    field=section,
                    unknown_columns=unknown,
                )
            return [columns_by_field[name] for name in fields]

        def remap(section: str, values: Mapping[str, object]) -> dict[str, object]:
            return dict(zip(to_columns(section, values), values.values(), strict=True))

        tuning: ModelUpsertOnConflict | None = None
        if on_conflict is not None:
            do_update = on_conflict.get("doUpdate") or {}
            if not isinstance(do_update, Mapping):
                raise InvalidUpsertRequestError(
                    "onConflict.doUpdate must be an object",
                    field="on_conflict",
                )
            choices = {choice.value: choice for choice in EnumOnConflictUpdateValue}
            invalid = sorted(
                str(choice) for choice in do_update.values() if choice not in choices
            )
            if invalid:
                raise InvalidUpsertRequestError(
                    f"Unsupported onConflict.doUpdate value(s): {', '.join(invalid)}",
                    field="on_conflict",
                )
            tuning = ModelUpsertOnConflict(
                do_nothing=bool(on_conflict.get("doNothing", False)),
                do_update={
                    column: choices[choice]
                    for column, choice in remap("on_conflict", do_update).items()
                },
            )

        ignore = ignore or {}
        flagged = [
            column
            for column, enabled in zip(
                to_columns("ignore", ignore), ignore.values(), strict=True
            )
            if enabled
        ]
        return cls.for_relation(
            relation,
            input=remap("input", input),
            where=remap("where", where) if where is not None else None,
            ignore=flagged,
            on_conflict=tuning,
            client_mutation_id=client_mutation_id,
        )


__all__ = ["ModelUpsertRequest"]
