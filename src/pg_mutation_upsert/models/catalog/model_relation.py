# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog relation model.

A ModelRelation is an immutable point-in-time view of one table: its
columns in declared order, its unique/primary constraints in declared
order, and the capability flags that decide whether an upsert mutation
exists for it at all.

Thread Safety:
    Instances are frozen. A snapshot may be shared by any number of
    concurrent requests; schema changes are handled by building a new
    snapshot, never by patching an existing one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pg_mutation_upsert.enums import EnumOmitCapability
from pg_mutation_upsert.errors import CatalogConsistencyError, ModelUpsertErrorContext
from pg_mutation_upsert.models.catalog.model_attribute import ModelAttribute
from pg_mutation_upsert.models.catalog.model_constraint import ModelConstraint


class ModelRelation(BaseModel):
    """Schema metadata for one relation.

    Attributes:
        namespace: Schema name; relations without one never get an upsert.
        name: Relation name.
        attributes: Columns, in declared order.
        constraints: Unique and primary key constraints, in declared order.
        is_selectable: Caller may SELECT from the relation.
        is_insertable: Caller may INSERT into the relation.
        is_updatable: Caller may UPDATE the relation.
        omit: Capabilities withdrawn from the relation by smart comments.
        comment: Relation comment with smart tags, if any.

    Example:
        >>> relation = ModelRelation(
        ...     namespace="public",
        ...     name="bikes",
        ...     attributes=(
        ...         ModelAttribute(name="id", num=1, type_name="int4"),
        ...         ModelAttribute(name="serial_number", num=2, type_name="varchar"),
        ...     ),
        ...     constraints=(
        ...         ModelConstraint(
        ...             name="bikes_pkey",
        ...             kind=EnumConstraintKind.PRIMARY,
        ...             key_attribute_nums=(1,),
        ...         ),
        ...     ),
        ... )
        >>> relation.primary_key_constraint.name
        'bikes_pkey'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    namespace: str | None = Field(..., description="Schema (namespace) name")
    name: str = Field(..., min_length=1, description="Relation name")
    attributes: tuple[ModelAttribute, ...] = Field(
        default=(),
        description="Columns in declared order",
    )
    constraints: tuple[ModelConstraint, ...] = Field(
        default=(),
        description="Unique/primary constraints in declared order",
    )
    is_selectable: bool = Field(default=True)
    is_insertable: bool = Field(default=True)
    is_updatable: bool = Field(default=True)
    omit: frozenset[EnumOmitCapability] = Field(
        default_factory=frozenset,
        description="Capabilities withdrawn by @omit smart comments",
    )
    comment: str | None = Field(default=None, description="Relation comment")

    @model_validator(mode="after")
    def _check_unique_names(self) -> ModelRelation:
        attribute_names = [attr.name for attr in self.attributes]
        if len(set(attribute_names)) != len(attribute_names):
            raise ValueError(f"Duplicate attribute names on relation {self.name!r}")
        attribute_nums = [attr.num for attr in self.attributes]
        if len(set(attribute_nums)) != len(attribute_nums):
            raise ValueError(
                f"Duplicate attribute positions on relation {self.name!r}"
            )
        constraint_names = [con.name for con in self.constraints]
        if len(set(constraint_names)) != len(constraint_names):
            raise ValueError(f"Duplicate constraint names on relation {self.name!r}")
        return self

    @property
    def qualified_name(self) -> str:
        """Dotted ``namespace.name`` used in logs and error context."""
        if self.namespace is None:
            return self.name
        return f"{self.namespace}.{self.name}"

    def attributes_in_order(self) -> tuple[ModelAttribute, ...]:
        """Columns sorted by declared-order position."""
        return tuple(sorted(self.attributes, key=lambda attr: attr.num))

    def attribute_by_name(self, name: str) -> ModelAttribute | None:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def omits(self, attribute: ModelAttribute, capability: EnumOmitCapability) -> bool:
        """Check whether a capability is withdrawn from one of this relation's columns.

        Args:
            attribute: Column of this relation.
            capability: Capability to check.

        Returns:
            True if the column's annotations withdraw the capability.
        """
        return capability in attribute.omit

    def is_omitted(self, capability: EnumOmitCapability) -> bool:
        """Check whether a capability is withdrawn from the relation itself."""
        return capability in self.omit

    def constraint_columns(
        self, constraint: ModelConstraint
    ) -> tuple[ModelAttribute, ...]:
        """Resolve a constraint's member positions to columns, in key order.

        Raises:
            CatalogConsistencyError: If any member position does not resolve
                to a column of this relation.
        """
        by_num = {attr.num: attr for attr in self.attributes}
        missing = [num for num in constraint.key_attribute_nums if num not in by_num]
        if missing:
            raise CatalogConsistencyError(
                "Consistency error: could not find an attribute!",
                context=ModelUpsertErrorContext(
                    operation="resolve_constraint_columns",
                    relation=self.qualified_name,
                    constraint=constraint.name,
                ),
                missing_attribute_nums=missing,
            )
        return tuple(by_num[num] for num in constraint.key_attribute_nums)

    @property
    def primary_key_constraint(self) -> ModelConstraint | None:
        for constraint in self.constraints:
            if constraint.is_primary_key:
                return constraint
        return None

    @property
    def is_upsertable(self) -> bool:
        """Whether the relation qualifies for an upsert mutation.

        Requires a namespace, a primary key, no ``@omit upsert`` annotation,
        and select, insert and update privileges.
        """
        return (
            self.namespace is not None
            and self.primary_key_constraint is not None
            and not self.is_omitted(EnumOmitCapability.UPSERT)
            and self.is_selectable
            and self.is_insertable
            and self.is_updatable
        )

    def where_columns(self) -> tuple[ModelAttribute, ...]:
        """Columns usable as upsert match conditions.

        The union, in first-seen order, of the member columns of every
        constraint whose members are all readable. Constraints with an
        unreadable member are skipped entirely.

        Raises:
            CatalogConsistencyError: If a constraint member does not resolve.
        """
        seen: dict[str, ModelAttribute] = {}
        for constraint in self.constraints:
            keys = self.constraint_columns(constraint)
            if any(self.omits(key, EnumOmitCapability.READ) for key in keys):
                continue
            for key in keys:
                seen.setdefault(key.name, key)
        return tuple(seen.values())

    def readable_column_names(self) -> frozenset[str]:
        return frozenset(
            attr.name
            for attr in self.attributes
            if not self.omits(attr, EnumOmitCapability.READ)
        )

    def creatable_column_names(self) -> frozenset[str]:
        return frozenset(
            attr.name
            for attr in self.attributes
            if not self.omits(attr, EnumOmitCapability.CREATE)
        )


__all__ = ["ModelRelation"]
