# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for UpsertEngine (resolve, reconcile, build)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from uuid import uuid4

import pytest

from pg_mutation_upsert.engine import UpsertEngine
from pg_mutation_upsert.enums import (
    EnumConflictAction,
    EnumConflictTargetSource,
    EnumConstraintKind,
    EnumOnConflictUpdateValue,
    EnumUpsertErrorCode,
)
from pg_mutation_upsert.errors import (
    InvalidUpsertRequestError,
    NoMatchingConstraintError,
    ValueMismatchError,
)
from pg_mutation_upsert.models import (
    ModelRelation,
    ModelUpsertEngineConfig,
    ModelUpsertOnConflict,
    ModelUpsertRequest,
)

pytestmark = [pytest.mark.unit]


@pytest.fixture
def engine() -> UpsertEngine:
    return UpsertEngine()


@pytest.fixture
def tuning_engine() -> UpsertEngine:
    return UpsertEngine(
        ModelUpsertEngineConfig(enable_query_defined_conflict_resolution_tuning=True)
    )


class TestBuild:
    """End-to-end statement construction."""

    def test_where_promotes_and_targets_unique_constraint(
        self, engine: UpsertEngine, bikes: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            bikes,
            where={"serial_number": "123", "weight": 0.0},
            input={"model": "Stumpjumper", "make": "Specialized"},
        )

        statement = engine.build(bikes, request)

        assert statement.columns == ("weight", "make", "model", "serial_number")
        assert statement.params == (0.0, "Specialized", "Stumpjumper", "123")
        assert statement.constraint_name == "serial_weight_unique"
        assert statement.conflict_action is EnumConflictAction.DO_UPDATE

    def test_ignore_keeps_column_out_of_assignments(
        self, engine: UpsertEngine, roles: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            roles,
            input={"project_name": "p", "title": "t", "name": "second"},
            ignore=["name"],
        )

        statement = engine.build(roles, request)

        assert '"name"' in statement.sql.split("VALUES")[0]
        assert 'excluded."name"' not in statement.sql

    def test_default_values(self, engine: UpsertEngine, car: ModelRelation) -> None:
        statement = engine.build(car, ModelUpsertRequest())

        assert statement.sql == 'INSERT INTO "public"."car" DEFAULT VALUES RETURNING *'

    def test_primary_key_used_without_other_match(
        self, engine: UpsertEngine, bikes: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            bikes, input={"id": 1, "make": "Trek"}
        )

        statement = engine.build(bikes, request)

        assert statement.constraint_name == "bikes_pkey"

    def test_numeric_beyond_default_decimal_precision(
        self, engine: UpsertEngine, relation_factory: Callable[..., ModelRelation]
    ) -> None:
        ledger = relation_factory(
            "ledger",
            [("id", "int4"), ("amount", "numeric")],
            [("ledger_pkey", EnumConstraintKind.PRIMARY, (1,))],
            type_modifiers={"amount": (40 << 16 | 10) + 4},
        )
        request = ModelUpsertRequest.for_relation(
            ledger, input={"id": 1, "amount": 10**25}
        )

        statement = engine.build(ledger, request)

        assert statement.params == (1, Decimal(10**25))

    def test_debug_logging_excludes_values(
        self,
        engine: UpsertEngine,
        bikes: ModelRelation,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            bikes, input={"serial_number": "secret-serial", "weight": 1.5}
        )

        with caplog.at_level(logging.DEBUG, logger="pg_mutation_upsert"):
            engine.build(bikes, request)

        assert "Built upsert statement" in caplog.text
        assert "secret-serial" not in caplog.text


class TestResolveAndPlan:
    """Intermediate pipeline steps."""

    def test_resolve_reports_source(
        self, engine: UpsertEngine, roles: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(roles, input={"name": "n"})

        target = engine.resolve(roles, request)

        assert target.constraint_name == "roles_pkey"
        assert target.source is EnumConflictTargetSource.PRIMARY_KEY

    def test_plan_then_render_matches_build(
        self, engine: UpsertEngine, roles: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            roles, input={"project_name": "p", "title": "t", "rank": 2}
        )

        rendered = engine.render(roles, engine.plan(roles, request))

        assert rendered == engine.build(roles, request)

    def test_plan_reuses_resolved_target(
        self,
        engine: UpsertEngine,
        bikes: ModelRelation,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            bikes, where={"id": 1, "serial_number": "123", "weight": 0.0}, input={}
        )

        with caplog.at_level(logging.WARNING, logger="pg_mutation_upsert"):
            target = engine.resolve(bikes, request)
            plan = engine.plan(bikes, request, target=target)

        warnings = [
            record
            for record in caplog.records
            if "Ambiguous conflict target" in record.getMessage()
        ]
        assert len(warnings) == 1
        assert plan.constraint_name == target.constraint_name == "bikes_pkey"


class TestFailures:
    """Local failure exits raise before any statement exists."""

    def test_value_mismatch(self, engine: UpsertEngine, bikes: ModelRelation) -> None:
        correlation_id = uuid4()
        request = ModelUpsertRequest.for_relation(
            bikes,
            where={"serial_number": "123", "weight": 0.0},
            input={"serial_number": "456"},
        )

        with pytest.raises(ValueMismatchError) as exc_info:
            engine.build(bikes, request, correlation_id)

        assert exc_info.value.column == "serial_number"
        assert exc_info.value.model.correlation_id == correlation_id
        assert exc_info.value.error_code.is_user_error

    def test_no_matching_constraint(
        self, engine: UpsertEngine, no_primary_keys: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            no_primary_keys, input={"name": "x"}
        )

        with pytest.raises(NoMatchingConstraintError):
            engine.build(no_primary_keys, request)

    def test_unknown_column_rejected(
        self, engine: UpsertEngine, bikes: ModelRelation
    ) -> None:
        request = ModelUpsertRequest(input={"colour": "red"})

        with pytest.raises(InvalidUpsertRequestError) as exc_info:
            engine.build(bikes, request)

        assert exc_info.value.model.context["unknown_columns"] == ["colour"]

    def test_tuning_disabled_rejects_on_conflict(
        self, engine: UpsertEngine, roles: ModelRelation
    ) -> None:
        request = ModelUpsertRequest(
            input={"project_name": "p", "title": "t"},
            on_conflict=ModelUpsertOnConflict(do_nothing=True),
        )

        with pytest.raises(InvalidUpsertRequestError) as exc_info:
            engine.build(roles, request)

        assert exc_info.value.error_code is EnumUpsertErrorCode.INVALID_REQUEST
        assert exc_info.value.model.context["field"] == "on_conflict"


class TestConflictTuning:
    """Query-defined conflict resolution tuning when enabled."""

    def test_do_nothing(
        self, tuning_engine: UpsertEngine, roles: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            roles,
            input={"project_name": "p", "title": "t", "name": "n"},
            on_conflict=ModelUpsertOnConflict(do_nothing=True),
        )

        statement = tuning_engine.build(roles, request)

        assert statement.conflict_action is EnumConflictAction.DO_NOTHING

    def test_ignore_and_current_timestamp(
        self, tuning_engine: UpsertEngine, roles: ModelRelation
    ) -> None:
        request = ModelUpsertRequest.for_relation(
            roles,
            input={"project_name": "p", "title": "t", "name": "n"},
            on_conflict=ModelUpsertOnConflict(
                do_update={
                    "name": EnumOnConflictUpdateValue.IGNORE,
                    "updated": EnumOnConflictUpdateValue.CURRENT_TIMESTAMP,
                }
            ),
        )

        statement = tuning_engine.build(roles, request)

        assert statement.sql == (
            'INSERT INTO "public"."roles" ("project_name", "title", "name") '
            "VALUES ($1, $2, $3) "
            'ON CONFLICT ON CONSTRAINT "roles_project_name_title_key" '
            'DO UPDATE SET "project_name" = excluded."project_name", '
            '"title" = excluded."title", "updated" = CURRENT_TIMESTAMP '
            "RETURNING *"
        )
