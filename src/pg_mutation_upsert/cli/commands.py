# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""
pg-upsert CLI Commands.

Inspect catalog snapshots, preview the statement an upsert would run, and
introspect a live database into a YAML catalog.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from uuid import uuid4

import click
from rich.console import Console
from rich.table import Table

from pg_mutation_upsert.catalog import (
    dump_catalog_to_yaml,
    load_catalog_from_postgres,
    load_catalog_from_yaml,
)
from pg_mutation_upsert.engine import UpsertEngine
from pg_mutation_upsert.enums import EnumOnConflictUpdateValue
from pg_mutation_upsert.errors import UpsertEngineError
from pg_mutation_upsert.models import (
    ModelCatalogSnapshot,
    ModelRelation,
    ModelUpsertEngineConfig,
    ModelUpsertExecutorConfig,
    ModelUpsertOnConflict,
    ModelUpsertRequest,
)

console = Console()

CONNECT_TIMEOUT_SECONDS = 10.0


@click.group()
def cli() -> None:
    """PostgreSQL upsert engine CLI."""


def _load_snapshot(catalog: str) -> ModelCatalogSnapshot:
    try:
        return load_catalog_from_yaml(Path(catalog))
    except UpsertEngineError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise SystemExit(1)


def _find_relation(snapshot: ModelCatalogSnapshot, table: str) -> ModelRelation:
    namespace, _, name = table.rpartition(".")
    relation = snapshot.get_relation(namespace or None, name)
    if relation is None:
        console.print(f"[red]Relation not found: {table}[/red]")
        raise SystemExit(1)
    return relation


def _parse_json_object(option: str, raw: str | None) -> dict[str, object] | None:
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e.msg}", param_hint=option) from e
    if not isinstance(value, dict):
        raise click.BadParameter("must be a JSON object", param_hint=option)
    return value


@cli.command("tables")
@click.argument("catalog", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--all/--upsertable-only",
    "show_all",
    default=False,
    help="Include relations that do not qualify for upsert",
)
def tables_cmd(catalog: str, show_all: bool) -> None:
    """List relations of a YAML CATALOG and their conflict targets."""
    snapshot = _load_snapshot(catalog)
    relations = snapshot.relations if show_all else snapshot.upsertable_relations()

    if not relations:
        console.print("[yellow]No upsertable relations found[/yellow]")
        return

    table = Table(title="Relations")
    table.add_column("Relation", style="cyan")
    table.add_column("Upsert", style="bold")
    table.add_column("Constraints (declared order)")
    table.add_column("Where columns")

    try:
        for relation in relations:
            constraints = ", ".join(
                f"{constraint.name}("
                + ", ".join(col.name for col in relation.constraint_columns(constraint))
                + ")"
                for constraint in relation.constraints
            )
            table.add_row(
                relation.qualified_name,
                "[green]yes[/green]" if relation.is_upsertable else "[red]no[/red]",
                constraints or "-",
                ", ".join(col.name for col in relation.where_columns()) or "-",
            )
    except UpsertEngineError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise SystemExit(1)

    console.print(table)


@cli.command("plan")
@click.argument("catalog", type=click.Path(exists=True, dir_okay=False))
@click.argument("table")
@click.option("--input", "input_json", default="{}", help="Input values as JSON")
@click.option("--where", "where_json", default=None, help="Match conditions as JSON")
@click.option("--ignore", multiple=True, help="Column to leave untouched on conflict")
@click.option(
    "--do-nothing",
    is_flag=True,
    default=False,
    help="Force DO NOTHING (requires conflict tuning)",
)
@click.option(
    "--current-timestamp",
    "timestamp_columns",
    multiple=True,
    help="Column assigned CURRENT_TIMESTAMP on conflict (requires conflict tuning)",
)
def plan_cmd(
    catalog: str,
    table: str,
    input_json: str,
    where_json: str | None,
    ignore: tuple[str, ...],
    do_nothing: bool,
    timestamp_columns: tuple[str, ...],
) -> None:
    """Show the statement an upsert into TABLE would run, without running it.

    Conflict tuning options are honoured only when
    PG_UPSERT_ENABLE_CONFLICT_TUNING is set.
    """
    snapshot = _load_snapshot(catalog)
    relation = _find_relation(snapshot, table)
    input_values = _parse_json_object("--input", input_json) or {}
    where = _parse_json_object("--where", where_json)

    on_conflict = None
    if do_nothing or timestamp_columns:
        on_conflict = ModelUpsertOnConflict(
            do_nothing=do_nothing,
            do_update=dict.fromkeys(
                timestamp_columns, EnumOnConflictUpdateValue.CURRENT_TIMESTAMP
            ),
        )

    correlation_id = uuid4()
    try:
        engine = UpsertEngine(ModelUpsertEngineConfig.from_env())
        request = ModelUpsertRequest.for_relation(
            relation,
            input=input_values,
            where=where,
            ignore=ignore,
            on_conflict=on_conflict,
        )
        target = engine.resolve(relation, request, correlation_id)
        plan = engine.plan(relation, request, correlation_id, target=target)
        statement = engine.render(relation, plan)
    except UpsertEngineError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise SystemExit(1)

    if not relation.is_upsertable:
        console.print(
            f"[yellow]Warning: {relation.qualified_name} does not qualify for upsert"
            "[/yellow]"
        )

    console.print(f"[bold cyan]Relation:[/bold cyan]   {relation.qualified_name}")
    if statement.constraint_name is None:
        console.print("[bold cyan]Conflict:[/bold cyan]   none (DEFAULT VALUES)")
    else:
        console.print(
            f"[bold cyan]Conflict:[/bold cyan]   {target.constraint_name} "
            f"(via {target.source.value}, "
            f"action {statement.conflict_action.value})"
        )
        if target.is_ambiguous:
            console.print(
                "[yellow]Ambiguous: also matched "
                f"{', '.join(target.candidates[1:])}[/yellow]"
            )
    console.print(f"[bold cyan]SQL:[/bold cyan]        {statement.sql}", soft_wrap=True)

    if statement.params:
        params = Table(title="Parameters")
        params.add_column("#", justify="right")
        params.add_column("Column", style="cyan")
        params.add_column("Value")
        params.add_column("Type", style="dim")
        for index, (column, value) in enumerate(
            zip(statement.columns, statement.params, strict=True), start=1
        ):
            params.add_row(f"${index}", column, repr(value), type(value).__name__)
        console.print(params)


async def _run_introspect(
    config: ModelUpsertExecutorConfig,
    schemas: tuple[str, ...],
) -> ModelCatalogSnapshot:
    """Async implementation for the introspect command."""
    import asyncpg

    correlation_id = uuid4()
    try:
        conn = await asyncio.wait_for(
            asyncpg.connect(config.dsn),
            timeout=CONNECT_TIMEOUT_SECONDS,
        )
    except TimeoutError:
        console.print(
            f"[red]Connection timed out to {config.sanitized_dsn} "
            f"(correlation_id={correlation_id})[/red]"
        )
        raise SystemExit(1)
    except (asyncpg.PostgresError, OSError) as e:
        console.print(
            f"[red]Failed to connect to {config.sanitized_dsn}: {type(e).__name__} "
            f"(correlation_id={correlation_id})[/red]"
        )
        raise SystemExit(1)
    try:
        return await load_catalog_from_postgres(conn, schemas)
    finally:
        await conn.close()


@cli.command("introspect")
@click.option(
    "--schema",
    "schemas",
    multiple=True,
    default=("public",),
    show_default=True,
    help="Schema to introspect (repeatable)",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the YAML catalog to a file instead of stdout",
)
def introspect_cmd(schemas: tuple[str, ...], output: str | None) -> None:
    """Dump a YAML catalog from the database at PG_UPSERT_DSN."""
    import asyncpg

    try:
        config = ModelUpsertExecutorConfig.from_env()
    except UpsertEngineError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise SystemExit(1)

    try:
        snapshot = asyncio.run(_run_introspect(config, schemas))
    except asyncpg.PostgresError as e:
        console.print(f"[red]Error: {type(e).__name__}[/red]")
        raise SystemExit(1)

    document = dump_catalog_to_yaml(snapshot)
    if output is None:
        click.echo(document, nl=False)
        return
    Path(output).write_text(document, encoding="utf-8")
    console.print(
        f"[green]Wrote {len(snapshot.relations)} relation(s) to {output}[/green]"
    )


__all__ = ["cli"]
