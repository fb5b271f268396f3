"""CLI entry point for the initiative store.

Provides commands for initializing and migrating the database,
inspecting its schema version, and exporting its contents.
"""

import asyncio
from pathlib import Path

import click

from initiative import __version__

_config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Initiative store.

    Local persistence for things and settings, with versioned
    schema migrations applied when the store is opened.
    """
    pass


@cli.command()
@_config_option
def init(config: Path | None) -> None:
    """Initialize the database and apply pending migrations.

    Creates the database if needed and upgrades it to the
    configured (or latest) schema version.
    """
    from initiative.config.loader import load_config
    from initiative.errors import MigrationError
    from initiative.store import InitiativeStore
    from initiative.utils.logging import configure_logging

    cfg = load_config(config)
    configure_logging(cfg.logging)

    async def main() -> None:
        store = InitiativeStore(cfg.storage)
        try:
            report = await store.open()
        except MigrationError as e:
            raise click.ClickException(f"Migration failed at version {e.version}: {e}") from e

        await store.close()

        click.echo(f"Database initialized at {cfg.storage.db_path}")
        if report.fresh:
            click.echo(f"  Created at schema version {report.target_version}")
        elif report.upgraded:
            click.echo(
                f"  Migrated {report.persisted_version} -> {report.target_version} "
                f"(applied {', '.join(str(v) for v in report.applied)})"
            )
        else:
            click.echo(f"  Schema up to date at version {report.target_version}")

    asyncio.run(main())


@cli.command()
@_config_option
def status(config: Path | None) -> None:
    """Show schema version and record counts.

    Does not migrate; reports what a subsequent open would do.
    """
    from initiative.config.loader import load_config
    from initiative.storage.engine import SQLiteEngine
    from initiative.storage.migrations import REGISTRY

    cfg = load_config(config)

    async def main() -> None:
        db_path = cfg.storage.db_path

        if not db_path.exists():
            click.echo("Database not initialized. Run 'initiative init' first.")
            return

        engine = SQLiteEngine(db_path)
        await engine.initialize()
        try:
            persisted = await engine.persisted_version()
            engine.bind_tables(REGISTRY.tables_at(persisted))

            click.echo("\nStore Status:")
            click.echo("-" * 60)
            click.echo(f"  Database: {db_path}")
            click.echo(f"  Schema version: {persisted}")
            click.echo(f"  Latest version: {REGISTRY.latest.version}")

            pending = REGISTRY.plan(REGISTRY.latest.version, persisted)
            if pending:
                click.echo(f"  Pending: {', '.join(str(s.version) for s in pending)}")

            if "things" in REGISTRY.tables_at(persisted):
                click.echo(f"  Things: {await engine.count('things')}")
        finally:
            await engine.close()

    asyncio.run(main())


@cli.command()
def migrations() -> None:
    """List registered schema versions."""
    from initiative.storage.migrations import REGISTRY

    for schema in REGISTRY:
        transforms = ", ".join(sorted(schema.transforms)) or "-"
        click.echo(f"{schema.version:>3}  {schema.description}  [transforms: {transforms}]")


@cli.command()
@_config_option
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the export to this file instead of stdout",
)
def export(config: Path | None, output: Path | None) -> None:
    """Export all things and settings as JSON."""
    from initiative.config.loader import load_config
    from initiative.errors import MigrationError
    from initiative.storage.export import export_store
    from initiative.store import InitiativeStore
    from initiative.utils.logging import configure_logging

    cfg = load_config(config)
    configure_logging(cfg.logging)

    async def main() -> None:
        store = InitiativeStore(cfg.storage)
        try:
            await store.open()
        except MigrationError as e:
            raise click.ClickException(f"Migration failed at version {e.version}: {e}") from e

        try:
            data = await export_store(store)
        finally:
            await store.close()

        if output is None:
            click.echo(data.to_json())
        else:
            output.write_text(data.to_json())
            click.echo(f"Exported {len(data.things)} thing(s) to {output}")

    asyncio.run(main())


if __name__ == "__main__":
    cli()
