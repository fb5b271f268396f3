"""Migration driver.

Brings a store from its persisted schema version up to the target
version, one registered version at a time.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from initiative.errors import InitiativeError, MigrationError
from initiative.storage.schema import SchemaRegistry, SchemaVersion

if TYPE_CHECKING:
    from initiative.ports.storage import StorageEnginePort


@dataclass
class MigrationReport:
    """Result of one migrate() call."""

    persisted_version: int
    target_version: int
    fresh: bool = False
    applied: list[int] = field(default_factory=list)
    rewritten: dict[int, int] = field(default_factory=dict)

    @property
    def upgraded(self) -> bool:
        return bool(self.applied)


class Migrator:
    """
    Applies pending schema versions to a storage engine.

    Each version's table layout, record transforms and version bump
    are committed together in one transaction. A failing step rolls
    back and raises MigrationError; steps committed before it stay.
    """

    def __init__(self, engine: "StorageEnginePort", registry: SchemaRegistry) -> None:
        self.engine = engine
        self.registry = registry

    async def migrate(self, target_version: int | None = None) -> MigrationReport:
        """
        Migrate the store to ``target_version`` (default: latest).

        A fresh store is created directly at the target layout and no
        transform runs, since there are no records to rewrite.

        Raises:
            MigrationError: If the target is unknown, the store is newer
                than the target, or any step fails.
        """
        target = self._resolve_target(target_version)
        persisted = await self._persisted_version(target)
        report = MigrationReport(persisted_version=persisted, target_version=target)

        if persisted > target:
            raise MigrationError(
                f"Store is at schema version {persisted}, newer than target {target}",
                version=persisted,
            )

        if persisted == 0:
            await self._create_fresh(target)
            report.fresh = True
            report.applied.append(target)
        else:
            for schema in self.registry.plan(target, persisted):
                report.rewritten[schema.version] = await self._apply(schema)
                report.applied.append(schema.version)

        self.engine.bind_tables(self.registry.tables_at(target))

        if report.upgraded:
            logger.info(
                "Schema migrated: {} -> {} (applied {})",
                persisted,
                target,
                report.applied,
            )
        else:
            logger.debug("Schema up to date at version {}", target)
        return report

    def _resolve_target(self, target_version: int | None) -> int:
        if target_version is None:
            return self.registry.latest.version
        if self.registry.get(target_version) is None:
            raise MigrationError(
                f"Unknown schema version {target_version}; "
                f"registered versions are {self.registry.versions}",
                version=target_version,
            )
        return target_version

    async def _persisted_version(self, target: int) -> int:
        try:
            return await self.engine.persisted_version()
        except InitiativeError as e:
            raise MigrationError(f"Could not read schema version: {e}", version=target) from e

    async def _create_fresh(self, target: int) -> None:
        tables = self.registry.tables_at(target)
        try:
            async with self.engine.transaction():
                await self.engine.apply_tables(tables)
                await self.engine.record_version(target)
        except Exception as e:
            raise MigrationError(
                f"Failed to create store at schema version {target}: {e}", version=target
            ) from e
        logger.info("Created store at schema version {}", target)

    async def _apply(self, schema: SchemaVersion) -> int:
        """Apply one version; returns the number of records rewritten."""
        rewritten = 0
        try:
            async with self.engine.transaction():
                await self.engine.apply_tables(schema.tables)
                for table, transform in schema.transforms.items():
                    count = await self.engine.rewrite_table(table, transform)
                    logger.debug(
                        "Schema version {}: rewrote {} record(s) in {}",
                        schema.version,
                        count,
                        table,
                    )
                    rewritten += count
                await self.engine.record_version(schema.version)
        except Exception as e:
            raise MigrationError(
                f"Failed to apply schema version {schema.version}: {e}",
                version=schema.version,
            ) from e

        logger.info(
            "Applied schema version {} ({}): {} record(s) rewritten",
            schema.version,
            schema.description or "no description",
            rewritten,
        )
        return rewritten
