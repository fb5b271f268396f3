"""Public store facade.

InitiativeStore is opened once per process; opening runs any pending
schema migrations before the accessors become usable. Accessors report
plain booleans or absent values, hiding the cause of failures.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from initiative.config.models import StorageConfig
from initiative.models.things import Thing
from initiative.storage.engine import SQLiteEngine
from initiative.storage.key_value import KeyValueStore
from initiative.storage.migrations import REGISTRY
from initiative.storage.migrator import MigrationReport, Migrator
from initiative.storage.record_store import RecordStore
from initiative.storage.schema import SchemaRegistry


class InitiativeStore:
    """
    Things and settings persistence.

    Usage:
        store = InitiativeStore(config.storage)
        await store.open()
        ...
        await store.close()
    """

    def __init__(
        self,
        config: StorageConfig,
        registry: SchemaRegistry | None = None,
        engine: SQLiteEngine | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or REGISTRY
        self.engine = engine or SQLiteEngine(config.db_path)
        self._things: RecordStore | None = None
        self._settings: KeyValueStore | None = None
        self.migration: MigrationReport | None = None

    @property
    def is_open(self) -> bool:
        return self._things is not None

    async def open(self) -> MigrationReport:
        """
        Open the database and bring its schema up to date.

        Raises:
            MigrationError: If any migration step fails. On this or any
                other error the connection is closed and the store stays
                unusable.
        """
        with logger.contextualize(store=self.config.db_name):
            await self.engine.initialize()
            try:
                report = await Migrator(self.engine, self.registry).migrate(
                    self.config.target_version
                )
            except Exception:
                logger.exception("Store at {} could not be opened", self.config.db_path)
                await self.engine.close()
                raise

        self._things = RecordStore(self.engine)
        self._settings = KeyValueStore(self.engine)
        self.migration = report
        return report

    async def close(self) -> None:
        """Close the database connection."""
        self._things = None
        self._settings = None
        await self.engine.close()

    @property
    def things(self) -> RecordStore:
        """Typed thing accessors, raising if the store is not open."""
        if self._things is None:
            raise RuntimeError("Store not opened")
        return self._things

    @property
    def settings(self) -> KeyValueStore:
        """Typed settings accessors, raising if the store is not open."""
        if self._settings is None:
            raise RuntimeError("Store not opened")
        return self._settings

    # =========================================================================
    # Things
    # =========================================================================

    async def get_all_things(self) -> list[Thing]:
        result = await self.things.list_all()
        return result.value if result.ok and result.value is not None else []

    async def get_thing(self, thing_id: str) -> Thing | None:
        result = await self.things.get(thing_id)
        return result.value if result.ok else None

    async def save_thing(self, thing: Thing | Mapping[str, Any]) -> bool:
        return (await self.things.put(thing)).ok

    async def delete_thing(self, thing_id: str) -> bool:
        return (await self.things.delete(thing_id)).ok

    # =========================================================================
    # Settings
    # =========================================================================

    async def get_value(self, key: str) -> Any | None:
        result = await self.settings.get(key)
        return result.value if result.ok else None

    async def set_value(self, key: str, value: Any) -> bool:
        return (await self.settings.set(key, value)).ok

    async def delete_value(self, key: str) -> bool:
        return (await self.settings.delete(key)).ok
