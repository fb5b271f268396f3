"""Key-value store for settings."""

from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import ValidationError

from initiative.errors import ConstraintError, StorageError
from initiative.models.results import StoreOutcome, StoreResult
from initiative.models.things import KeyValue

if TYPE_CHECKING:
    from initiative.ports.storage import StorageEnginePort

KEY_VALUE_TABLE = "key_value"


class KeyValueStore:
    """Settings persistence, independent of things."""

    def __init__(self, engine: "StorageEnginePort", table: str = KEY_VALUE_TABLE) -> None:
        self.engine = engine
        self.table = table

    async def get(self, key: str) -> StoreResult[Any]:
        """Fetch the value stored under ``key``."""
        try:
            record = await self.engine.get(self.table, key)
            if record is None:
                return StoreResult.not_found()
            return StoreResult.success(KeyValue.model_validate(record).value)
        except (StorageError, ValidationError) as e:
            logger.warning("Failed to read setting {}: {}", key, e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)

    async def set(self, key: str, value: Any) -> StoreResult[None]:
        """Store ``value`` under ``key``, replacing any previous value."""
        try:
            await self.engine.put(self.table, KeyValue(key=key, value=value).model_dump())
            return StoreResult.success()
        except ConstraintError as e:
            return StoreResult.failure(StoreOutcome.CONSTRAINT_VIOLATION, e)
        except StorageError as e:
            logger.warning("Failed to save setting {}: {}", key, e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)

    async def delete(self, key: str) -> StoreResult[None]:
        """Delete ``key``. Deleting an absent key succeeds."""
        try:
            await self.engine.delete(self.table, key)
            return StoreResult.success()
        except StorageError as e:
            logger.warning("Failed to delete setting {}: {}", key, e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)
