"""Record store: CRUD access to the things table."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import ValidationError

from initiative.errors import ConstraintError, StorageError
from initiative.models.results import StoreOutcome, StoreResult
from initiative.models.things import Thing

if TYPE_CHECKING:
    from initiative.ports.storage import StorageEnginePort

THINGS_TABLE = "things"


class RecordStore:
    """
    Accessors for things.

    Every call returns a StoreResult; storage and validation errors
    are converted into outcomes rather than raised.
    """

    def __init__(self, engine: "StorageEnginePort", table: str = THINGS_TABLE) -> None:
        self.engine = engine
        self.table = table

    async def get(self, thing_id: str) -> StoreResult[Thing]:
        """Fetch a thing by uuid."""
        try:
            record = await self.engine.get(self.table, thing_id)
            if record is None:
                return StoreResult.not_found()
            return StoreResult.success(Thing.from_record(record))
        except (StorageError, ValidationError) as e:
            logger.warning("Failed to read thing {}: {}", thing_id, e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)

    async def put(self, thing: Thing | Mapping[str, Any]) -> StoreResult[Thing]:
        """
        Insert or replace a thing by uuid.

        A name already used by another thing is a constraint violation;
        the stored thing is left unchanged.
        """
        try:
            if not isinstance(thing, Thing):
                thing = Thing.model_validate(dict(thing))
            await self.engine.put(self.table, thing.to_record())
            return StoreResult.success(thing)
        except (ConstraintError, ValidationError) as e:
            logger.info("Rejected thing: {}", e)
            return StoreResult.failure(StoreOutcome.CONSTRAINT_VIOLATION, e)
        except StorageError as e:
            logger.warning("Failed to save thing: {}", e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)

    async def delete(self, thing_id: str) -> StoreResult[None]:
        """Delete a thing by uuid. Deleting an absent uuid succeeds."""
        try:
            await self.engine.delete(self.table, thing_id)
            return StoreResult.success()
        except StorageError as e:
            logger.warning("Failed to delete thing {}: {}", thing_id, e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)

    async def list_all(self) -> StoreResult[list[Thing]]:
        """
        All things in storage order.

        Rows missing a valid uuid, name or type are skipped with a
        warning; the remaining things are still returned.
        """
        try:
            records = await self.engine.scan(self.table)
        except StorageError as e:
            logger.warning("Failed to list things: {}", e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)

        things: list[Thing] = []
        for record in records:
            try:
                things.append(Thing.from_record(record))
            except ValidationError as e:
                logger.warning("Skipping unreadable thing {!r}: {}", record.get("uuid"), e)
        return StoreResult.success(things)

    async def count(self) -> StoreResult[int]:
        """Number of stored things."""
        try:
            return StoreResult.success(await self.engine.count(self.table))
        except StorageError as e:
            logger.warning("Failed to count things: {}", e)
            return StoreResult.failure(StoreOutcome.IO_FAULT, e)
