"""Port interface for the storage engine."""

from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager
from typing import Protocol

from initiative.storage.schema import Record, TableDef


class StorageEnginePort(Protocol):
    """Protocol for the table storage engine.

    The migration driver and the accessors depend only on this
    contract: named tables of JSON records with declared unique and
    secondary keys, a persisted schema version, and transactions
    that roll back on error.
    """

    async def initialize(self) -> None:
        """Open the underlying database."""
        ...

    async def close(self) -> None:
        """Close the underlying database."""
        ...

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Start a transaction context.

        Commits on success, rolls back on exception.
        """
        yield

    async def persisted_version(self) -> int:
        """Highest committed schema version, 0 for a fresh store."""
        ...

    async def record_version(self, version: int) -> None:
        """Persist ``version`` as applied."""
        ...

    async def apply_tables(self, tables: Mapping[str, TableDef]) -> None:
        """Create tables and bring their indexes in line with ``tables``."""
        ...

    async def rewrite_table(self, table: str, fn: Callable[[Record], Record]) -> int:
        """Replace every record of ``table`` with ``fn(record)``.

        Returns:
            Number of records whose content changed.
        """
        ...

    async def get(self, table: str, key: str) -> Record | None:
        """Fetch one record by primary key."""
        ...

    async def put(self, table: str, record: Record) -> None:
        """Insert or replace one record by primary key."""
        ...

    async def delete(self, table: str, key: str) -> None:
        """Delete one record by primary key; absent keys are not an error."""
        ...

    async def scan(self, table: str) -> list[Record]:
        """All records of ``table`` in storage order."""
        ...

    async def count(self, table: str) -> int:
        """Number of records in ``table``."""
        ...

    def table_def(self, table: str) -> TableDef:
        """Layout of an applied table."""
        ...

    def bind_tables(self, tables: Mapping[str, TableDef]) -> None:
        """Use ``tables`` as the layout for record operations."""
        ...
