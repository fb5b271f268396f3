"""SQLite storage engine for the initiative store."""

import json
from collections.abc import AsyncIterator, Callable, Iterator, Mapping
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path
from typing import Any

import aiosqlite
from loguru import logger

from initiative.errors import ConstraintError, StorageError
from initiative.storage.schema import Record, TableDef


@contextmanager
def _translate_errors(table: str) -> Iterator[None]:
    """Re-raise sqlite errors as store errors."""
    try:
        yield
    except aiosqlite.IntegrityError as e:
        raise ConstraintError(f"Constraint violated on {table}: {e}", table) from e
    except aiosqlite.Error as e:
        raise StorageError(f"Storage operation on {table} failed: {e}") from e


class SQLiteEngine:
    """
    Table storage on top of SQLite.

    Every table holds JSON records keyed by their primary key field.
    Unique and secondary keys are expression indexes over the JSON
    document, so records stay schema-less apart from declared keys.

    Handles:
    - Table and index layout per schema version
    - Persisted schema version history
    - Single-record get/put/delete and full scans
    - Whole-table record rewrites for migrations
    """

    def __init__(self, db_path: Path | str) -> None:
        """
        Initialize SQLiteEngine.

        Args:
            db_path: Path to SQLite database file.
        """
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None
        self._tables: dict[str, TableDef] = {}

    async def initialize(self) -> None:
        """
        Open the database connection.

        Creates the database file if it doesn't exist. Transactions are
        managed explicitly, so the connection runs in autocommit mode.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        await self._conn.execute("PRAGMA journal_mode = WAL")
        logger.debug("Opened storage engine at {}", self.db_path)

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None
            logger.debug("Closed storage engine at {}", self.db_path)

    def _get_conn(self) -> aiosqlite.Connection:
        """Get database connection, raising if not initialized."""
        if not self._conn:
            raise RuntimeError("Database not initialized")
        return self._conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Context manager for database transactions.

        Commits on success, rollbacks on exception.
        """
        conn = self._get_conn()
        with _translate_errors("transaction"):
            await conn.execute("BEGIN IMMEDIATE")

        try:
            yield
            with _translate_errors("transaction"):
                await conn.commit()
        except Exception:
            await conn.rollback()
            raise

    # =========================================================================
    # Schema Operations
    # =========================================================================

    async def persisted_version(self) -> int:
        """Highest committed schema version, 0 for a fresh store."""
        conn = self._get_conn()
        with _translate_errors("schema_version"):
            cursor = await conn.execute(
                """
                SELECT name FROM sqlite_master
                WHERE type='table' AND name='schema_version'
                """
            )
            if await cursor.fetchone() is None:
                return 0

            cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
            row = await cursor.fetchone()
        return row[0] if row and row[0] is not None else 0

    async def record_version(self, version: int) -> None:
        """Persist ``version`` as applied."""
        conn = self._get_conn()
        with _translate_errors("schema_version"):
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
                )
                """
            )
            await conn.execute(
                "INSERT OR IGNORE INTO schema_version (version) VALUES (?)", [version]
            )

    def bind_tables(self, tables: Mapping[str, TableDef]) -> None:
        """Use ``tables`` as the layout for record operations without touching the database."""
        self._tables.update(tables)

    def table_def(self, table: str) -> TableDef:
        """Layout of an applied table."""
        try:
            return self._tables[table]
        except KeyError:
            raise StorageError(f"Unknown table: {table}") from None

    async def apply_tables(self, tables: Mapping[str, TableDef]) -> None:
        """
        Create tables and bring their indexes in line with ``tables``.

        Indexes this engine created for a table but which are no longer
        declared are dropped; newly declared ones are created. Creating
        a unique index over existing duplicate values fails with
        ConstraintError.
        """
        conn = self._get_conn()
        for table, table_def in tables.items():
            with _translate_errors(table):
                await conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS "{table}" (
                        pk TEXT PRIMARY KEY NOT NULL,
                        data TEXT NOT NULL
                    )
                    """
                )

                cursor = await conn.execute(
                    """
                    SELECT name FROM sqlite_master
                    WHERE type='index' AND tbl_name=? AND sql IS NOT NULL
                    """,
                    [table],
                )
                existing = {row[0] for row in await cursor.fetchall()}
                wanted = table_def.indexes(table)

                for index in sorted(existing - set(wanted)):
                    await conn.execute(f'DROP INDEX "{index}"')
                    logger.debug("Dropped index {} on {}", index, table)

                for index, (field, unique) in wanted.items():
                    if index in existing:
                        continue
                    kind = "UNIQUE INDEX" if unique else "INDEX"
                    await conn.execute(
                        f'CREATE {kind} "{index}" ON "{table}" '
                        f"(json_extract(data, '$.{field}'))"
                    )
                    logger.debug("Created {} {} on {}", kind.lower(), index, table)

            self._tables[table] = table_def

    async def rewrite_table(self, table: str, fn: Callable[[Record], Record]) -> int:
        """
        Replace every record of ``table`` with ``fn(record)``.

        Exceptions raised by ``fn`` propagate unchanged.

        Returns:
            Number of records whose content changed.
        """
        conn = self._get_conn()
        primary_key = self.table_def(table).primary_key

        with _translate_errors(table):
            cursor = await conn.execute(f'SELECT pk, data FROM "{table}" ORDER BY rowid')
            rows = list(await cursor.fetchall())

        changed = 0
        for pk, data in rows:
            record = self._loads(table, data)
            migrated = fn(self._loads(table, data))
            if migrated == record:
                continue

            new_pk = self._primary_value(table, primary_key, migrated)
            with _translate_errors(table):
                await conn.execute(
                    f'UPDATE "{table}" SET pk = ?, data = ? WHERE pk = ?',
                    [new_pk, self._dumps(table, migrated), pk],
                )
            changed += 1
        return changed

    # =========================================================================
    # Record Operations
    # =========================================================================

    async def get(self, table: str, key: str) -> Record | None:
        """Fetch one record by primary key."""
        self.table_def(table)
        conn = self._get_conn()
        with _translate_errors(table):
            cursor = await conn.execute(f'SELECT data FROM "{table}" WHERE pk = ?', [key])
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._loads(table, row[0])

    async def put(self, table: str, record: Record) -> None:
        """
        Insert or replace one record by primary key.

        Raises:
            ConstraintError: If the record lacks its primary key or
                collides with another record on a unique key.
        """
        primary_key = self.table_def(table).primary_key
        pk = self._primary_value(table, primary_key, record)
        data = self._dumps(table, record)

        conn = self._get_conn()
        with _translate_errors(table):
            await conn.execute(
                f"""
                INSERT INTO "{table}" (pk, data) VALUES (?, ?)
                ON CONFLICT(pk) DO UPDATE SET data = excluded.data
                """,
                [pk, data],
            )

    async def delete(self, table: str, key: str) -> None:
        """Delete one record by primary key; absent keys are not an error."""
        self.table_def(table)
        conn = self._get_conn()
        with _translate_errors(table):
            await conn.execute(f'DELETE FROM "{table}" WHERE pk = ?', [key])

    async def scan(self, table: str) -> list[Record]:
        """All records of ``table`` in storage order."""
        self.table_def(table)
        conn = self._get_conn()
        with _translate_errors(table):
            cursor = await conn.execute(f'SELECT data FROM "{table}" ORDER BY rowid')
            rows = await cursor.fetchall()
        return [self._loads(table, row[0]) for row in rows]

    async def count(self, table: str) -> int:
        """Number of records in ``table``."""
        self.table_def(table)
        conn = self._get_conn()
        with _translate_errors(table):
            cursor = await conn.execute(f'SELECT COUNT(*) FROM "{table}"')
            row = await cursor.fetchone()
        return row[0] if row else 0

    @staticmethod
    def _primary_value(table: str, primary_key: str, record: Record) -> str:
        value = record.get(primary_key)
        if value is None:
            raise ConstraintError(f"Record for {table} has no {primary_key!r}", table)
        return str(value)

    @staticmethod
    def _dumps(table: str, record: Record) -> str:
        try:
            return json.dumps(record)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Record for {table} is not JSON serialisable: {e}") from e

    @staticmethod
    def _loads(table: str, data: str) -> Any:
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt record in {table}: {e}") from e
