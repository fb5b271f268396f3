"""
Storage layer for the initiative store.

This module provides:
- SchemaRegistry: ordered declaration of schema versions
- Migrator: applies pending versions to the engine
- SQLiteEngine: aiosqlite-backed table storage
- RecordStore / KeyValueStore: typed accessors over the engine

The storage layer follows an async-first design for all I/O operations.
"""

from initiative.storage.engine import SQLiteEngine
from initiative.storage.key_value import KeyValueStore
from initiative.storage.migrator import MigrationReport, Migrator
from initiative.storage.record_store import RecordStore
from initiative.storage.schema import SchemaRegistry, SchemaVersion, TableDef

__all__ = [
    "KeyValueStore",
    "MigrationReport",
    "Migrator",
    "RecordStore",
    "SQLiteEngine",
    "SchemaRegistry",
    "SchemaVersion",
    "TableDef",
]
