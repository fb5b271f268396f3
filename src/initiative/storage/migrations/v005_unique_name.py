"""Enforce unique thing names."""

from initiative.storage.schema import TableDef

VERSION = 5
DESCRIPTION = "Make things.name unique"

TABLES = {
    "things": TableDef(primary_key="uuid", unique_keys=("name",), secondary_keys=("type",)),
    "key_value": TableDef(primary_key="key"),
}
