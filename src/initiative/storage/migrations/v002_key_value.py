"""Add the key_value settings table."""

from initiative.storage.schema import TableDef

VERSION = 2
DESCRIPTION = "Add key_value settings table"

TABLES = {
    "things": TableDef(primary_key="uuid", secondary_keys=("name", "type")),
    "key_value": TableDef(primary_key="key"),
}
