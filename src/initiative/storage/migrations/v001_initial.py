"""Initial schema: the things table."""

from initiative.storage.schema import TableDef

VERSION = 1
DESCRIPTION = "Create things table"

TABLES = {
    "things": TableDef(primary_key="uuid", secondary_keys=("name", "type")),
}
