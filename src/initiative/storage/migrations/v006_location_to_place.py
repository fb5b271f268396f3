"""Rename the Location type to Place and flatten its nested subtype."""

from initiative.storage.migrations import v005_unique_name
from initiative.storage.schema import Record

VERSION = 6
TABLES = v005_unique_name.TABLES
DESCRIPTION = 'Rename type "Location" to "Place", flatten subtype.subtype'


def transform_thing(thing: Record) -> Record:
    """Apply v006 to one thing."""
    if thing.get("type") != "Location":
        return thing

    migrated = {**thing, "type": "Place"}
    subtype = thing.get("subtype")
    if isinstance(subtype, dict) and subtype.get("subtype"):
        migrated["subtype"] = subtype["subtype"]
    return migrated
