"""Rename the legacy "Trans" gender value."""

from initiative.storage.migrations import v002_key_value
from initiative.storage.schema import Record

VERSION = 3
TABLES = v002_key_value.TABLES
DESCRIPTION = 'Rename gender "Trans" to "NonBinaryThey"'


def transform_thing(thing: Record) -> Record:
    """Apply v003 to one thing."""
    if thing.get("gender") != "Trans":
        return thing
    return {**thing, "gender": "NonBinaryThey"}
