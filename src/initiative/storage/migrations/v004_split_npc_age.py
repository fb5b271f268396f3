"""Split the NPC age object into an age category and a year count.

Before v4 an NPC's age was stored as ``{"type": <category>, "value": <years>}``.
"""

from initiative.storage.migrations import v002_key_value
from initiative.storage.schema import Record

VERSION = 4
TABLES = v002_key_value.TABLES
DESCRIPTION = "Split Npc age {type, value} into age and age_years"


def transform_thing(thing: Record) -> Record:
    """Apply v004 to one thing."""
    age = thing.get("age")
    if thing.get("type") != "Npc" or not isinstance(age, dict):
        return thing

    migrated = dict(thing)
    # Presence check, not truthiness: an age value of 0 is kept.
    if age.get("value") is not None:
        migrated["age_years"] = age["value"]
    if age.get("type") is not None:
        migrated["age"] = age["type"]
    return migrated
