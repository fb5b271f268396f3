"""Switch enum-like thing fields to lowercase/kebab-case spellings.

Known PascalCase spellings map to their kebab-case form; any other
string value is lowercased. Absent fields and non-string values are
left alone.
"""

from initiative.storage.migrations import v005_unique_name
from initiative.storage.schema import Record

VERSION = 7
TABLES = v005_unique_name.TABLES
DESCRIPTION = "Lowercase age, ethnicity, gender, species and subtype"

KNOWN_SPELLINGS: dict[str, dict[str, str]] = {
    "age": {"YoungAdult": "young-adult", "MiddleAged": "middle-aged"},
    "ethnicity": {},
    "gender": {"NonBinaryThey": "non-binary"},
    "species": {"HalfElf": "half-elf", "HalfOrc": "half-orc"},
    "subtype": {},
}


def _normalize(value: object, spellings: dict[str, str]) -> object:
    if not isinstance(value, str) or not value:
        return value
    return spellings.get(value, value.lower())


def transform_thing(thing: Record) -> Record:
    """Apply v007 to one thing."""
    migrated = dict(thing)
    for field_name, spellings in KNOWN_SPELLINGS.items():
        if field_name in migrated:
            migrated[field_name] = _normalize(migrated[field_name], spellings)
    return migrated
