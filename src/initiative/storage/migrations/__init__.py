"""
Schema versions for the initiative store.

Each module declares one version's tables and, where existing data
needs rewriting, a ``transform_thing`` function. REGISTRY lists
them in ascending order; never edit a released version, add a new one.
"""

from initiative.storage.migrations import (
    v001_initial,
    v002_key_value,
    v003_gender_nonbinary,
    v004_split_npc_age,
    v005_unique_name,
    v006_location_to_place,
    v007_lowercase_enums,
)
from initiative.storage.schema import SchemaRegistry


def build_registry() -> SchemaRegistry:
    """Build the registry of every schema version, ascending."""
    registry = SchemaRegistry()
    registry.register(v001_initial.VERSION, v001_initial.TABLES, None, v001_initial.DESCRIPTION)
    registry.register(
        v002_key_value.VERSION, v002_key_value.TABLES, None, v002_key_value.DESCRIPTION
    )
    registry.register(
        v003_gender_nonbinary.VERSION,
        v003_gender_nonbinary.TABLES,
        {"things": v003_gender_nonbinary.transform_thing},
        v003_gender_nonbinary.DESCRIPTION,
    )
    registry.register(
        v004_split_npc_age.VERSION,
        v004_split_npc_age.TABLES,
        {"things": v004_split_npc_age.transform_thing},
        v004_split_npc_age.DESCRIPTION,
    )
    registry.register(
        v005_unique_name.VERSION, v005_unique_name.TABLES, None, v005_unique_name.DESCRIPTION
    )
    registry.register(
        v006_location_to_place.VERSION,
        v006_location_to_place.TABLES,
        {"things": v006_location_to_place.transform_thing},
        v006_location_to_place.DESCRIPTION,
    )
    registry.register(
        v007_lowercase_enums.VERSION,
        v007_lowercase_enums.TABLES,
        {"things": v007_lowercase_enums.transform_thing},
        v007_lowercase_enums.DESCRIPTION,
    )
    return registry


REGISTRY = build_registry()

__all__ = ["REGISTRY", "build_registry"]
