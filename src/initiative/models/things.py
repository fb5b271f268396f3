"""Record models persisted by the store."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Thing(BaseModel):
    """
    A persisted world entity (an NPC, a place, ...).

    Records are schema-less beyond their keys: only ``uuid``, ``name``
    and ``type`` are validated. The fields the migrations rewrite are
    named for convenience but accept whatever shape is stored, and any
    other field is kept verbatim in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    uuid: str
    name: str
    type: str

    age: Any = None
    age_years: Any = None
    ethnicity: Any = None
    gender: Any = None
    species: Any = None
    subtype: Any = None

    def to_record(self) -> dict[str, Any]:
        """Serialise to the on-disk mapping; absent fields stay absent."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Thing":
        """Build from an on-disk mapping."""
        return cls.model_validate(record)


class KeyValue(BaseModel):
    """A single settings entry."""

    key: str
    value: Any = None
