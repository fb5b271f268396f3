"""Export of the store's contents as a portable JSON document."""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from initiative.store import InitiativeStore

EXPORT_COMMENT = (
    "This document is exported from initiative.sh. Please note that this format is "
    "currently undocumented and no guarantees of forward compatibility are provided, "
    "although a reasonable effort will be made to ensure that older backups can be "
    "safely imported."
)


class KeyValueExport(BaseModel):
    """Exported settings."""

    time: str | None = None


class ExportData(BaseModel):
    """Backup document: every thing plus selected settings."""

    model_config = ConfigDict(populate_by_name=True)

    comment: str = Field(default=EXPORT_COMMENT, alias="_")
    things: list[dict[str, Any]] = Field(default_factory=list)
    key_value: KeyValueExport = Field(default_factory=KeyValueExport, alias="keyValue")

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


async def export_store(store: "InitiativeStore") -> ExportData:
    """Collect all things and the ``time`` setting into an ExportData."""
    things = await store.get_all_things()
    time = await store.get_value("time")

    return ExportData(
        things=[thing.to_record() for thing in things],
        key_value=KeyValueExport(time=str(time) if time is not None else None),
    )
