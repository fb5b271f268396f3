"""Schema registry.

Declares, in ascending order, every schema version the store has
ever had. Each version carries its table/index layout and, optionally,
per-table record transforms run once when upgrading past it.
"""

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from initiative.errors import SchemaDeclarationError

Record = dict[str, Any]
Transform = Callable[[Record], Record]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(kind: str, name: str) -> None:
    if not _IDENTIFIER.match(name):
        raise SchemaDeclarationError(f"Invalid {kind} name: {name!r}")


@dataclass(frozen=True)
class TableDef:
    """
    Layout of one table.

    Attributes:
        primary_key: Field holding the record's unique id.
        unique_keys: Additional fields whose values must be distinct.
        secondary_keys: Fields indexed for lookup, duplicates allowed.
    """

    primary_key: str
    unique_keys: tuple[str, ...] = ()
    secondary_keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for key in (self.primary_key, *self.unique_keys, *self.secondary_keys):
            _check_identifier("field", key)
        overlap = set(self.unique_keys) & set(self.secondary_keys)
        if overlap or self.primary_key in (*self.unique_keys, *self.secondary_keys):
            raise SchemaDeclarationError(
                f"Field declared more than once in table definition: "
                f"{sorted(overlap) or [self.primary_key]}"
            )

    def indexes(self, table: str) -> dict[str, tuple[str, bool]]:
        """Index name -> (field, unique) for this table."""
        result = {f"ux_{table}_{key}": (key, True) for key in self.unique_keys}
        result.update({f"ix_{table}_{key}": (key, False) for key in self.secondary_keys})
        return result


@dataclass(frozen=True)
class SchemaVersion:
    """One registered schema version."""

    version: int
    tables: Mapping[str, TableDef]
    transforms: Mapping[str, Transform] = field(default_factory=dict)
    description: str = ""

    @property
    def has_transforms(self) -> bool:
        return bool(self.transforms)


class SchemaRegistry:
    """
    Ordered declaration list of schema versions.

    Registration order is the source of truth: each version must be
    strictly greater than the previous one. Gaps are allowed.
    """

    def __init__(self) -> None:
        self._versions: list[SchemaVersion] = []

    def register(
        self,
        version: int,
        tables: Mapping[str, TableDef],
        transforms: Mapping[str, Transform] | None = None,
        description: str = "",
    ) -> SchemaVersion:
        """
        Declare a schema version.

        Args:
            version: Version number, greater than every registered one.
            tables: Table name -> layout for this version.
            transforms: Table name -> record transform run on upgrade.
            description: Human readable summary.

        Returns:
            The registered SchemaVersion.

        Raises:
            SchemaDeclarationError: If the declaration is malformed.
        """
        if version < 1:
            raise SchemaDeclarationError(f"Schema versions start at 1, got {version}")
        if self._versions and version <= self._versions[-1].version:
            raise SchemaDeclarationError(
                f"Schema version {version} must be greater than "
                f"{self._versions[-1].version}"
            )
        if not tables:
            raise SchemaDeclarationError(f"Schema version {version} declares no tables")

        for name in tables:
            _check_identifier("table", name)

        transforms = dict(transforms or {})
        unknown = set(transforms) - set(tables)
        if unknown:
            raise SchemaDeclarationError(
                f"Schema version {version} transforms undeclared tables: {sorted(unknown)}"
            )

        schema = SchemaVersion(
            version=version,
            tables=MappingProxyType(dict(tables)),
            transforms=MappingProxyType(transforms),
            description=description,
        )
        self._versions.append(schema)
        return schema

    def __iter__(self) -> Iterator[SchemaVersion]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    @property
    def versions(self) -> list[int]:
        """Registered version numbers, ascending."""
        return [v.version for v in self._versions]

    @property
    def latest(self) -> SchemaVersion:
        """Highest registered version."""
        if not self._versions:
            raise SchemaDeclarationError("No schema versions registered")
        return self._versions[-1]

    def get(self, version: int) -> SchemaVersion | None:
        """Get a registered version by number."""
        for schema in self._versions:
            if schema.version == version:
                return schema
        return None

    def tables_at(self, version: int) -> Mapping[str, TableDef]:
        """Table layout in effect at ``version`` (latest declaration <= version)."""
        current: Mapping[str, TableDef] = {}
        for schema in self._versions:
            if schema.version > version:
                break
            current = schema.tables
        return current

    def plan(self, target_version: int, persisted_version: int) -> list[SchemaVersion]:
        """
        Versions to apply when moving a store between versions.

        Returns every registered version with
        ``persisted_version < version <= target_version``, ascending.
        """
        return [
            schema
            for schema in self._versions
            if persisted_version < schema.version <= target_version
        ]
