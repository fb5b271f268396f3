"""Shared pytest fixtures for initiative store tests."""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest

from initiative.config.models import StorageConfig
from initiative.store import InitiativeStore

Seeder = Callable[[int, list[dict[str, Any]]], Awaitable[None]]


@pytest.fixture
def storage_config(tmp_path: Path) -> StorageConfig:
    """Storage config pointing at a temporary directory, latest version."""
    return StorageConfig(data_directory=tmp_path / "data")


@pytest.fixture
def seed_legacy(storage_config: StorageConfig) -> Seeder:
    """Create a store at an old schema version holding raw records.

    Records are written straight to the engine, bypassing model
    validation, so legacy shapes can be persisted as they once were.
    """

    async def seed(version: int, things: list[dict[str, Any]]) -> None:
        config = storage_config.model_copy(update={"target_version": version})
        store = InitiativeStore(config)
        await store.open()
        for thing in things:
            await store.engine.put("things", thing)
        await store.close()

    return seed


@pytest.fixture
async def store(storage_config: StorageConfig):
    """Provide an opened store at the latest schema version."""
    initiative_store = InitiativeStore(storage_config)
    await initiative_store.open()
    yield initiative_store
    await initiative_store.close()
