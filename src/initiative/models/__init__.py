"""Data models for the initiative store."""

from initiative.models.results import StoreOutcome, StoreResult
from initiative.models.things import KeyValue, Thing

__all__ = ["KeyValue", "StoreOutcome", "StoreResult", "Thing"]
