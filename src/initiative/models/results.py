"""Typed outcomes for accessor calls.

The public accessor surface only reports success booleans or
absent values; StoreResult keeps the actual cause around for
tests and logging.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class StoreOutcome(StrEnum):
    """Why an accessor call ended the way it did."""

    OK = "ok"
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    IO_FAULT = "io_fault"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of one accessor call."""

    outcome: StoreOutcome
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == StoreOutcome.OK

    @classmethod
    def success(cls, value: T | None = None) -> "StoreResult[T]":
        return cls(StoreOutcome.OK, value)

    @classmethod
    def not_found(cls) -> "StoreResult[T]":
        return cls(StoreOutcome.NOT_FOUND)

    @classmethod
    def failure(cls, outcome: StoreOutcome, error: Exception) -> "StoreResult[T]":
        return cls(outcome, None, error)
