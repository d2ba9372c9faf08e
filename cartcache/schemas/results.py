"""Explicit outcomes for best-effort store operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class StoreErrorKind(str, Enum):
    """Categories of store failure surfaced to callers."""

    IO_ERROR = "io_error"
    INTEGRITY_ERROR = "integrity_error"


@dataclass(frozen=True)
class StoreError:
    """Why a store operation did not take effect."""

    kind: StoreErrorKind
    operation: str
    message: str


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of a single store operation.

    Failures never raise across the cache boundary; they come back as a result
    with ``ok`` set to ``False`` so callers that care can tell "nothing to do"
    apart from "the write was lost".
    """

    value: T | None = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> StoreResult[T]:
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        operation: str,
        message: str,
        kind: StoreErrorKind = StoreErrorKind.IO_ERROR,
    ) -> StoreResult[T]:
        return cls(error=StoreError(kind=kind, operation=operation, message=message))

    def unwrap_or(self, default: T) -> T:
        """Return ``value`` on success, ``default`` otherwise."""

        if self.ok and self.value is not None:
            return self.value
        return default


def combine(*results: StoreResult) -> StoreResult[None]:
    """Collapse several results into the first failure, or a bare success."""

    for result in results:
        if not result.ok:
            return StoreResult(error=result.error)
    return StoreResult.success()


__all__ = ["StoreError", "StoreErrorKind", "StoreResult", "combine"]
