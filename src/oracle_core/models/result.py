"""Tagged result for readings that come from an external collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ResolvedStatus(str, Enum):
    OK = "ok"
    FALLBACK = "fallback"
    ERROR = "error"


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """A value plus how it was obtained.

    ``FALLBACK`` means the collaborator was unavailable (no credential, failed
    request) and ``value`` is the documented default. ``ERROR`` means the
    collaborator answered but processing failed; ``value`` is still a usable
    default and ``error`` carries the reason.
    """

    status: ResolvedStatus
    value: T
    error: str | None = None

    @classmethod
    def ok(cls, value: T) -> Resolved[T]:
        return cls(ResolvedStatus.OK, value)

    @classmethod
    def fallback(cls, value: T, error: str | None = None) -> Resolved[T]:
        return cls(ResolvedStatus.FALLBACK, value, error)

    @classmethod
    def failed(cls, value: T, error: str) -> Resolved[T]:
        return cls(ResolvedStatus.ERROR, value, error)

    @property
    def is_ok(self) -> bool:
        return self.status is ResolvedStatus.OK
