"""Explicit success/failure records returned by store-facing operations.

Callers inspect ``success`` (or ``error``) instead of catching exceptions.
List operations degrade to an empty list plus the error so a presentation
layer can render a "no data" state.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from brokerage_admin.exceptions import BrokerageError, ErrorKind

T = TypeVar("T")


@dataclass
class MutationResult:
    """Outcome of create/update/delete."""

    success: bool
    entity_id: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls, entity_id: str | None = None) -> "MutationResult":
        return cls(success=True, entity_id=entity_id)

    @classmethod
    def failure(cls, exc: BrokerageError) -> "MutationResult":
        return cls(success=False, error=str(exc), error_kind=exc.kind)


@dataclass
class EntityResult(Generic[T]):
    """Outcome of a single-entity read."""

    entity: T | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, exc: BrokerageError) -> "EntityResult[T]":
        return cls(entity=None, error=str(exc), error_kind=exc.kind)


@dataclass
class ListResult(Generic[T]):
    """Outcome of a list/filter read. ``items`` is empty on failure."""

    items: list[T] = field(default_factory=list)
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def failure(cls, exc: BrokerageError) -> "ListResult[T]":
        return cls(items=[], error=str(exc), error_kind=exc.kind)
