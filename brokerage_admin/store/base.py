"""Document store contract shared by the in-memory and Postgres backends."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence

from brokerage_admin.exceptions import QueryFailedError

OPERATORS = ("==", "<", "<=", ">", ">=")


class _ServerTimestamp:
    """Sentinel asking the store to stamp a field with its own clock."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class FieldFilter:
    """A single predicate the store evaluates server-side."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in OPERATORS:
            raise QueryFailedError(f"Unsupported operator {self.op!r} on field {self.field!r}")


@dataclass
class Document:
    """A stored document: store-assigned id plus its field data."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.data}


def new_document_id() -> str:
    """20-character store id."""
    return uuid.uuid4().hex[:20]


def split_server_fields(data: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Separate plain values from fields carrying ``SERVER_TIMESTAMP``."""
    plain = {k: v for k, v in data.items() if v is not SERVER_TIMESTAMP}
    stamped = [k for k, v in data.items() if v is SERVER_TIMESTAMP]
    return plain, stamped


class DocumentStore(ABC):
    """Collections of schemaless documents keyed by a store-assigned id.

    Implementations raise ``QueryFailedError`` for store faults and
    ``EntityNotFoundError`` when ``update`` targets a missing document.
    ``delete`` of a missing document is a silent no-op.
    """

    @abstractmethod
    def add(self, collection: str, data: dict[str, Any]) -> str:
        """Insert a new document and return its id."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Document | None:
        """Fetch a document, or ``None`` when absent."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Merge ``data`` into an existing document."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document."""

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents matching every filter (logical AND)."""

    def close(self) -> None:
        """Release the underlying connection, if any."""
