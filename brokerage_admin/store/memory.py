"""In-memory document store, used as a test double and for local runs."""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from brokerage_admin.exceptions import EntityNotFoundError
from brokerage_admin.store.base import (
    Document,
    DocumentStore,
    FieldFilter,
    new_document_id,
    split_server_fields,
)
from brokerage_admin.timestamps import Timestamp

logger = logging.getLogger(__name__)

_MISSING = object()


def _matches(doc: dict[str, Any], flt: FieldFilter) -> bool:
    value = doc.get(flt.field, _MISSING)
    if value is _MISSING:
        return False
    try:
        if flt.op == "==":
            return value == flt.value
        if flt.op == "<":
            return value < flt.value
        if flt.op == "<=":
            return value <= flt.value
        if flt.op == ">":
            return value > flt.value
        if flt.op == ">=":
            return value >= flt.value
    except TypeError:
        # Mismatched types never match, as in a document database.
        return False
    return False


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store whose "server clock" is an injectable callable.

    Server-stamped fields are stored as ``Timestamp`` values, the way a
    document database hands back its native timestamp type.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _stamp(self, data: dict[str, Any]) -> dict[str, Any]:
        plain, stamped = split_server_fields(data)
        if stamped:
            now = Timestamp.from_datetime(self._clock())
            for name in stamped:
                plain[name] = now
        return copy.deepcopy(plain)

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = new_document_id()
        self._collections.setdefault(collection, {})[doc_id] = self._stamp(data)
        logger.debug("Added %s/%s", collection, doc_id)
        return doc_id

    def get(self, collection: str, doc_id: str) -> Document | None:
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            return None
        return Document(id=doc_id, data=copy.deepcopy(data))

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        docs = self._collections.get(collection, {})
        if doc_id not in docs:
            raise EntityNotFoundError(f"{collection}/{doc_id} does not exist")
        docs[doc_id].update(self._stamp(data))

    def delete(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)

    def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        rows = [
            (doc_id, data)
            for doc_id, data in self._collections.get(collection, {}).items()
            if all(_matches(data, flt) for flt in filters)
        ]
        if order_by is not None:
            rows = [row for row in rows if row[1].get(order_by) is not None]
            rows.sort(key=lambda row: row[1][order_by], reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [Document(id=doc_id, data=copy.deepcopy(data)) for doc_id, data in rows]

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))
