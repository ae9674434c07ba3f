"""Generic create/read/update/delete/list/filter over one collection."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, TypeVar

from brokerage_admin.exceptions import BrokerageError, EntityNotFoundError
from brokerage_admin.models.base import decode_enum, encode_partial
from brokerage_admin.query import DEFAULT_LIMIT, FilterCompiler, PartitionTable
from brokerage_admin.results import EntityResult, ListResult, MutationResult
from brokerage_admin.sinks.publisher import ChangePublisher
from brokerage_admin.store.base import SERVER_TIMESTAMP, DocumentStore
from brokerage_admin.timestamps import normalize_timestamps

logger = logging.getLogger(__name__)

M = TypeVar("M")


def decode_enum_changes(changes: dict[str, Any], enums: dict[str, type]) -> dict[str, Any]:
    """Replace enum-typed fields in a partial update with their members.

    Raises ``ValidationFailedError`` for a value outside the enum, so a bad
    write never reaches the store.
    """
    return {
        key: decode_enum(enums[key], value) if key in enums else value
        for key, value in changes.items()
    }


class EntityRepository(Generic[M]):
    """Entity store adapter for one collection.

    Every public method returns a result record; store faults never escape
    as exceptions. ``created_at``/``updated_at`` are always stamped by the
    store's clock.

    ``update`` and ``delete`` check existence and then mutate in two separate
    store calls with no transaction: a concurrent delete between the two can
    surface as a late ``NOT_FOUND`` (update) or a silent success (delete).
    """

    collection: ClassVar[str]
    label: ClassVar[str]  # used in messages, e.g. "StockAccount"
    entity: ClassVar[str]  # used in event types, e.g. "stock_account"
    model: ClassVar[type]
    table: ClassVar[PartitionTable]

    def __init__(
        self,
        store: DocumentStore,
        publisher: ChangePublisher | None = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.store = store
        self.publisher = publisher
        self.default_limit = default_limit
        self.compiler = FilterCompiler(self.table, default_limit=default_limit)

    def _to_model(self, doc_id: str, data: dict[str, Any]) -> M:
        return self.model.from_document(doc_id, normalize_timestamps(data))

    def _rows_to_models(self, rows: list[dict[str, Any]]) -> list[M]:
        return [self.model.from_document(row["id"], row) for row in rows]

    def _not_found(self) -> EntityNotFoundError:
        return EntityNotFoundError(f"{self.label} not found")

    def _limit(self, limit: int | None) -> int:
        return self.default_limit if limit is None else limit

    def _publish(self, action: str, entity_id: str, data: dict[str, Any] | None = None) -> None:
        if self.publisher is not None:
            self.publisher.publish(self.entity, action, entity_id, data)

    def _before_create(self, entity: M) -> None:
        """Hook for create-time checks; raise a ``BrokerageError`` to reject."""

    def _before_update(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Hook for update-time checks; return the changes to write or raise to reject."""
        return changes

    def create(self, entity: M) -> MutationResult:
        """Insert ``entity`` and return its new id."""
        try:
            self._before_create(entity)
            document = entity.to_document()
            entity_id = self.store.add(
                self.collection,
                {**document, "created_at": SERVER_TIMESTAMP, "updated_at": SERVER_TIMESTAMP},
            )
        except BrokerageError as exc:
            logger.error("Error creating %s: %s", self.label, exc)
            return MutationResult.failure(exc)

        logger.info("Created %s %s", self.label, entity_id)
        self._publish("created", entity_id, document)
        return MutationResult.ok(entity_id)

    def update(self, entity_id: str, changes: dict[str, Any]) -> MutationResult:
        """Merge ``changes`` into an existing entity; other fields keep their values."""
        try:
            changes = self._before_update(changes)
            if self.store.get(self.collection, entity_id) is None:
                raise self._not_found()
            data = encode_partial(changes)
            self.store.update(self.collection, entity_id, {**data, "updated_at": SERVER_TIMESTAMP})
        except BrokerageError as exc:
            logger.error("Error updating %s %s: %s", self.label, entity_id, exc)
            return MutationResult.failure(exc)

        self._publish("updated", entity_id, data)
        return MutationResult.ok(entity_id)

    def get(self, entity_id: str) -> EntityResult[M]:
        try:
            document = self.store.get(self.collection, entity_id)
            if document is None:
                raise self._not_found()
            return EntityResult(entity=self._to_model(document.id, document.data))
        except BrokerageError as exc:
            logger.error("Error getting %s %s: %s", self.label, entity_id, exc)
            return EntityResult.failure(exc)

    def delete(self, entity_id: str) -> MutationResult:
        """Remove an entity. References held by other collections are left as is."""
        try:
            if self.store.get(self.collection, entity_id) is None:
                raise self._not_found()
            self.store.delete(self.collection, entity_id)
        except BrokerageError as exc:
            logger.error("Error deleting %s %s: %s", self.label, entity_id, exc)
            return MutationResult.failure(exc)

        logger.info("Deleted %s %s", self.label, entity_id)
        self._publish("deleted", entity_id)
        return MutationResult.ok(entity_id)

    def list(self, limit: int | None = None) -> ListResult[M]:
        """Newest first by ``created_at``."""
        try:
            documents = self.store.query(
                self.collection,
                order_by="created_at",
                descending=True,
                limit=self._limit(limit),
            )
            return ListResult(items=[self._to_model(doc.id, doc.data) for doc in documents])
        except BrokerageError as exc:
            logger.error("Error listing %s: %s", self.label, exc)
            return ListResult.failure(exc)

    def filter(self, params: Any = None) -> ListResult[M]:
        """Run the hybrid store/in-process filter for this collection."""
        try:
            return ListResult(items=self._rows_to_models(self.compiler.run(self.store, params)))
        except BrokerageError as exc:
            logger.error("Error filtering %s: %s", self.label, exc)
            return ListResult.failure(exc)
