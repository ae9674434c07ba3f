"""Document stores backing the repositories."""

from brokerage_admin.config import BrokerageConfig
from brokerage_admin.store.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    FieldFilter,
)
from brokerage_admin.store.memory import InMemoryDocumentStore
from brokerage_admin.store.postgres import PostgresDocumentStore


def build_store(config: BrokerageConfig) -> DocumentStore:
    """Create the store selected by ``config.store.backend``."""
    if config.store.backend == "postgres":
        return PostgresDocumentStore(
            config.postgres.connection_string, table=config.store.table
        )
    return InMemoryDocumentStore()


__all__ = [
    "SERVER_TIMESTAMP",
    "Document",
    "DocumentStore",
    "FieldFilter",
    "InMemoryDocumentStore",
    "PostgresDocumentStore",
    "build_store",
]
