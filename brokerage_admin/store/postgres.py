"""PostgreSQL-backed document store (one ``jsonb`` table for all collections)."""

import json
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Sequence

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb

from brokerage_admin.exceptions import EntityNotFoundError, QueryFailedError
from brokerage_admin.store.base import (
    Document,
    DocumentStore,
    FieldFilter,
    new_document_id,
    split_server_fields,
)
from brokerage_admin.timestamps import Timestamp

logger = logging.getLogger(__name__)

CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS {table} (
    collection TEXT NOT NULL,
    id TEXT NOT NULL,
    data JSONB NOT NULL,
    PRIMARY KEY (collection, id)
)
"""

UTC_NOW = """to_char(now() AT TIME ZONE 'UTC', 'YYYY-MM-DD"T"HH24:MI:SS.US"+00:00"')"""


def _json_default(value: Any) -> Any:
    if isinstance(value, Timestamp):
        return value.isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(obj: Any) -> str:
    return json.dumps(obj, default=_json_default, ensure_ascii=False)


def _stamp_clause(stamped: list[str]) -> sql.Composable:
    """``jsonb_build_object('created_at', <utc now>, ...)`` for server-stamped fields.

    Stamps are fixed-width UTC strings, so byte order is chronological
    whatever the session time zone.
    """
    if not stamped:
        return sql.SQL("'{}'::jsonb")
    pairs = sql.SQL(", ").join(
        sql.SQL("{}, " + UTC_NOW).format(sql.Literal(name)) for name in stamped
    )
    return sql.SQL("jsonb_build_object({})").format(pairs)


def _filter_clause(flt: FieldFilter) -> tuple[sql.Composable, list[Any]]:
    op = sql.SQL("=" if flt.op == "==" else flt.op)
    if flt.op == "==":
        return sql.SQL("data -> {} {} %s").format(sql.Literal(flt.field), op), [
            Jsonb(flt.value, dumps=_dumps)
        ]
    if isinstance(flt.value, (int, float, Decimal)) and not isinstance(flt.value, bool):
        return sql.SQL("(data ->> {})::numeric {} %s").format(sql.Literal(flt.field), op), [
            flt.value
        ]
    # Byte-order collation so the prefix sentinel sorts after every other character.
    return sql.SQL('(data ->> {}) COLLATE "C" {} %s').format(sql.Literal(flt.field), op), [
        _json_default(flt.value) if not isinstance(flt.value, str) else flt.value
    ]


class PostgresDocumentStore(DocumentStore):
    """Document store on a single PostgreSQL table.

    Server-stamped fields take the database's ``now()``, so ordering never
    depends on client clocks. Driver errors surface as ``QueryFailedError``.
    """

    def __init__(
        self,
        connection_string: str,
        table: str = "documents",
        create_table: bool = True,
    ) -> None:
        self.connection_string = connection_string
        self.table = table
        self._conn: psycopg.Connection | None = None
        if create_table:
            self._execute(sql.SQL(CREATE_TABLE).format(table=sql.Identifier(self.table)))

    def _connection(self) -> psycopg.Connection:
        if self._conn is None or self._conn.closed:
            self._conn = psycopg.connect(self.connection_string, autocommit=True)
        return self._conn

    def _execute(
        self, statement: sql.Composable, params: Sequence[Any] = (), fetch: bool = False
    ) -> tuple[list[tuple], int]:
        try:
            with self._connection().cursor() as cur:
                cur.execute(statement, params)
                rows = cur.fetchall() if fetch else []
                return rows, cur.rowcount
        except psycopg.Error as exc:
            logger.error("Document store query failed: %s", exc)
            raise QueryFailedError(str(exc)) from exc

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = new_document_id()
        plain, stamped = split_server_fields(data)
        statement = sql.SQL(
            "INSERT INTO {table} (collection, id, data) VALUES (%s, %s, %s || {stamp})"
        ).format(table=sql.Identifier(self.table), stamp=_stamp_clause(stamped))
        self._execute(statement, [collection, doc_id, Jsonb(plain, dumps=_dumps)])
        return doc_id

    def get(self, collection: str, doc_id: str) -> Document | None:
        statement = sql.SQL("SELECT data FROM {table} WHERE collection = %s AND id = %s").format(
            table=sql.Identifier(self.table)
        )
        rows, _ = self._execute(statement, [collection, doc_id], fetch=True)
        if not rows:
            return None
        return Document(id=doc_id, data=rows[0][0])

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        plain, stamped = split_server_fields(data)
        statement = sql.SQL(
            "UPDATE {table} SET data = data || %s || {stamp} WHERE collection = %s AND id = %s"
        ).format(table=sql.Identifier(self.table), stamp=_stamp_clause(stamped))
        _, rowcount = self._execute(statement, [Jsonb(plain, dumps=_dumps), collection, doc_id])
        if rowcount == 0:
            raise EntityNotFoundError(f"{collection}/{doc_id} does not exist")

    def delete(self, collection: str, doc_id: str) -> None:
        statement = sql.SQL("DELETE FROM {table} WHERE collection = %s AND id = %s").format(
            table=sql.Identifier(self.table)
        )
        self._execute(statement, [collection, doc_id])

    def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        clauses: list[sql.Composable] = [sql.SQL("collection = %s")]
        params: list[Any] = [collection]
        for flt in filters:
            clause, values = _filter_clause(flt)
            clauses.append(clause)
            params.extend(values)

        statement = sql.SQL("SELECT id, data FROM {table} WHERE {where}").format(
            table=sql.Identifier(self.table),
            where=sql.SQL(" AND ").join(clauses),
        )
        if order_by is not None:
            statement = sql.SQL(
                '{base} AND data ? {field} ORDER BY data ->> {field} COLLATE "C" {direction}'
            ).format(
                base=statement,
                field=sql.Literal(order_by),
                direction=sql.SQL("DESC" if descending else "ASC"),
            )
        if limit is not None:
            statement = sql.SQL("{base} LIMIT %s").format(base=statement)
            params.append(limit)

        rows, _ = self._execute(statement, params, fetch=True)
        return [Document(id=row[0], data=row[1]) for row in rows]

    def close(self) -> None:
        if self._conn is not None and not self._conn.closed:
            self._conn.close()
        self._conn = None
