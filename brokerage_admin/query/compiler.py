"""Hybrid filter compiler: store-side equality/prefix plus in-process refinement.

A filter-parameter object is split, by a fixed per-entity partition table,
into predicates the document store can evaluate (exact equality, prefix
ranges) and predicates evaluated here after fetching every store match
(case-insensitive substring, numeric range, date range). The refined set is
sorted newest-first by ``created_at`` and truncated to ``limit``; only that
final page is timestamp-normalized.
"""

import logging
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Mapping

from brokerage_admin.exceptions import QueryFailedError
from brokerage_admin.models.base import encode_value
from brokerage_admin.store.base import DocumentStore, FieldFilter
from brokerage_admin.timestamps import as_datetime, epoch_millis, normalize_timestamps

logger = logging.getLogger(__name__)

# Sorts after every other BMP character, turning a range into a prefix match.
PREFIX_SENTINEL = "\uf8ff"

DEFAULT_LIMIT = 20


class RuleKind(str, Enum):
    EQUALS = "EQUALS"
    PREFIX = "PREFIX"
    CONTAINS = "CONTAINS"
    MIN = "MIN"
    MAX = "MAX"
    AFTER = "AFTER"
    BEFORE = "BEFORE"


PUSHABLE_KINDS = frozenset({RuleKind.EQUALS, RuleKind.PREFIX})


@dataclass(frozen=True)
class FieldRule:
    """Maps one filter parameter onto a document field."""

    param: str
    field: str
    kind: RuleKind

    @property
    def pushable(self) -> bool:
        return self.kind in PUSHABLE_KINDS


@dataclass(frozen=True)
class PartitionTable:
    """Fixed split of an entity's filter parameters."""

    collection: str
    rules: tuple[FieldRule, ...]

    @property
    def pushable(self) -> tuple[FieldRule, ...]:
        return tuple(rule for rule in self.rules if rule.pushable)

    @property
    def post(self) -> tuple[FieldRule, ...]:
        return tuple(rule for rule in self.rules if not rule.pushable)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _coerce_bound(rule: FieldRule, value: Any) -> Any:
    """Read a range bound once; an unreadable bound is a malformed predicate."""
    if rule.kind in (RuleKind.MIN, RuleKind.MAX):
        bound = _number(value)
    elif rule.kind in (RuleKind.AFTER, RuleKind.BEFORE):
        bound = as_datetime(value)
    else:
        return value
    if bound is None:
        raise QueryFailedError(f"{rule.param} is not a valid {rule.kind.value.lower()} bound: {value!r}")
    return bound


@dataclass(frozen=True)
class PostFilter:
    """An in-process predicate bound to its parameter value."""

    rule: FieldRule
    value: Any

    def matches(self, row: Mapping[str, Any]) -> bool:
        actual = row.get(self.rule.field)
        kind = self.rule.kind
        if kind == RuleKind.CONTAINS:
            text = actual if isinstance(actual, str) else ""
            return str(self.value).lower() in text.lower()
        if kind in (RuleKind.MIN, RuleKind.MAX):
            number, bound = _number(actual), _number(self.value)
            if number is None or bound is None:
                return False
            return number >= bound if kind == RuleKind.MIN else number <= bound
        if kind in (RuleKind.AFTER, RuleKind.BEFORE):
            instant, bound = as_datetime(actual), as_datetime(self.value)
            if instant is None or bound is None:
                return False
            return instant >= bound if kind == RuleKind.AFTER else instant <= bound
        raise QueryFailedError(f"{kind.value} is not an in-process predicate")


@dataclass
class CompiledQuery:
    collection: str
    store_filters: list[FieldFilter]
    post_filters: list[PostFilter]
    limit: int


def _param_values(params: Any) -> dict[str, Any]:
    if params is None:
        return {}
    if is_dataclass(params):
        return {f.name: getattr(params, f.name) for f in fields(params)}
    if isinstance(params, Mapping):
        return dict(params)
    raise QueryFailedError(f"Unsupported filter parameters: {type(params).__name__}")


class FilterCompiler:
    """Compiles and runs filter queries for one entity type.

    A parameter whose value is ``None`` is "not provided" and is skipped; an
    empty string is a provided value and filters for an exact match.
    """

    def __init__(self, table: PartitionTable, default_limit: int = DEFAULT_LIMIT) -> None:
        self.table = table
        self.default_limit = default_limit

    def compile(self, params: Any) -> CompiledQuery:
        values = _param_values(params)
        known = {rule.param for rule in self.table.rules} | {"limit"}
        unknown = set(values) - known
        if unknown:
            raise QueryFailedError(
                f"Unknown filter parameter(s) for {self.table.collection}: {sorted(unknown)}"
            )

        limit = values.get("limit")
        if limit is None:
            limit = self.default_limit
        if not isinstance(limit, int) or isinstance(limit, bool) or limit < 0:
            raise QueryFailedError(f"limit must be a non-negative integer, got {limit!r}")

        store_filters: list[FieldFilter] = []
        post_filters: list[PostFilter] = []
        for rule in self.table.rules:
            value = values.get(rule.param)
            if value is None:
                continue
            if rule.kind == RuleKind.EQUALS:
                store_filters.append(FieldFilter(rule.field, "==", encode_value(value)))
            elif rule.kind == RuleKind.PREFIX:
                term = str(value)
                store_filters.append(FieldFilter(rule.field, ">=", term))
                store_filters.append(FieldFilter(rule.field, "<", term + PREFIX_SENTINEL))
            else:
                post_filters.append(PostFilter(rule, _coerce_bound(rule, value)))

        return CompiledQuery(
            collection=self.table.collection,
            store_filters=store_filters,
            post_filters=post_filters,
            limit=limit,
        )

    def run(self, store: DocumentStore, params: Any = None) -> list[dict[str, Any]]:
        """Execute the compiled query and return the normalized final page.

        Every store match is fetched before refinement, since a store-side
        limit would drop rows the post-filters might keep.
        """
        compiled = self.compile(params)
        documents = store.query(compiled.collection, compiled.store_filters)
        rows = [doc.to_dict() for doc in documents]
        logger.debug(
            "%s: %d store matches for %d pushed predicate(s)",
            compiled.collection,
            len(rows),
            len(compiled.store_filters),
        )

        for post_filter in compiled.post_filters:
            rows = [row for row in rows if post_filter.matches(row)]
            if not rows:
                return []

        # sorted() is stable, so equal created_at values keep store order.
        rows = sorted(rows, key=lambda row: epoch_millis(row.get("created_at")), reverse=True)
        return [normalize_timestamps(row) for row in rows[: compiled.limit]]
