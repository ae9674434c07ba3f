"""Filter compilation for collection queries."""

from brokerage_admin.query.compiler import (
    DEFAULT_LIMIT,
    PREFIX_SENTINEL,
    CompiledQuery,
    FieldRule,
    FilterCompiler,
    PartitionTable,
    PostFilter,
    RuleKind,
)
from brokerage_admin.query.tables import (
    CDS_TABLE,
    STOCK_ACCOUNT_TABLE,
    STOCK_TRANSACTION_TABLE,
    USER_PROFILE_TABLE,
    CDSFilter,
    StockAccountFilter,
    StockTransactionFilter,
    UserProfileFilter,
)

__all__ = [
    "CDSFilter",
    "CDS_TABLE",
    "CompiledQuery",
    "DEFAULT_LIMIT",
    "FieldRule",
    "FilterCompiler",
    "PREFIX_SENTINEL",
    "PartitionTable",
    "PostFilter",
    "RuleKind",
    "STOCK_ACCOUNT_TABLE",
    "STOCK_TRANSACTION_TABLE",
    "StockAccountFilter",
    "StockTransactionFilter",
    "USER_PROFILE_TABLE",
    "UserProfileFilter",
]
