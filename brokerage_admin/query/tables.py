"""Filter parameters and partition tables for each collection."""

from dataclasses import dataclass
from datetime import datetime

from brokerage_admin.models.brokerage import (
    StockAccountStatus,
    StockAccountType,
    StockTransactionType,
)
from brokerage_admin.query.compiler import DEFAULT_LIMIT, FieldRule, PartitionTable, RuleKind

CDS_COLLECTION = "CDS"
STOCK_ACCOUNT_COLLECTION = "StockAccounts"
STOCK_TRANSACTION_COLLECTION = "StockTransactions"
USER_PROFILE_COLLECTION = "UserProfiles"


@dataclass
class CDSFilter:
    name: str | None = None  # prefix
    website: str | None = None  # substring
    sst_reg: str | None = None
    limit: int = DEFAULT_LIMIT


@dataclass
class StockAccountFilter:
    client_code: str | None = None
    cds_id: str | None = None
    user_id: str | None = None
    type: StockAccountType | None = None
    status: StockAccountStatus | None = None
    min_capital: float | None = None
    max_capital: float | None = None
    limit: int = DEFAULT_LIMIT


@dataclass
class StockTransactionFilter:
    stock_account_id: str | None = None
    type: StockTransactionType | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    min_amount: float | None = None
    max_amount: float | None = None
    description: str | None = None  # substring
    limit: int = DEFAULT_LIMIT


@dataclass
class UserProfileFilter:
    name: str | None = None  # prefix
    email: str | None = None  # substring
    ic: str | None = None
    bank_name: str | None = None  # substring
    limit: int = DEFAULT_LIMIT


CDS_TABLE = PartitionTable(
    collection=CDS_COLLECTION,
    rules=(
        FieldRule("name", "name", RuleKind.PREFIX),
        FieldRule("sst_reg", "sst_reg", RuleKind.EQUALS),
        FieldRule("website", "website", RuleKind.CONTAINS),
    ),
)

STOCK_ACCOUNT_TABLE = PartitionTable(
    collection=STOCK_ACCOUNT_COLLECTION,
    rules=(
        FieldRule("client_code", "client_code", RuleKind.EQUALS),
        FieldRule("cds_id", "cds_id", RuleKind.EQUALS),
        FieldRule("user_id", "user_id", RuleKind.EQUALS),
        FieldRule("type", "type", RuleKind.EQUALS),
        FieldRule("status", "status", RuleKind.EQUALS),
        FieldRule("min_capital", "capital", RuleKind.MIN),
        FieldRule("max_capital", "capital", RuleKind.MAX),
    ),
)

STOCK_TRANSACTION_TABLE = PartitionTable(
    collection=STOCK_TRANSACTION_COLLECTION,
    rules=(
        FieldRule("stock_account_id", "stock_account_id", RuleKind.EQUALS),
        FieldRule("type", "type", RuleKind.EQUALS),
        FieldRule("start_date", "date", RuleKind.AFTER),
        FieldRule("end_date", "date", RuleKind.BEFORE),
        FieldRule("min_amount", "amount", RuleKind.MIN),
        FieldRule("max_amount", "amount", RuleKind.MAX),
        FieldRule("description", "description", RuleKind.CONTAINS),
    ),
)

USER_PROFILE_TABLE = PartitionTable(
    collection=USER_PROFILE_COLLECTION,
    rules=(
        FieldRule("name", "name", RuleKind.PREFIX),
        FieldRule("ic", "ic", RuleKind.EQUALS),
        FieldRule("email", "email", RuleKind.CONTAINS),
        FieldRule("bank_name", "bank_name", RuleKind.CONTAINS),
    ),
)
