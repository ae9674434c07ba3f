"""Brokerage domain models."""

from brokerage_admin.models.brokerage.cds import CDS
from brokerage_admin.models.brokerage.directory_user import DirectoryUser
from brokerage_admin.models.brokerage.enums import (
    StockAccountStatus,
    StockAccountType,
    StockTransactionType,
)
from brokerage_admin.models.brokerage.stock_account import StockAccount
from brokerage_admin.models.brokerage.stock_transaction import StockTransaction
from brokerage_admin.models.brokerage.user_profile import UserProfile

__all__ = [
    "CDS",
    "DirectoryUser",
    "StockAccount",
    "StockAccountStatus",
    "StockAccountType",
    "StockTransaction",
    "StockTransactionType",
    "UserProfile",
]
