"""Entity store adapters, one per collection."""

from brokerage_admin.repositories.base import EntityRepository
from brokerage_admin.repositories.cds import CDSRepository
from brokerage_admin.repositories.stock_account import StockAccountRepository
from brokerage_admin.repositories.stock_transaction import StockTransactionRepository
from brokerage_admin.repositories.user_profile import UserProfileRepository

__all__ = [
    "CDSRepository",
    "EntityRepository",
    "StockAccountRepository",
    "StockTransactionRepository",
    "UserProfileRepository",
]
