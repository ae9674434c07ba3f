"""Stock transaction repository.

Creating, editing or deleting a transaction never touches the parent
account's ``capital``/``profit``/``estimated_total``.
"""

from datetime import datetime
from typing import Any

from brokerage_admin.exceptions import ValidationFailedError
from brokerage_admin.models.base import as_float
from brokerage_admin.models.brokerage import StockTransaction, StockTransactionType
from brokerage_admin.query import STOCK_TRANSACTION_TABLE, StockTransactionFilter
from brokerage_admin.query.tables import STOCK_TRANSACTION_COLLECTION
from brokerage_admin.repositories.base import EntityRepository, decode_enum_changes
from brokerage_admin.results import ListResult


def _check_amount(amount: Any) -> None:
    if as_float(amount) < 0:
        raise ValidationFailedError("Amount must be a non-negative magnitude")


class StockTransactionRepository(EntityRepository[StockTransaction]):
    collection = STOCK_TRANSACTION_COLLECTION
    label = "StockTransaction"
    entity = "stock_transaction"
    model = StockTransaction
    table = STOCK_TRANSACTION_TABLE

    def _before_create(self, entity: StockTransaction) -> None:
        _check_amount(entity.amount)

    def _before_update(self, changes: dict[str, Any]) -> dict[str, Any]:
        changes = decode_enum_changes(changes, {"type": StockTransactionType})
        if "amount" in changes:
            _check_amount(changes["amount"])
        return changes

    def list_by_account_id(self, stock_account_id: str, limit: int | None = None) -> ListResult[StockTransaction]:
        return self.filter(
            StockTransactionFilter(stock_account_id=stock_account_id, limit=self._limit(limit))
        )

    def list_by_date_range(
        self, start_date: datetime, end_date: datetime, limit: int | None = None
    ) -> ListResult[StockTransaction]:
        return self.filter(
            StockTransactionFilter(start_date=start_date, end_date=end_date, limit=self._limit(limit))
        )

    def list_by_type(self, type: StockTransactionType, limit: int | None = None) -> ListResult[StockTransaction]:
        return self.filter(StockTransactionFilter(type=type, limit=self._limit(limit)))
