"""Stock account repository."""

from typing import Any

from brokerage_admin.models.brokerage import StockAccount, StockAccountStatus, StockAccountType
from brokerage_admin.query import STOCK_ACCOUNT_TABLE, StockAccountFilter
from brokerage_admin.query.tables import STOCK_ACCOUNT_COLLECTION
from brokerage_admin.repositories.base import EntityRepository, decode_enum_changes
from brokerage_admin.results import ListResult, MutationResult


class StockAccountRepository(EntityRepository[StockAccount]):
    collection = STOCK_ACCOUNT_COLLECTION
    label = "StockAccount"
    entity = "stock_account"
    model = StockAccount
    table = STOCK_ACCOUNT_TABLE

    def _before_update(self, changes: dict[str, Any]) -> dict[str, Any]:
        return decode_enum_changes(changes, {"type": StockAccountType, "status": StockAccountStatus})

    def search_by_client_code(self, client_code: str, limit: int | None = None) -> ListResult[StockAccount]:
        return self.filter(StockAccountFilter(client_code=client_code, limit=self._limit(limit)))

    def list_by_cds_id(self, cds_id: str, limit: int | None = None) -> ListResult[StockAccount]:
        return self.filter(StockAccountFilter(cds_id=cds_id, limit=self._limit(limit)))

    def list_by_user_id(self, user_id: str, limit: int | None = None) -> ListResult[StockAccount]:
        return self.filter(StockAccountFilter(user_id=user_id, limit=self._limit(limit)))

    def update_status(self, account_id: str, status: StockAccountStatus) -> MutationResult:
        return self.update(account_id, {"status": status})
