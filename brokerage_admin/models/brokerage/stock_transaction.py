"""Stock transaction model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from brokerage_admin.models.base import as_float, decode_enum, model_to_document
from brokerage_admin.models.brokerage.enums import StockTransactionType


@dataclass
class StockTransaction:
    """Ledger entry against a stock account.

    ``amount`` is a non-negative magnitude; the sign comes from ``type``.
    """

    stock_account_id: str
    date: datetime | str
    type: StockTransactionType
    description: str
    amount: float
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def signed_amount(self) -> float:
        if self.type == StockTransactionType.DECREASE:
            return -self.amount
        return self.amount

    def to_document(self) -> dict[str, Any]:
        return model_to_document(self)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "StockTransaction":
        return cls(
            id=doc_id,
            stock_account_id=data.get("stock_account_id", ""),
            date=data.get("date"),
            type=decode_enum(StockTransactionType, data.get("type", StockTransactionType.INCREASE)),
            description=data.get("description", ""),
            amount=as_float(data.get("amount")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
