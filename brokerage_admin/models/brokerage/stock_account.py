"""Stock account model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from brokerage_admin.models.base import as_float, decode_enum, model_to_document
from brokerage_admin.models.brokerage.enums import StockAccountStatus, StockAccountType


@dataclass
class StockAccount:
    """Brokerage account under a CDS.

    ``capital``, ``profit`` and ``estimated_total`` are edited by admins and
    are not recomputed from the transaction history.
    ``estimated_total_time`` is the settlement instant in whole minutes since
    the Unix epoch (0 when unset).
    """

    client_code: str  # 7 chars [A-Z0-9]
    remister_code: str  # 4 chars [A-Z0-9]
    cds_no: str  # DDD-DDD-DDDDDDDDD
    cds_id: str
    user_id: str
    type: StockAccountType
    status: StockAccountStatus
    capital: float = 0.0
    profit: float = 0.0
    estimated_total: float = 0.0
    estimated_total_time: int = 0
    last_transaction_date: datetime | str | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_document(self) -> dict[str, Any]:
        return model_to_document(self)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "StockAccount":
        return cls(
            id=doc_id,
            client_code=data.get("client_code", ""),
            remister_code=data.get("remister_code", ""),
            cds_no=data.get("cds_no", ""),
            cds_id=data.get("cds_id", ""),
            user_id=data.get("user_id", ""),
            type=decode_enum(StockAccountType, data.get("type", StockAccountType.BASIC)),
            status=decode_enum(StockAccountStatus, data.get("status", StockAccountStatus.PENDING)),
            capital=as_float(data.get("capital")),
            profit=as_float(data.get("profit")),
            estimated_total=as_float(data.get("estimated_total")),
            estimated_total_time=int(as_float(data.get("estimated_total_time"))),
            last_transaction_date=data.get("last_transaction_date"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
