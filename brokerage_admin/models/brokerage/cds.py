"""CDS (Central Depository) record model."""

from dataclasses import dataclass
from typing import Any

from brokerage_admin.models.base import model_to_document


@dataclass
class CDS:
    """Custodian entity holding securities on behalf of account holders.

    ``addres`` keeps the stored field name used by existing documents.
    """

    name: str
    addres: str = ""
    website: str = ""
    sst_reg: str = ""  # tax registration
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_document(self) -> dict[str, Any]:
        return model_to_document(self)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "CDS":
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            addres=data.get("addres", ""),
            website=data.get("website", ""),
            sst_reg=data.get("sst_reg", ""),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
