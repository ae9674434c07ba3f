"""User profile model."""

from dataclasses import dataclass
from typing import Any

from brokerage_admin.models.base import model_to_document


@dataclass
class UserProfile:
    """Personal and banking details; at most one per directory user."""

    user_id: str  # identity directory uid
    name: str = ""
    ic: str = ""  # national ID
    bank_account: str = ""
    bank_name: str = ""
    email: str = ""
    phone: str = ""
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_document(self) -> dict[str, Any]:
        return model_to_document(self)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "UserProfile":
        return cls(
            id=doc_id,
            user_id=data.get("user_id", ""),
            name=data.get("name", ""),
            ic=data.get("ic", ""),
            bank_account=data.get("bank_account", ""),
            bank_name=data.get("bank_name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
