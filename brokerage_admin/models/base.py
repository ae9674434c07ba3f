"""Base models shared across domains."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from brokerage_admin.exceptions import ValidationFailedError

E = TypeVar("E", bound=Enum)

# Stamped by the store, never written by clients.
SERVER_MANAGED_FIELDS = ("id", "created_at", "updated_at")


@dataclass
class Event:
    """Change-event envelope published after a successful mutation."""

    event_id: str
    event_type: str  # entity.action (e.g., stock_account.created)
    event_time: datetime
    source: str
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)


def decode_enum(enum_cls: type[E], value: Any) -> E:
    """Read an enum stored by value, by name, or by ordinal position.

    Documents written by the legacy dashboard carry ordinal integers
    (``ACTIVE`` is ``0``); documents written here carry the name.
    """
    if isinstance(value, enum_cls):
        return value
    members = list(enum_cls)
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(members):
            return members[value]
    elif isinstance(value, str):
        for member in members:
            if value in (member.value, member.name):
                return member
    raise ValidationFailedError(f"{value!r} is not a valid {enum_cls.__name__}")


def encode_value(value: Any) -> Any:
    """Prepare a single field value for the store (enums by value)."""
    if isinstance(value, Enum):
        return value.value
    return value


def model_to_document(obj: Any) -> dict[str, Any]:
    """Fields of a model dataclass that a client is allowed to persist."""
    return {
        f.name: encode_value(getattr(obj, f.name))
        for f in fields(obj)
        if f.name not in SERVER_MANAGED_FIELDS
    }


def encode_partial(data: dict[str, Any]) -> dict[str, Any]:
    """Encode a partial update, dropping server-managed keys."""
    return {
        key: encode_value(value)
        for key, value in data.items()
        if key not in SERVER_MANAGED_FIELDS
    }


def as_float(value: Any, default: float = 0.0) -> float:
    """Numeric field reader: missing or blank values fall back to ``default``."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
