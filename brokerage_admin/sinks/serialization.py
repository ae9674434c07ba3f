"""JSON-ready conversion of change events and entity payloads."""

from dataclasses import fields, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from brokerage_admin.timestamps import normalize_timestamps


def to_dict(obj: Any) -> dict:
    """Flatten an event (or any dataclass/mapping) for publishing."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return {item.name: serialize_value(getattr(obj, item.name)) for item in fields(obj)}
    if isinstance(obj, dict):
        return {key: serialize_value(value) for key, value in obj.items()}
    return {"value": str(obj)}


def serialize_value(value: Any) -> Any:
    """Enums by value, money as a string, timestamps as ISO-8601."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict) or (is_dataclass(value) and not isinstance(value, type)):
        return to_dict(value)
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return normalize_timestamps(value)
