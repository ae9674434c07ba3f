"""Store-native timestamps and their conversion to serializable values."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, order=True)
class Timestamp:
    """Store-native instant: whole seconds plus nanoseconds since the Unix epoch.

    Stores hand these back for server-stamped fields (``created_at``,
    ``updated_at``); they are not JSON serializable until normalized.
    """

    seconds: int
    nanoseconds: int = 0

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds=seconds, nanoseconds=delta.microseconds * 1000)

    @classmethod
    def now(cls) -> "Timestamp":
        return cls.from_datetime(datetime.now(timezone.utc))

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc).replace(
            microsecond=self.nanoseconds // 1000
        )

    def isoformat(self) -> str:
        return self.to_datetime().isoformat()


def normalize_timestamps(value: Any) -> Any:
    """Return a copy of ``value`` with every timestamp replaced by its ISO string.

    Recurses into mappings, lists and tuples. ``Timestamp``, ``datetime`` and
    ``date`` values become ISO-8601 strings; everything else (including
    ``None`` and strings that already hold ISO dates) is returned as is, so
    applying the function twice gives the same result as applying it once.
    The input is never mutated.
    """
    if value is None:
        return None
    if isinstance(value, Timestamp):
        return value.isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: normalize_timestamps(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize_timestamps(item) for item in value]
    if isinstance(value, tuple):
        return tuple(normalize_timestamps(item) for item in value)
    return value


def as_datetime(value: Any) -> datetime | None:
    """Coerce a stored date-ish value to an aware ``datetime``.

    Accepts ``Timestamp``, ``datetime`` (naive values are taken as UTC),
    ``date``, ISO-8601 strings and epoch milliseconds. Returns ``None`` for
    anything that cannot be read as an instant.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Timestamp):
        return value.to_datetime()
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def epoch_millis(value: Any) -> float:
    """Sort key helper: milliseconds since epoch, 0 when missing or unreadable."""
    instant = as_datetime(value)
    if instant is None:
        return 0.0
    return (instant - EPOCH).total_seconds() * 1000
