"""Console sink for debugging change events."""

import json
from typing import Any

from brokerage_admin.sinks.serialization import to_dict


class ConsoleSink:
    """Print change events to stdout."""

    def __init__(self, pretty: bool = True) -> None:
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        data = to_dict(record)
        indent = 2 if self.pretty else None
        prefix = f"[{topic}]" if key is None else f"[{topic}:{key}]"
        print(prefix, json.dumps(data, indent=indent, ensure_ascii=False, default=str))
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def flush(self) -> None:
        """Nothing is buffered."""

    def close(self) -> None:
        """Print summary."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} events")
