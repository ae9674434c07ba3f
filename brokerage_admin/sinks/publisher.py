"""Turn successful mutations into change events on a sink."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from brokerage_admin.exceptions import SinkError
from brokerage_admin.models.base import Event
from brokerage_admin.sinks.serialization import serialize_value

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def send(self, topic: str, record: Any, key: str | None = None) -> None: ...


class ChangePublisher:
    """Publishes ``<entity>.<action>`` events to ``<prefix>.<entity>`` topics.

    A sink failure is logged; the store mutation it describes stands.
    """

    def __init__(
        self,
        sink: Sink,
        topic_prefix: str = "brokerage",
        source: str = "brokerage-admin",
    ) -> None:
        self.sink = sink
        self.topic_prefix = topic_prefix
        self.source = source

    def publish(self, entity: str, action: str, subject: str, data: dict[str, Any] | None = None) -> Event:
        event = Event(
            event_id=uuid.uuid4().hex,
            event_type=f"{entity}.{action}",
            event_time=datetime.now(timezone.utc),
            source=self.source,
            subject=subject,
            data=serialize_value(data or {}),
        )
        topic = f"{self.topic_prefix}.{entity}"
        try:
            self.sink.send(topic, event, key=subject)
        except SinkError as exc:
            logger.error("Could not publish %s for %s: %s", event.event_type, subject, exc)
        return event
