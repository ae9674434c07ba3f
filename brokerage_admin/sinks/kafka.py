"""Kafka sink for change events, keyed by the affected entity id."""

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from confluent_kafka import KafkaException, Producer

from brokerage_admin.config import KafkaConfig
from brokerage_admin.exceptions import SinkError
from brokerage_admin.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class DeliveryStats:
    """Queued/acknowledged/failed event counts, overall and per topic."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    by_topic: Counter = field(default_factory=Counter)

    @property
    def success_rate(self) -> float:
        acknowledged = self.delivered + self.failed
        if not acknowledged:
            return 0.0
        return self.delivered / acknowledged


class KafkaSink:
    """Publish change events as UTF-8 JSON.

    Events for one entity share a key, so they land on one partition and
    keep their order.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        """
        Parameters
        ----------
        config : KafkaConfig | str
            Producer settings, or just the bootstrap servers.
        """
        self.config = KafkaConfig(bootstrap_servers=config) if isinstance(config, str) else config
        self.producer = Producer(self.config.to_dict())
        self.stats = DeliveryStats()

    def _on_delivery(self, err: Any, msg: Any) -> None:
        if err is not None:
            self.stats.failed += 1
            logger.error("Change event not delivered: %s", err)
            return
        self.stats.delivered += 1
        logger.debug("Change event acked on %s[%d] offset %d", msg.topic(), msg.partition(), msg.offset())

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Queue one event; raises ``SinkError`` if the producer rejects it."""
        key = key or getattr(record, "subject", None)
        payload = json.dumps(to_dict(record), ensure_ascii=False, default=str)
        try:
            self.producer.produce(
                topic=topic,
                key=None if not key else key.encode("utf-8"),
                value=payload.encode("utf-8"),
                callback=self._on_delivery,
            )
        except (BufferError, KafkaException) as exc:
            raise SinkError(f"Failed to queue change event for {topic}: {exc}") from exc
        self.stats.sent += 1
        self.stats.by_topic[topic] += 1
        self.producer.poll(0)

    def flush(self, timeout: float = 30.0) -> int:
        """Wait for outstanding deliveries; returns how many are still queued."""
        remaining = self.producer.flush(timeout)
        if remaining:
            logger.warning("%d change event(s) still queued after %.1fs", remaining, timeout)
        return remaining

    def close(self) -> None:
        self.flush()
        logger.info(
            "Kafka sink closed: %d sent, %d acked, %d failed (%s)",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
            ", ".join(f"{topic}={count}" for topic, count in sorted(self.stats.by_topic.items())),
        )
