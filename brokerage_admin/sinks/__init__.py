"""Sinks for change events."""

from brokerage_admin.sinks.console import ConsoleSink
from brokerage_admin.sinks.kafka import KafkaSink
from brokerage_admin.sinks.publisher import ChangePublisher

__all__ = ["ChangePublisher", "ConsoleSink", "KafkaSink"]
