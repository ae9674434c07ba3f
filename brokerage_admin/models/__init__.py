"""Domain models for brokerage administration."""

from brokerage_admin.models.base import Event

__all__ = ["Event"]
