"""Caller-side services composing repositories, directory and valuation."""

from brokerage_admin.services.admin import BrokerageAdmin, ReferenceData
from brokerage_admin.services.dashboard import DashboardService, DashboardView

__all__ = ["BrokerageAdmin", "DashboardService", "DashboardView", "ReferenceData"]
