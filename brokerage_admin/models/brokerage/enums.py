"""Enumeration types for brokerage entities.

Declaration order matters: legacy documents store the ordinal position.
"""

from enum import Enum


class StockAccountType(str, Enum):
    BASIC = "BASIC"
    PREMIUM = "PREMIUM"
    BUSINESS = "BUSINESS"
    INVESTOR = "INVESTOR"


class StockAccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    CLOSED = "CLOSED"


class StockTransactionType(str, Enum):
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"
