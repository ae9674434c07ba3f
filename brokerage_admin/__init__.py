"""Brokerage account administration over a document store."""

__version__ = "0.1.0"
