"""Moneylogger: ownership-scoped expense tracking API."""

__version__ = "0.1.0"
