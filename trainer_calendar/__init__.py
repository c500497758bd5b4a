"""Trainer calendar: day-status reconciliation and the data layer around it."""

__version__ = "0.1.0"
