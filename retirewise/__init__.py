"""Retirement savings projection engine and its planner API."""

__version__ = "0.1.0"
