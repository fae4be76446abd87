"""Roster — per-user employee records service and client."""

__version__ = "0.1.0"
