"""Logging setup for ordered collections."""

from __future__ import annotations

from ordered_collection.observability.logging import configure_logging, reset_logging

__all__ = ["configure_logging", "reset_logging"]
