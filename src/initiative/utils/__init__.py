"""Utility modules for the initiative store."""

from initiative.utils.logging import configure_logging

__all__ = ["configure_logging"]
