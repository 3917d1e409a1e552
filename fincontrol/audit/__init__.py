"""Structured logging package."""

from fincontrol.audit.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
