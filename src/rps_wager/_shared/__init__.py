# Area: Shared
"""Shared utilities: logging setup."""

from .logging_config import setup_logging, log_rejection

__all__ = ["setup_logging", "log_rejection"]
