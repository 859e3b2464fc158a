"""
Observability Infrastructure

Provides structured logging for the bzlmod tooling packages.
"""

from .logging import (
    configure_logging,
    get_logger,
    log_error,
    setup_logging,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_error",
    "setup_logging",
]
