"""
Structured logging for the storefront engine.
"""
from .config import (
    configure_logging,
    get_logger,
    get_state_logger,
    get_sync_logger,
    log_state_transition,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_state_logger",
    "get_sync_logger",
    "log_state_transition",
]
