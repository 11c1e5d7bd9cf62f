"""Utility functions for fontsubsetter.

This module provides logging setup and batch statistics tracking.
"""

from fontsubsetter.utils.logging import (
    BatchLogger,
    ProcessingStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "BatchLogger",
    "ProcessingStats",
    "configure_logging",
    "get_logger",
]
