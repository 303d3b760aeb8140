"""
Shared utilities: structured logging and formatting helpers.
"""

from .formatting import format_duration_ms, format_size
from .structured_logger import APILogger, StructuredLogger, configure_logging

__all__ = [
    "APILogger",
    "StructuredLogger",
    "configure_logging",
    "format_duration_ms",
    "format_size",
]
