"""Utility modules for fsmatch.

Provides:
- logger: get_logger for logging
"""

from fsmatch.utils.logger import get_logger

__all__ = [
    "get_logger",
]
