"""Utility modules for web-processor."""

from web_processor.utils.retry import retry_until_not_none

__all__ = [
    "retry_until_not_none",
]
