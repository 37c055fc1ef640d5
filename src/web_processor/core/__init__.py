"""Core infrastructure for web-processor."""

from web_processor.core.clock import Clock, Deadline
from web_processor.core.config import Config
from web_processor.core.exceptions import (
    WebProcessorError,
    InvalidTabError,
    NavigationFailedError,
    NotFoundError,
    RetryExhaustedError,
    TabDetectionError,
)

__all__ = [
    "Clock",
    "Deadline",
    "Config",
    "WebProcessorError",
    "InvalidTabError",
    "NavigationFailedError",
    "NotFoundError",
    "RetryExhaustedError",
    "TabDetectionError",
]
