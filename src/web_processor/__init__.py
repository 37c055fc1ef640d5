"""web-processor - deadline-bounded browser automation primitives on top of Selenium.

This package turns single-shot WebDriver calls, which fail whenever an element
is not rendered yet or the page is mid-load, into operations that either
succeed within a timeout or fail with a typed error:
- Polling element finders, presence checks and waiters
- Ownership and focus tracking for the tabs a processor opens
- Navigation that retries past browser error pages
- Alert, checkbox, select and text helpers

Library Usage:
    >>> from selenium import webdriver
    >>> from web_processor import Selector, WebProcessor
    >>>
    >>> driver = webdriver.Chrome()
    >>> with WebProcessor(driver) as processor:
    ...     processor.go_to_url("https://example.com")
    ...     heading = processor.get_text(Selector.tag("h1"))

CLI Usage:
    $ web-processor info
    $ web-processor check --remote-url http://localhost:4444 --url https://example.com --css h1
"""

__version__ = "0.1.0"

# Core
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

# Browser
from web_processor.browser import (
    AlertController,
    ElementWaiter,
    FormController,
    NavigationController,
    Quantifier,
    ReadOptions,
    Selector,
    TabRegistry,
)

# Processor
from web_processor.processor import WebProcessor

# Utils
from web_processor.utils.retry import retry_until_not_none

__all__ = [
    # Version
    "__version__",
    # Core
    "Clock",
    "Deadline",
    "Config",
    "WebProcessorError",
    "InvalidTabError",
    "NavigationFailedError",
    "NotFoundError",
    "RetryExhaustedError",
    "TabDetectionError",
    # Browser
    "AlertController",
    "ElementWaiter",
    "FormController",
    "NavigationController",
    "Quantifier",
    "ReadOptions",
    "Selector",
    "TabRegistry",
    # Processor
    "WebProcessor",
    # Utils
    "retry_until_not_none",
]
