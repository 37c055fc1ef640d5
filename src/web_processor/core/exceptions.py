"""Custom exceptions for web-processor."""

from typing import Any


class WebProcessorError(Exception):
    """Base exception for all web-processor errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidTabError(WebProcessorError):
    """Raised when a tab handle does not belong to this processor."""

    def __init__(
        self,
        tab: Any,
        message: str = "The specified tab does not belong to this processor",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details or {"tab": tab})
        self.tab = tab


class TabDetectionError(WebProcessorError):
    """Raised when opening a tab does not yield exactly one new window handle."""

    def __init__(
        self,
        new_tabs: list[str],
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if message is None:
            message = f"Expected exactly one new tab, found {len(new_tabs)}"
        super().__init__(message, details or {"new_tabs": new_tabs})
        self.new_tabs = new_tabs


class NotFoundError(WebProcessorError):
    """Raised when a required element, collection or alert did not appear in time."""

    def __init__(
        self,
        message: str,
        selector: Any = None,
        timeout: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if details is None:
            details = {}
            if selector is not None:
                details["selector"] = str(selector)
            if timeout is not None:
                details["timeout"] = timeout
        super().__init__(message, details)
        self.selector = selector
        self.timeout = timeout


class NavigationFailedError(WebProcessorError):
    """Raised when every navigation attempt ended on a browser error page."""

    def __init__(
        self,
        url: str,
        attempts: int,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if message is None:
            message = f"Failed to load the requested URL after {attempts} attempts"
        super().__init__(message, details or {"url": url, "attempts": attempts})
        self.url = url
        self.attempts = attempts


class RetryExhaustedError(WebProcessorError):
    """Raised when a retried action never produced a result before its deadline."""

    def __init__(
        self,
        message: str = "Action returned no result before the deadline",
        attempts: int = 0,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details or {"attempts": attempts})
        self.attempts = attempts
