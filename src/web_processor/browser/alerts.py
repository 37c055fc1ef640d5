"""JavaScript alert and dialog handling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from web_processor.browser.tabs import TabRegistry
from web_processor.core.clock import Clock
from web_processor.core.config import Config
from web_processor.core.exceptions import NotFoundError

if TYPE_CHECKING:
    from selenium.webdriver.common.alert import Alert
    from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)


class AlertController:
    """Waits for alert/confirm/prompt dialogs on the current tab."""

    def __init__(
        self,
        driver: WebDriver,
        registry: TabRegistry,
        config: Config | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._driver = driver
        self._registry = registry
        self.config = config or Config.from_env()
        self._clock = clock or Clock()

    def get_alert(self, timeout: float | None = None) -> Alert:
        """Wait for an open dialog.

        Args:
            timeout: Seconds to wait (config default if None)

        Returns:
            The open alert

        Raises:
            NotFoundError: If no dialog opened before the deadline
        """
        self._registry.ensure_focus()

        timeout = self.config.resolve_timeout(timeout)
        deadline = self._clock.deadline(timeout)

        while not deadline.expired():
            try:
                return self._driver.switch_to.alert
            except Exception:
                self._clock.sleep(self.config.poll_interval)

        raise NotFoundError(f"No alert appeared within {timeout}s", timeout=timeout)

    def accept_alert(self, timeout: float | None = None) -> None:
        self.get_alert(timeout).accept()
        logger.debug("Accepted alert")

    def dismiss_alert(self, timeout: float | None = None) -> None:
        self.get_alert(timeout).dismiss()
        logger.debug("Dismissed alert")
