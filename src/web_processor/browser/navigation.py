"""URL loading with retry on browser error pages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from selenium.common.exceptions import WebDriverException

from web_processor.browser.selectors import Selector
from web_processor.browser.tabs import BLANK_PAGE, TabRegistry
from web_processor.browser.waiter import ElementWaiter, ReadOptions
from web_processor.core.clock import Clock
from web_processor.core.config import Config
from web_processor.core.exceptions import NavigationFailedError, NotFoundError
from web_processor.utils.retry import retry_until_not_none

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)

# Any rendered node under <body>
ANYTHING_SELECTOR = Selector.xpath("/html/body/*")

# Browsers report network failures as an internal error page, not an exception
ERROR_PAGE_SELECTORS = (
    Selector.class_name("error-code"),  # Chrome / Chromium
    Selector.id("errorPageContainer"),  # Firefox
)


class NavigationController:
    """Loads URLs in the processor's current tab.

    Success is judged from the DOM: a navigation counts as loaded once
    something renders under ``<body>`` and no browser error page is visible.

    Example:
        navigation = NavigationController(driver, registry, waiter, config)
        navigation.go_to_url("https://example.com", http_retries=5)
    """

    def __init__(
        self,
        driver: WebDriver,
        registry: TabRegistry,
        waiter: ElementWaiter,
        config: Config | None = None,
        clock: Clock | None = None,
        error_page_selectors: Sequence[Selector] = ERROR_PAGE_SELECTORS,
    ) -> None:
        self._driver = driver
        self._registry = registry
        self._waiter = waiter
        self.config = config or Config.from_env()
        self._clock = clock or Clock()
        self.error_page_selectors = tuple(error_page_selectors)

    def _focus(self) -> None:
        if self._registry.current is None:
            self._registry.new_tab()
        else:
            self._registry.ensure_focus()

    def go_to_url(
        self,
        url: str,
        http_retries: int | None = None,
        retry_delay: float | None = None,
    ) -> None:
        """Navigate the current tab to ``url``, retrying while the browser shows an error page.

        A tab is opened first if the processor has none. Nothing is sent
        when the tab is already on ``url``.

        Args:
            url: Target address
            http_retries: Number of navigation attempts (config default if None)
            retry_delay: Seconds to wait between attempts (config default if None)

        Raises:
            NavigationFailedError: If every attempt ended on an error page
        """
        http_retries = self.config.http_attempts if http_retries is None else http_retries
        retry_delay = self.config.retry_delay if retry_delay is None else retry_delay

        self._focus()

        if self._driver.current_url == url:
            logger.debug(f"Already on {url}")
            return

        for attempt in range(1, http_retries + 1):
            logger.info(f"Navigating to {url} (attempt {attempt}/{http_retries})")
            self._driver.get(url)

            for _ in range(self.config.body_check_attempts):
                self._waiter.wait_for_element_to_exist(ANYTHING_SELECTOR)
                if self._waiter.exists(ANYTHING_SELECTOR):
                    break
                logger.debug(f"Nothing rendered for {url}, navigating again")
                self._driver.get(url)

            if not self._waiter.is_any_element_visible(*self.error_page_selectors):
                return

            logger.warning(f"Browser error page for {url} on attempt {attempt}")
            self._driver.get(BLANK_PAGE)
            self._clock.sleep(retry_delay)

        raise NavigationFailedError(url, http_retries)

    def refresh(self) -> None:
        self._registry.ensure_focus()
        self._driver.refresh()

    def execute_script(self, script: str, *args: Any) -> Any:
        """Run JavaScript in the current tab and return its result."""
        self._registry.ensure_focus()
        return self._driver.execute_script(script, *args)

    def get_variable_value(self, variable_name: str) -> Any:
        """Read a global JavaScript variable from the current tab."""
        self._clock.sleep(self.config.poll_interval)
        return self.execute_script(f"return {variable_name};")

    def get_page_source(self) -> str:
        """Read the current tab's source, then give focus back to whichever window had it."""
        previous = self._registry.focused
        self._registry.ensure_focus()
        try:
            return self._driver.page_source
        finally:
            if previous is not None and previous != self._registry.focused:
                self._driver.switch_to.window(previous)

    def go_to_iframe(self, selector: Selector, timeout: float | None = None) -> None:
        """Load an iframe's document as the current tab's page."""
        source = self._waiter.get_source(selector, ReadOptions(timeout=timeout))
        if not source:
            raise NotFoundError(f"Iframe {selector} has no src", selector=selector, timeout=timeout)
        self.go_to_url(source)

    def switch_to_iframe(self, target: Selector | int, timeout: float | None = None) -> None:
        """Move the driver's context into an iframe.

        Args:
            target: Iframe locator, or the frame index within the page
            timeout: Seconds to keep trying (config default if None)
        """
        self._registry.ensure_focus()

        if isinstance(target, int):
            self._driver.switch_to.frame(target)
            return

        timeout = self.config.resolve_timeout(timeout)
        deadline = self._clock.deadline(timeout)

        def enter_frame() -> bool:
            self._driver.switch_to.frame(self._waiter.find_element(target, deadline.remaining()))
            return True

        retry_until_not_none(
            enter_frame,
            timeout,
            clock=self._clock,
            interval=self.config.poll_interval,
            retryable_exceptions=(WebDriverException,),
        )
