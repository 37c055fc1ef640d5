"""Form and pointer interactions on located elements."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.support.select import Select

from web_processor.browser.selectors import Selector
from web_processor.browser.waiter import ElementWaiter
from web_processor.core.exceptions import NotFoundError

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)


class FormController:
    """Mutates form controls after locating them through the ElementWaiter.

    Every helper resolves its element with ``find_element`` (so it waits up
    to ``timeout`` for the control to be displayed) and then performs a
    single direct mutation.

    Example:
        forms = FormController(driver, waiter)
        forms.set_text(Selector.name("email"), "me@example.com")
        forms.update_checkbox(Selector.id("terms"), True)
        forms.select_option_by_text(Selector.id("country"), "Romania")
    """

    def __init__(
        self,
        driver: WebDriver,
        waiter: ElementWaiter,
        rng: random.Random | None = None,
    ) -> None:
        self._driver = driver
        self._waiter = waiter
        self.random = rng or random.Random()

    def _select(self, selector: Selector, timeout: float | None) -> Select:
        return Select(self._waiter.find_element(selector, timeout))

    def set_text(self, selector: Selector, text: str, timeout: float | None = None) -> None:
        """Replace the contents of a text input."""
        element = self._waiter.find_element(selector, timeout)
        element.clear()
        element.send_keys(text)

    def append_text(self, selector: Selector, text: str, timeout: float | None = None) -> None:
        self._waiter.find_element(selector, timeout).send_keys(text)

    def clear_text(self, selector: Selector, timeout: float | None = None) -> None:
        self._waiter.find_element(selector, timeout).clear()

    def click(self, selector: Selector, timeout: float | None = None) -> None:
        self._waiter.find_element(selector, timeout).click()

    def click_any(self, *selectors: Selector, timeout: float | None = None) -> Selector:
        """Click the first of several selectors whose element is currently visible.

        Returns:
            The selector that was clicked

        Raises:
            NotFoundError: If none of the elements is visible
        """
        for selector in selectors:
            if self._waiter.is_visible(selector):
                self.click(selector, timeout)
                return selector

        raise NotFoundError(
            "None of the elements is visible to click",
            details={"selectors": [str(selector) for selector in selectors]},
        )

    def move_to_element(self, selector: Selector, timeout: float | None = None) -> None:
        """Hover the pointer over an element."""
        element = self._waiter.find_element(selector, timeout)
        ActionChains(self._driver).move_to_element(element).perform()

    def update_checkbox(self, selector: Selector, status: bool, timeout: float | None = None) -> None:
        """Click a checkbox only if its checked state differs from ``status``."""
        element = self._waiter.find_element(selector, timeout)
        if element.is_selected() != status:
            element.click()

    def select_option_by_index(
        self, selector: Selector, index: int, timeout: float | None = None
    ) -> None:
        self._select(selector, timeout).select_by_index(index)

    def select_option_by_value(
        self, selector: Selector, value: Any, timeout: float | None = None
    ) -> None:
        self._select(selector, timeout).select_by_value(value if isinstance(value, str) else str(value))

    def select_option_by_text(
        self, selector: Selector, text: str, timeout: float | None = None
    ) -> None:
        self._select(selector, timeout).select_by_visible_text(text)

    def select_random_option(self, selector: Selector, timeout: float | None = None) -> int:
        """Select a uniformly random option of a <select>.

        Returns:
            Index of the selected option
        """
        select = self._select(selector, timeout)
        options = select.options
        if not options:
            raise NotFoundError(f"Select {selector} has no options", selector=selector)

        index = self.random.randrange(len(options))
        select.select_by_index(index)
        logger.debug(f"Selected option {index} of {len(options)} in {selector}")
        return index
