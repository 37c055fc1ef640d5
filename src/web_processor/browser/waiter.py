"""Bounded polling for elements on the current tab."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Sequence, TypeVar

from selenium.webdriver.support.select import Select

from web_processor.browser.selectors import Selector
from web_processor.browser.tabs import TabRegistry
from web_processor.core.clock import Clock
from web_processor.core.config import Config
from web_processor.core.exceptions import NotFoundError
from web_processor.utils.retry import retry_until_not_none

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver
    from selenium.webdriver.remote.webelement import WebElement

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Quantifier(str, Enum):
    """How a condition combines over several selectors."""

    ANY = "any"
    ALL = "all"


@dataclass(frozen=True)
class ReadOptions:
    """Options for reading a property off a located element.

    Attributes:
        timeout: Seconds to wait for the element (config default if None)
        retry_on_dom_failure: Retry the locate-and-read when the element goes
            stale or the read raises before the deadline
    """

    timeout: float | None = None
    retry_on_dom_failure: bool = False


DEFAULT_READ_OPTIONS = ReadOptions()


class ElementWaiter:
    """Turns single-shot DOM queries into deadline-bounded ones.

    Two families of operations live here:

    - Finders (``find_element``, ``find_elements`` and every ``get_*`` read
      built on them) are hard requirements: they raise ``NotFoundError``
      when the deadline elapses.
    - Waiters (``wait_for_*``) are advisory: they poll until the condition
      holds or the deadline elapses and then simply return. Callers check
      the condition again if they need to know which happened.

    Any error raised by a lookup while polling, driver or transport, means
    "not there yet" and is retried until the deadline. Every operation
    re-focuses the registry's current tab first.

    Example:
        waiter = ElementWaiter(driver, registry, config)
        waiter.wait_for_element_to_be_visible(Selector.id("results"))
        rows = waiter.get_text_of_many(Selector.css("#results li"))
    """

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

    # -- lookups --------------------------------------------------------------

    def _lookup_displayed(self, selector: Selector) -> WebElement | None:
        try:
            element = self._driver.find_element(selector.by, selector.value)
            if element is not None and element.is_displayed():
                return element
        except Exception as e:
            logger.debug(f"Lookup of {selector} failed: {e.__class__.__name__}")
        return None

    def _lookup_all(self, selector: Selector) -> list[WebElement] | None:
        try:
            elements = list(self._driver.find_elements(selector.by, selector.value))
            if elements:
                return elements
        except Exception as e:
            logger.debug(f"Lookup of {selector} failed: {e.__class__.__name__}")
        return None

    def exists(self, selector: Selector) -> bool:
        """Check once whether an element matching the selector exists."""
        self._registry.ensure_focus()
        try:
            self._driver.find_element(selector.by, selector.value)
            return True
        except Exception:
            return False

    def is_visible(self, selector: Selector) -> bool:
        """Check once whether the first element matching the selector is displayed."""
        self._registry.ensure_focus()
        try:
            return bool(self._driver.find_element(selector.by, selector.value).is_displayed())
        except Exception:
            return False

    def does_any_element_exist(self, *selectors: Selector) -> bool:
        return any(self.exists(selector) for selector in selectors)

    def do_all_elements_exist(self, *selectors: Selector) -> bool:
        return all(self.exists(selector) for selector in selectors)

    def is_any_element_visible(self, *selectors: Selector) -> bool:
        return any(self.is_visible(selector) for selector in selectors)

    def are_all_elements_visible(self, *selectors: Selector) -> bool:
        return all(self.is_visible(selector) for selector in selectors)

    # -- finders --------------------------------------------------------------

    def find_element(self, selector: Selector, timeout: float | None = None) -> WebElement:
        """Wait for an element to be present and displayed.

        Args:
            selector: Element locator
            timeout: Seconds to wait (config default if None)

        Returns:
            The first displayed match

        Raises:
            NotFoundError: If no displayed match appeared before the deadline
        """
        timeout = self.config.resolve_timeout(timeout)
        return self._poll(
            lambda: self._lookup_displayed(selector),
            timeout,
            f"No visible element matched {selector} within {timeout}s",
            selector,
        )

    def find_elements(self, selector: Selector, timeout: float | None = None) -> list[WebElement]:
        """Wait for at least one element to match.

        Returns:
            Every match, never empty

        Raises:
            NotFoundError: If nothing matched before the deadline
        """
        timeout = self.config.resolve_timeout(timeout)
        return self._poll(
            lambda: self._lookup_all(selector),
            timeout,
            f"No elements matched {selector} within {timeout}s",
            selector,
        )

    def get_elements_count(self, selector: Selector, timeout: float | None = None) -> int:
        """Count matches, or 0 if none appeared before the deadline."""
        try:
            return len(self.find_elements(selector, timeout))
        except NotFoundError:
            return 0

    def _poll(
        self,
        lookup: Callable[[], T | None],
        timeout: float,
        message: str,
        selector: Selector,
    ) -> T:
        self._registry.ensure_focus()

        deadline = self._clock.deadline(timeout)
        attempts = 0

        while not deadline.expired():
            attempts += 1
            result = lookup()
            if result is not None:
                logger.debug(f"Found {selector} after {attempts} attempts")
                return result
            self._clock.sleep(self.config.poll_interval)

        raise NotFoundError(
            message,
            details={"selector": str(selector), "timeout": timeout, "attempts": attempts},
            selector=selector,
            timeout=timeout,
        )

    # -- waiters --------------------------------------------------------------

    def _wait(
        self,
        lookup: Callable[[Selector], bool],
        selectors: Sequence[Selector],
        quantifier: Quantifier = Quantifier.ALL,
        expected: bool = True,
        timeout: float | None = None,
        indefinitely: bool = False,
    ) -> None:
        combine = any if quantifier == Quantifier.ANY else all

        def holds() -> bool:
            return combine(lookup(selector) == expected for selector in selectors)

        self._registry.ensure_focus()

        deadline = self._clock.deadline(self.config.resolve_timeout(timeout, indefinitely))
        while not deadline.expired() and not holds():
            self._clock.sleep(self.config.poll_interval)

    def wait_for_element_to_exist(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(self.exists, [selector], timeout=timeout, indefinitely=indefinitely)

    def wait_for_element_to_disappear(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(
            self.exists, [selector], expected=False, timeout=timeout, indefinitely=indefinitely
        )

    def wait_for_element_to_be_visible(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(self.is_visible, [selector], timeout=timeout, indefinitely=indefinitely)

    def wait_for_element_to_be_invisible(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(
            self.is_visible, [selector], expected=False, timeout=timeout, indefinitely=indefinitely
        )

    def wait_for_any_element_to_exist(
        self, *selectors: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(
            self.exists, selectors, Quantifier.ANY, timeout=timeout, indefinitely=indefinitely
        )

    def wait_for_all_elements_to_exist(
        self, *selectors: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(
            self.exists, selectors, Quantifier.ALL, timeout=timeout, indefinitely=indefinitely
        )

    def wait_for_any_element_to_be_visible(
        self, *selectors: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(
            self.is_visible, selectors, Quantifier.ANY, timeout=timeout, indefinitely=indefinitely
        )

    def wait_for_all_elements_to_be_visible(
        self, *selectors: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self._wait(
            self.is_visible, selectors, Quantifier.ALL, timeout=timeout, indefinitely=indefinitely
        )

    def wait_for_text_length(
        self,
        selector: Selector,
        length: int,
        timeout: float | None = None,
        indefinitely: bool = False,
    ) -> None:
        """Wait until the element's value or visible text has exactly ``length`` characters."""

        def has_length(target: Selector) -> bool:
            element = self._lookup_displayed(target)
            if element is None:
                return False
            try:
                value = element.get_attribute("value") or ""
                return len(value) == length or len(element.text or "") == length
            except Exception:
                return False

        self._wait(has_length, [selector], timeout=timeout, indefinitely=indefinitely)

    # -- reads ----------------------------------------------------------------

    def _read(
        self,
        selector: Selector,
        read: Callable[[WebElement], T],
        options: ReadOptions | None,
    ) -> T:
        options = options or DEFAULT_READ_OPTIONS
        timeout = self.config.resolve_timeout(options.timeout)
        deadline = self._clock.deadline(timeout)

        def locate_and_read() -> T:
            return read(self.find_element(selector, deadline.remaining()))

        if options.retry_on_dom_failure:
            return retry_until_not_none(
                locate_and_read,
                timeout,
                clock=self._clock,
                interval=self.config.poll_interval,
            )
        return locate_and_read()

    def _read_many(
        self,
        selector: Selector,
        read: Callable[[WebElement], T],
        options: ReadOptions | None,
    ) -> list[T]:
        options = options or DEFAULT_READ_OPTIONS
        timeout = self.config.resolve_timeout(options.timeout)
        deadline = self._clock.deadline(timeout)

        def locate_and_read() -> list[T]:
            elements = self.find_elements(selector, deadline.remaining())
            return [read(element) for element in elements]

        if options.retry_on_dom_failure:
            return retry_until_not_none(
                locate_and_read,
                timeout,
                clock=self._clock,
                interval=self.config.poll_interval,
            )
        return locate_and_read()

    def get_attribute(
        self, selector: Selector, attribute: str, options: ReadOptions | None = None
    ) -> str | None:
        """Read an attribute of the first displayed match.

        Args:
            selector: Element locator
            attribute: Attribute name
            options: Timeout and stale-retry behaviour

        Returns:
            Attribute value, or None if the element has no such attribute
        """
        return self._read(selector, lambda element: element.get_attribute(attribute), options)

    def get_attribute_of_many(
        self, selector: Selector, attribute: str, options: ReadOptions | None = None
    ) -> list[str | None]:
        """Read an attribute of every match."""
        return self._read_many(selector, lambda element: element.get_attribute(attribute), options)

    def get_class(self, selector: Selector, options: ReadOptions | None = None) -> str | None:
        return self.get_attribute(selector, "class", options)

    def get_class_of_many(
        self, selector: Selector, options: ReadOptions | None = None
    ) -> list[str | None]:
        return self.get_attribute_of_many(selector, "class", options)

    def get_classes(self, selector: Selector, options: ReadOptions | None = None) -> list[str]:
        """Split the class attribute of the first displayed match."""
        return (self.get_class(selector, options) or "").split()

    def has_class(
        self, selector: Selector, class_name: str, options: ReadOptions | None = None
    ) -> bool:
        return class_name in self.get_classes(selector, options)

    def get_hyperlink(self, selector: Selector, options: ReadOptions | None = None) -> str | None:
        return self.get_attribute(selector, "href", options)

    def get_hyperlink_of_many(
        self, selector: Selector, options: ReadOptions | None = None
    ) -> list[str | None]:
        return self.get_attribute_of_many(selector, "href", options)

    def get_source(self, selector: Selector, options: ReadOptions | None = None) -> str | None:
        return self.get_attribute(selector, "src", options)

    def get_source_of_many(
        self, selector: Selector, options: ReadOptions | None = None
    ) -> list[str | None]:
        return self.get_attribute_of_many(selector, "src", options)

    def get_style(self, selector: Selector, options: ReadOptions | None = None) -> str | None:
        return self.get_attribute(selector, "style", options)

    def get_style_of_many(
        self, selector: Selector, options: ReadOptions | None = None
    ) -> list[str | None]:
        return self.get_attribute_of_many(selector, "style", options)

    def get_id(self, selector: Selector, options: ReadOptions | None = None) -> str | None:
        return self.get_attribute(selector, "id", options)

    def get_id_of_many(
        self, selector: Selector, options: ReadOptions | None = None
    ) -> list[str | None]:
        return self.get_attribute_of_many(selector, "id", options)

    def get_value(self, selector: Selector, options: ReadOptions | None = None) -> str | None:
        return self.get_attribute(selector, "value", options)

    def get_value_of_many(
        self, selector: Selector, options: ReadOptions | None = None
    ) -> list[str | None]:
        return self.get_attribute_of_many(selector, "value", options)

    def get_text(self, selector: Selector, options: ReadOptions | None = None) -> str:
        """Read the visible text of the first displayed match."""
        return self._read(selector, lambda element: element.text, options)

    def get_text_of_many(self, selector: Selector, options: ReadOptions | None = None) -> list[str]:
        return self._read_many(selector, lambda element: element.text, options)

    def get_selected_text(self, selector: Selector, options: ReadOptions | None = None) -> str:
        """Read the text of the selected option of a <select>."""
        return self._read(
            selector, lambda element: Select(element).first_selected_option.text, options
        )

    def get_selected_text_of_many(
        self, selector: Selector, options: ReadOptions | None = None
    ) -> list[str]:
        return self._read_many(
            selector, lambda element: Select(element).first_selected_option.text, options
        )

    def is_selected(self, selector: Selector, options: ReadOptions | None = None) -> bool:
        return self._read(selector, lambda element: element.is_selected(), options)
