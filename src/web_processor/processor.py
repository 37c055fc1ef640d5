"""WebProcessor: one driver session, the tabs it owns, and every bounded operation on them."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any

from web_processor.browser.alerts import AlertController
from web_processor.browser.forms import FormController
from web_processor.browser.navigation import NavigationController
from web_processor.browser.selectors import Selector
from web_processor.browser.tabs import BLANK_PAGE, TabRegistry
from web_processor.browser.waiter import ElementWaiter, ReadOptions
from web_processor.core.clock import Clock
from web_processor.core.config import Config

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver
    from selenium.webdriver.remote.webelement import WebElement

logger = logging.getLogger(__name__)


class WebProcessor:
    """Exclusive owner of a set of tabs in one WebDriver session.

    The processor bundles a TabRegistry with the controllers that act on the
    current tab:

    - ``elements``: ElementWaiter (finders, presence checks, waiters, reads)
    - ``navigation``: NavigationController
    - ``alerts``: AlertController
    - ``forms``: FormController

    The most common operations are also available directly on the
    processor. Use it as a context manager so every tab it opened is closed
    on every exit path.

    Example:
        >>> with WebProcessor(driver) as processor:
        ...     processor.go_to_url("https://example.com")
        ...     processor.set_text(Selector.name("q"), "selenium")
        ...     processor.click(Selector.css("button[type=submit]"))
        ...     titles = processor.elements.get_text_of_many(Selector.css("h3"))
    """

    def __init__(
        self,
        driver: WebDriver,
        config: Config | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            driver: WebDriver session this processor exclusively acts on
            config: Optional Config instance. If not provided, creates from environment.
            clock: Time source for polling (a real clock if not provided)
            rng: Random source for random selections (seeded from config if not provided)
        """
        self.config = config or Config.from_env()
        self.config.validate()

        self._driver = driver
        self._clock = clock or Clock()
        self.random = rng or random.Random(self.config.random_seed)
        self._closed = False

        self.registry = TabRegistry(driver)
        self.elements = ElementWaiter(driver, self.registry, self.config, self._clock)
        self.navigation = NavigationController(
            driver, self.registry, self.elements, self.config, self._clock
        )
        self.alerts = AlertController(driver, self.registry, self.config, self._clock)
        self.forms = FormController(driver, self.elements, self.random)

        logger.debug(f"{self.name} processor initialized")

    @property
    def name(self) -> str:
        return type(self).__name__.replace("Processor", "")

    @property
    def tabs(self) -> tuple[str, ...]:
        return self.registry.tabs

    @property
    def current_tab(self) -> str | None:
        return self.registry.current

    @property
    def driver_window_tabs(self) -> list[str]:
        return self.registry.driver_window_tabs

    # -- lifecycle ------------------------------------------------------------

    def __enter__(self) -> WebProcessor:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        try:
            self.close()
        except Exception as e:
            if exc_type is None:
                raise
            logger.warning(f"Failed to close tabs while handling {exc_type.__name__}: {e}")
        return False

    def close(self) -> None:
        """Close every tab this processor opened and refocus the driver's first window."""
        if self._closed:
            return
        self._closed = True
        logger.debug(f"Closing {len(self.registry)} tabs")
        self.registry.close_all()

    def wait(self, seconds: float | None = None) -> None:
        """Block for ``seconds`` (one poll interval if None)."""
        self._clock.sleep(self.config.poll_interval if seconds is None else seconds)

    # -- tabs -----------------------------------------------------------------

    def new_tab(self, url: str = BLANK_PAGE) -> str:
        return self.registry.new_tab(url)

    def switch_to_tab(self, tab: str | int) -> None:
        self.registry.switch_to_tab(tab)

    def close_tab(self, tab: str) -> None:
        self.registry.close_tab(tab)

    # -- navigation -----------------------------------------------------------

    def go_to_url(
        self, url: str, http_retries: int | None = None, retry_delay: float | None = None
    ) -> None:
        self.navigation.go_to_url(url, http_retries, retry_delay)

    def refresh(self) -> None:
        self.navigation.refresh()

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.navigation.execute_script(script, *args)

    # -- elements -------------------------------------------------------------

    def find_element(self, selector: Selector, timeout: float | None = None) -> WebElement:
        return self.elements.find_element(selector, timeout)

    def find_elements(self, selector: Selector, timeout: float | None = None) -> list[WebElement]:
        return self.elements.find_elements(selector, timeout)

    def exists(self, selector: Selector) -> bool:
        return self.elements.exists(selector)

    def is_visible(self, selector: Selector) -> bool:
        return self.elements.is_visible(selector)

    def wait_for_element_to_exist(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self.elements.wait_for_element_to_exist(selector, timeout, indefinitely)

    def wait_for_element_to_disappear(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self.elements.wait_for_element_to_disappear(selector, timeout, indefinitely)

    def wait_for_element_to_be_visible(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self.elements.wait_for_element_to_be_visible(selector, timeout, indefinitely)

    def wait_for_element_to_be_invisible(
        self, selector: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self.elements.wait_for_element_to_be_invisible(selector, timeout, indefinitely)

    def wait_for_any_element_to_exist(
        self, *selectors: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self.elements.wait_for_any_element_to_exist(
            *selectors, timeout=timeout, indefinitely=indefinitely
        )

    def wait_for_all_elements_to_be_visible(
        self, *selectors: Selector, timeout: float | None = None, indefinitely: bool = False
    ) -> None:
        self.elements.wait_for_all_elements_to_be_visible(
            *selectors, timeout=timeout, indefinitely=indefinitely
        )

    def get_attribute(
        self, selector: Selector, attribute: str, options: ReadOptions | None = None
    ) -> str | None:
        return self.elements.get_attribute(selector, attribute, options)

    def get_text(self, selector: Selector, options: ReadOptions | None = None) -> str:
        return self.elements.get_text(selector, options)

    def get_classes(self, selector: Selector, options: ReadOptions | None = None) -> list[str]:
        return self.elements.get_classes(selector, options)

    def get_hyperlink(self, selector: Selector, options: ReadOptions | None = None) -> str | None:
        return self.elements.get_hyperlink(selector, options)

    # -- dialogs and forms ----------------------------------------------------

    def accept_alert(self, timeout: float | None = None) -> None:
        self.alerts.accept_alert(timeout)

    def dismiss_alert(self, timeout: float | None = None) -> None:
        self.alerts.dismiss_alert(timeout)

    def click(self, selector: Selector, timeout: float | None = None) -> None:
        self.forms.click(selector, timeout)

    def set_text(self, selector: Selector, text: str, timeout: float | None = None) -> None:
        self.forms.set_text(selector, text, timeout)

    def update_checkbox(self, selector: Selector, status: bool, timeout: float | None = None) -> None:
        self.forms.update_checkbox(selector, status, timeout)

    def select_option_by_index(
        self, selector: Selector, index: int, timeout: float | None = None
    ) -> None:
        self.forms.select_option_by_index(selector, index, timeout)

    def select_option_by_value(
        self, selector: Selector, value: Any, timeout: float | None = None
    ) -> None:
        self.forms.select_option_by_value(selector, value, timeout)

    def select_option_by_text(
        self, selector: Selector, text: str, timeout: float | None = None
    ) -> None:
        self.forms.select_option_by_text(selector, text, timeout)

    def select_random_option(self, selector: Selector, timeout: float | None = None) -> int:
        return self.forms.select_random_option(selector, timeout)
