"""Ownership and focus tracking for browser tabs opened by a processor."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Iterator

from selenium.common.exceptions import NoSuchWindowException

from web_processor.core.exceptions import InvalidTabError, TabDetectionError

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)

BLANK_PAGE = "about:blank"

# Opens the URL through a synthetic link click so it lands in a new tab
NEW_TAB_SCRIPT = (
    "var d=document,a=d.createElement('a');"
    "a.target='_blank';a.href={url};"
    "a.innerHTML='new tab';"
    "d.body.appendChild(a);"
    "a.click();"
    "a.parentNode.removeChild(a);"
)


class TabRegistry:
    """Tracks the window handles a processor created and which one has focus.

    The driver session may hold other windows (the initial window, popups,
    tabs opened by other code); the registry only ever acts on handles it
    registered through ``new_tab``. Closing the current tab leaves
    ``current`` pointing at the closed handle until the next explicit
    switch, so any later focused operation fails with ``InvalidTabError``
    instead of silently acting on another window.

    Example:
        registry = TabRegistry(driver)
        tab = registry.new_tab("https://example.com")
        ...
        registry.close_all()
    """

    def __init__(self, driver: WebDriver) -> None:
        self._driver = driver
        self._tabs: list[str] = []
        self._current: str | None = None

    @property
    def tabs(self) -> tuple[str, ...]:
        """Registered handles in registration order."""
        return tuple(self._tabs)

    @property
    def current(self) -> str | None:
        return self._current

    @property
    def driver_window_tabs(self) -> list[str]:
        """Every window handle the driver knows about, owned or not."""
        return list(self._driver.window_handles)

    @property
    def focused(self) -> str | None:
        """Handle the driver has focused, or None if that window has been closed."""
        try:
            return self._driver.current_window_handle
        except NoSuchWindowException:
            return None

    def __contains__(self, tab: object) -> bool:
        return tab in self._tabs

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tabs))

    def __len__(self) -> int:
        return len(self._tabs)

    def new_tab(self, url: str = BLANK_PAGE) -> str:
        """Open a new tab on ``url``, register it and focus it.

        The tab is opened from the driver's first window so the result does
        not depend on which tab currently has focus.

        Args:
            url: Address the new tab starts on

        Returns:
            Handle of the new tab

        Raises:
            TabDetectionError: If zero or several new handles appeared
        """
        self._driver.switch_to.window(self._driver.window_handles[0])

        before = list(self._driver.window_handles)
        self._driver.execute_script(NEW_TAB_SCRIPT.format(url=json.dumps(url)))
        after = list(self._driver.window_handles)

        opened = [handle for handle in after if handle not in before]
        if len(opened) != 1:
            raise TabDetectionError(opened)

        tab = opened[0]
        self._tabs.append(tab)
        logger.info(f"Opened tab {tab} on {url}")

        self.switch_to_tab(tab)
        return tab

    def switch_to_tab(self, tab: str | int) -> None:
        """Focus a registered tab.

        Args:
            tab: Tab handle, or its index in registration order

        Raises:
            InvalidTabError: If the tab is not owned by this registry
        """
        if isinstance(tab, int):
            try:
                tab = self._tabs[tab]
            except IndexError:
                raise InvalidTabError(tab) from None

        if tab not in self._tabs:
            raise InvalidTabError(tab)

        self._current = tab
        if tab == self.focused:
            return

        self._driver.switch_to.window(tab)

    def ensure_focus(self) -> None:
        """Re-focus the current tab in case something else stole focus."""
        if self._current is not None:
            self.switch_to_tab(self._current)

    def close_tab(self, tab: str) -> None:
        """Close a registered tab and forget it.

        Raises:
            InvalidTabError: If the tab is not owned by this registry
        """
        if tab not in self._tabs:
            raise InvalidTabError(tab)

        self._driver.switch_to.window(tab)
        self._driver.close()
        self._tabs.remove(tab)

        # The driver stays on the closed window until told otherwise
        if tab != self._current and self._current in self._tabs:
            self._driver.switch_to.window(self._current)
        logger.info(f"Closed tab {tab}")

    def close_all(self) -> None:
        """Close every registered tab and focus the driver's first remaining window.

        All tabs are attempted even if closing one of them fails; the first
        failure is re-raised once cleanup has finished.
        """
        first_error: Exception | None = None

        for tab in list(self._tabs):
            try:
                self.close_tab(tab)
            except Exception as e:
                logger.warning(f"Failed to close tab {tab}: {e}")
                if tab in self._tabs:
                    self._tabs.remove(tab)
                if first_error is None:
                    first_error = e

        self._current = None

        try:
            handles = self._driver.window_handles
            if handles:
                self._driver.switch_to.window(handles[0])
        except Exception as e:
            logger.warning(f"Failed to restore focus after closing tabs: {e}")
            if first_error is None:
                first_error = e

        if first_error is not None:
            raise first_error
