"""Pytest configuration and fixtures for web-processor tests."""

from typing import Any

import pytest
from selenium.common.exceptions import (
    NoAlertPresentException,
    NoSuchElementException,
    NoSuchWindowException,
    StaleElementReferenceException,
)

from web_processor.core.clock import Clock
from web_processor.core.config import Config
from web_processor.processor import WebProcessor


class FakeClock(Clock):
    """Virtual clock: sleeping advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.time = start
        self.start = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.time

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if seconds > 0:
            self.time += seconds

    @property
    def elapsed(self) -> float:
        return self.time - self.start


class FakeElement:
    """Minimal stand-in for a Selenium WebElement."""

    def __init__(
        self,
        text: str = "",
        displayed: bool = True,
        selected: bool = False,
        attributes: dict[str, Any] | None = None,
        tag_name: str = "div",
    ) -> None:
        self.text = text
        self.displayed = displayed
        self.selected = selected
        self.attributes = attributes or {}
        self.tag_name = tag_name
        self.clicks = 0
        self.cleared = 0
        self.keys: list[str] = []
        self.stale_reads = 0

    def is_displayed(self) -> bool:
        return self.displayed

    def is_selected(self) -> bool:
        return self.selected

    def get_attribute(self, name: str) -> Any:
        if self.stale_reads > 0:
            self.stale_reads -= 1
            raise StaleElementReferenceException("element is not attached to the page document")
        return self.attributes.get(name)

    def click(self) -> None:
        self.clicks += 1
        self.selected = not self.selected

    def clear(self) -> None:
        self.cleared += 1
        self.attributes["value"] = ""

    def send_keys(self, text: str) -> None:
        self.keys.append(text)
        self.attributes["value"] = self.attributes.get("value", "") + text


class FakeAlert:
    def __init__(self) -> None:
        self.accepted = False
        self.dismissed = False

    def accept(self) -> None:
        self.accepted = True

    def dismiss(self) -> None:
        self.dismissed = True


class FakeSwitchTo:
    def __init__(self, driver: "FakeDriver") -> None:
        self._driver = driver

    def window(self, handle: str) -> None:
        if handle not in self._driver.window_handles:
            raise NoSuchWindowException(f"no such window: {handle}")
        self._driver.window_switches.append(handle)
        self._driver.focused = handle

    def frame(self, frame: Any) -> None:
        self._driver.frames.append(frame)

    @property
    def alert(self) -> FakeAlert:
        self._driver.alert_checks += 1
        if self._driver.alert_after is None or self._driver.alert_checks <= self._driver.alert_after:
            raise NoAlertPresentException("no such alert")
        return self._driver.alert


class FakeDriver:
    """Scriptable stand-in for a Selenium WebDriver session.

    Lookups are scripted per (by, value) pair: each call consumes the next
    entry of the script (the last entry repeats). An entry is an element, a
    list of elements, None (no match) or an exception instance to raise.

    Like a W3C driver, closing the focused window leaves the session on a
    dead handle: reading it or looking anything up raises
    NoSuchWindowException until another window is switched to.
    """

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.clock = clock
        self.window_handles: list[str] = ["root"]
        self.focused = "root"
        self.current_url = "about:blank"
        self.page_source = "<html></html>"
        self.switch_to = FakeSwitchTo(self)
        self.window_switches: list[str] = []
        self.frames: list[Any] = []
        self.closed: list[str] = []
        self.navigations: list[str] = []
        self.scripts: list[str] = []
        self.refreshes = 0
        self.lookups: list[tuple[str, str, float | None]] = []
        self.scripts_by_selector: dict[tuple[str, str], list[Any]] = {}
        self.tabs_per_script = 1
        self.alert = FakeAlert()
        self.alert_after: int | None = None
        self.alert_checks = 0
        self.quit_called = False
        self._handle_counter = 0

    @property
    def current_window_handle(self) -> str:
        self._check_window()
        return self.focused

    def _check_window(self) -> None:
        if self.focused not in self.window_handles:
            raise NoSuchWindowException(f"no such window: {self.focused}")

    # -- scripting helpers ----------------------------------------------------

    def script(self, selector: Any, *entries: Any) -> None:
        self.scripts_by_selector[(selector.by, selector.value)] = list(entries)

    def lookups_for(self, selector: Any) -> list[float | None]:
        return [at for by, value, at in self.lookups if (by, value) == (selector.by, selector.value)]

    def _next(self, by: str, value: str) -> Any:
        self._check_window()
        self.lookups.append((by, value, self.clock.now() if self.clock else None))
        entries = self.scripts_by_selector.get((by, value))
        if not entries:
            return None
        entry = entries.pop(0) if len(entries) > 1 else entries[0]
        if isinstance(entry, Exception):
            raise entry
        return entry

    # -- WebDriver surface ----------------------------------------------------

    def find_element(self, by: str, value: str) -> Any:
        entry = self._next(by, value)
        if entry is None or entry == []:
            raise NoSuchElementException(f"no such element: {by}={value}")
        if isinstance(entry, list):
            return entry[0]
        return entry

    def find_elements(self, by: str, value: str) -> list[Any]:
        entry = self._next(by, value)
        if entry is None:
            return []
        if isinstance(entry, list):
            return entry
        return [entry]

    def execute_script(self, script: str, *args: Any) -> Any:
        self.scripts.append(script)
        if "a.target='_blank'" in script:
            for _ in range(self.tabs_per_script):
                self._handle_counter += 1
                self.window_handles.append(f"tab-{self._handle_counter}")
        return None

    def get(self, url: str) -> None:
        self.navigations.append(url)
        self.current_url = url

    def refresh(self) -> None:
        self.refreshes += 1

    def close(self) -> None:
        handle = self.current_window_handle
        self.closed.append(handle)
        self.window_handles.remove(handle)

    def quit(self) -> None:
        self.quit_called = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def driver(clock) -> FakeDriver:
    return FakeDriver(clock)


@pytest.fixture
def config() -> Config:
    return Config(
        default_timeout=20.0,
        poll_interval=0.333,
        indefinite_timeout=873 * 24 * 60 * 60.0,
        http_attempts=3,
        retry_delay=0.333,
        body_check_attempts=3,
        random_seed=1234,
        remote_url="",
        log_level="INFO",
    )


@pytest.fixture
def processor(driver, config, clock) -> WebProcessor:
    return WebProcessor(driver, config, clock)
