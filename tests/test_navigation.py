"""Tests for URL loading and page-level operations."""

import pytest
from unittest.mock import Mock
from selenium.common.exceptions import NoSuchFrameException

from web_processor.browser.navigation import ANYTHING_SELECTOR, ERROR_PAGE_SELECTORS
from web_processor.browser.selectors import Selector
from web_processor.core.config import Config
from web_processor.core.exceptions import NavigationFailedError, NotFoundError
from web_processor.processor import WebProcessor

from tests.conftest import FakeElement

URL = "https://example.com/page"
CHROME_ERROR, FIREFOX_ERROR = ERROR_PAGE_SELECTORS


@pytest.fixture
def rendered(driver):
    """Make every page render something under <body>."""
    driver.script(ANYTHING_SELECTOR, FakeElement(tag_name="main"))
    return driver


class TestGoToUrl:
    """Tests for go_to_url."""

    def test_loads_url_in_new_tab(self, processor, rendered):
        """Test the first navigation opens a tab and loads the URL once."""
        processor.go_to_url(URL)

        assert rendered.navigations == [URL]
        assert processor.current_tab == "tab-1"
        assert processor.tabs == ("tab-1",)

    def test_reuses_current_tab(self, processor, rendered):
        """Test an existing current tab is used instead of opening another."""
        tab = processor.new_tab()

        processor.go_to_url(URL)

        assert processor.tabs == (tab,)
        assert rendered.current_window_handle == tab

    def test_same_url_is_not_reloaded(self, processor, rendered):
        """Test navigating to the URL the tab already shows sends nothing."""
        processor.go_to_url(URL)
        processor.go_to_url(URL)

        assert rendered.navigations == [URL]

    def test_error_page_exhausts_attempts(self, processor, rendered, clock):
        """Test a permanent error page is retried then reported."""
        rendered.script(CHROME_ERROR, FakeElement(text="ERR_NAME_NOT_RESOLVED"))

        with pytest.raises(NavigationFailedError) as exc_info:
            processor.go_to_url(URL, http_retries=3)

        assert exc_info.value.attempts == 3
        assert exc_info.value.url == URL
        assert "after 3 attempts" in str(exc_info.value)
        assert rendered.navigations == [URL, "about:blank"] * 3
        assert clock.sleeps == [0.333] * 3

    def test_firefox_error_page(self, processor, rendered):
        """Test the Firefox error container is recognised too."""
        rendered.script(FIREFOX_ERROR, FakeElement())

        with pytest.raises(NavigationFailedError):
            processor.go_to_url(URL, http_retries=1, retry_delay=0)

        assert rendered.navigations == [URL, "about:blank"]

    def test_recovers_after_error_page(self, processor, rendered):
        """Test a transient error page is followed by a successful attempt."""
        rendered.script(CHROME_ERROR, FakeElement(), None)

        processor.go_to_url(URL)

        assert rendered.navigations == [URL, "about:blank", URL]

    def test_hidden_error_markup_is_ignored(self, processor, rendered):
        """Test an error selector that is present but hidden does not count."""
        rendered.script(CHROME_ERROR, FakeElement(displayed=False))

        processor.go_to_url(URL)

        assert rendered.navigations == [URL]

    def test_custom_error_selectors(self, driver, config, clock):
        """Test error page detection can be configured."""
        processor = WebProcessor(driver, config, clock)
        captcha = Selector.id("captcha")
        processor.navigation.error_page_selectors = (captcha,)
        driver.script(ANYTHING_SELECTOR, FakeElement())
        driver.script(captcha, FakeElement())

        with pytest.raises(NavigationFailedError):
            processor.go_to_url(URL, http_retries=2)

    def test_empty_body_is_reloaded(self, driver, clock):
        """Test a page that never renders is navigated again a bounded number of times."""
        config = Config(default_timeout=1.0, random_seed=1)
        processor = WebProcessor(driver, config, clock)

        processor.go_to_url(URL, http_retries=1)

        assert driver.navigations == [URL] * (1 + config.body_check_attempts)


class TestPageOperations:
    """Tests for refresh, scripts, page source and frames."""

    def test_refresh(self, processor, driver):
        """Test refresh reloads the current tab."""
        processor.new_tab()

        processor.refresh()

        assert driver.refreshes == 1

    def test_execute_script(self, processor, driver):
        """Test scripts run in the driver and return their result."""
        driver.execute_script = Mock(return_value=42)

        assert processor.execute_script("return arguments[0];", 42) == 42
        driver.execute_script.assert_called_once_with("return arguments[0];", 42)

    def test_get_variable_value(self, processor, driver, clock):
        """Test reading a global JavaScript variable."""
        driver.execute_script = Mock(return_value="abc")

        assert processor.navigation.get_variable_value("window.token") == "abc"
        driver.execute_script.assert_called_once_with("return window.token;")
        assert clock.sleeps == [0.333]

    def test_get_page_source_restores_focus(self, processor, driver):
        """Test the previously focused window regains focus after reading the source."""
        processor.new_tab()
        driver.page_source = "<html><body>tab</body></html>"
        driver.switch_to.window("root")

        assert processor.navigation.get_page_source() == "<html><body>tab</body></html>"
        assert driver.current_window_handle == "root"

    def test_get_page_source_from_closed_window(self, processor, driver):
        """Test reading the source works when the driver sits on a closed window."""
        first = processor.new_tab()
        second = processor.new_tab()
        driver.switch_to.window(first)
        driver.close()

        assert processor.navigation.get_page_source() == driver.page_source
        assert driver.current_window_handle == second

    def test_switch_to_iframe_keeps_one_deadline(self, processor, driver, clock):
        """Test a frame switch that keeps failing stays within its timeout."""
        frame_selector = Selector.tag("iframe")
        driver.script(frame_selector, FakeElement(tag_name="iframe"))
        driver.switch_to.frame = Mock(side_effect=NoSuchFrameException("detached"))

        with pytest.raises(NoSuchFrameException):
            processor.navigation.switch_to_iframe(frame_selector, 1)

        assert clock.elapsed <= 1 + 0.333 + 1e-6

    def test_switch_to_iframe_by_index(self, processor, driver):
        """Test entering a frame by its index."""
        processor.navigation.switch_to_iframe(1)

        assert driver.frames == [1]

    def test_switch_to_iframe_by_selector(self, processor, driver):
        """Test entering a frame located by selector."""
        frame = FakeElement(tag_name="iframe")
        frame_selector = Selector.tag("iframe")
        driver.script(frame_selector, None, frame)

        processor.navigation.switch_to_iframe(frame_selector, 5)

        assert driver.frames == [frame]

    def test_go_to_iframe(self, processor, rendered):
        """Test loading an iframe's document as the page."""
        frame_selector = Selector.css("iframe#content")
        rendered.script(
            frame_selector,
            FakeElement(tag_name="iframe", attributes={"src": "https://frames.example.com/x"}),
        )

        processor.navigation.go_to_iframe(frame_selector)

        assert rendered.navigations == ["https://frames.example.com/x"]

    def test_go_to_iframe_without_src(self, processor, rendered):
        """Test an iframe without src raises NotFoundError."""
        frame_selector = Selector.tag("iframe")
        rendered.script(frame_selector, FakeElement(tag_name="iframe"))

        with pytest.raises(NotFoundError):
            processor.navigation.go_to_iframe(frame_selector, 1)
