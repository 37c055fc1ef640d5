"""Browser interaction layer: tabs, element polling, navigation, dialogs and forms."""

from web_processor.browser.alerts import AlertController
from web_processor.browser.forms import FormController
from web_processor.browser.navigation import (
    ANYTHING_SELECTOR,
    ERROR_PAGE_SELECTORS,
    NavigationController,
)
from web_processor.browser.selectors import Selector
from web_processor.browser.tabs import BLANK_PAGE, TabRegistry
from web_processor.browser.waiter import ElementWaiter, Quantifier, ReadOptions

__all__ = [
    # Locators
    "Selector",
    # Tabs
    "TabRegistry",
    "BLANK_PAGE",
    # Element polling
    "ElementWaiter",
    "Quantifier",
    "ReadOptions",
    # Navigation
    "NavigationController",
    "ANYTHING_SELECTOR",
    "ERROR_PAGE_SELECTORS",
    # Dialogs and forms
    "AlertController",
    "FormController",
]
