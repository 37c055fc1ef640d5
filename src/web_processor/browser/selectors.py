"""Element locators."""

from __future__ import annotations

from dataclasses import dataclass

from selenium.webdriver.common.by import By

MECHANISMS = {
    "id": By.ID,
    "name": By.NAME,
    "class": By.CLASS_NAME,
    "css": By.CSS_SELECTOR,
    "xpath": By.XPATH,
    "tag": By.TAG_NAME,
    "link_text": By.LINK_TEXT,
    "partial_link_text": By.PARTIAL_LINK_TEXT,
}


@dataclass(frozen=True)
class Selector:
    """A (mechanism, criteria) pair identifying DOM nodes in the current document.

    ``by`` is one of Selenium's ``By`` strategies and ``value`` the criteria
    passed alongside it to ``find_element``/``find_elements``.

    Example:
        title = Selector.css("input[name='title']")
        rows = Selector.xpath("//table/tbody/tr")
    """

    by: str
    value: str

    def __post_init__(self) -> None:
        if self.by not in MECHANISMS.values():
            raise ValueError(f"Unknown selector mechanism: {self.by}")

    def __str__(self) -> str:
        return f"{self.by}={self.value!r}"

    @classmethod
    def parse(cls, kind: str, value: str) -> Selector:
        """Build a selector from a short mechanism name ("css", "xpath", "id", ...)."""
        try:
            return cls(MECHANISMS[kind.lower()], value)
        except KeyError:
            raise ValueError(f"Unknown selector kind: {kind}") from None

    @classmethod
    def id(cls, value: str) -> Selector:
        return cls(By.ID, value)

    @classmethod
    def name(cls, value: str) -> Selector:
        return cls(By.NAME, value)

    @classmethod
    def class_name(cls, value: str) -> Selector:
        return cls(By.CLASS_NAME, value)

    @classmethod
    def css(cls, value: str) -> Selector:
        return cls(By.CSS_SELECTOR, value)

    @classmethod
    def xpath(cls, value: str) -> Selector:
        return cls(By.XPATH, value)

    @classmethod
    def tag(cls, value: str) -> Selector:
        return cls(By.TAG_NAME, value)

    @classmethod
    def link_text(cls, value: str) -> Selector:
        return cls(By.LINK_TEXT, value)

    @classmethod
    def partial_link_text(cls, value: str) -> Selector:
        return cls(By.PARTIAL_LINK_TEXT, value)
