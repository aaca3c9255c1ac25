"""
Browser-free stand-ins for Selenium WebDriver and WebElement.

They implement the small slice of the WebDriver API that expected_conditions,
WebDriverWait and the page objects touch.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from selenium.common.exceptions import NoSuchElementException


class FakeElement:
    def __init__(
        self,
        text: str = "",
        displayed: bool = True,
        enabled: bool = True,
        attributes: Optional[Dict[str, str]] = None,
    ):
        self.text = text
        self.displayed = displayed
        self.enabled = enabled
        self.selected = False
        self.attributes = dict(attributes or {})
        self.clicks = 0
        self.typed: List[str] = []

    def is_displayed(self) -> bool:
        return self.displayed

    def is_enabled(self) -> bool:
        return self.enabled

    def is_selected(self) -> bool:
        return self.selected

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def click(self) -> None:
        self.clicks += 1
        self.selected = not self.selected

    def clear(self) -> None:
        self.attributes["value"] = ""
        self.typed.clear()

    def send_keys(self, *keys: str) -> None:
        self.typed.extend(keys)
        self.attributes["value"] = self.attributes.get("value", "") + "".join(keys)


class FakeDriver:
    def __init__(
        self,
        elements: Optional[Dict[Tuple[str, str], FakeElement]] = None,
        title: str = "",
        current_url: str = "about:blank",
    ):
        self.elements = dict(elements or {})
        self.title = title
        self.current_url = current_url
        self.page_source = "<html></html>"
        self.visited: List[str] = []
        self.scripts: List[str] = []
        self.quit_calls = 0
        self.maximized = False
        self.page_load_timeout = None
        self.refreshed = 0

    def find_element(self, by: str, value: str) -> FakeElement:
        try:
            return self.elements[(by, value)]
        except KeyError:
            raise NoSuchElementException(f"No element {by}={value}") from None

    def find_elements(self, by: str, value: str) -> List[FakeElement]:
        element = self.elements.get((by, value))
        return [element] if element else []

    def get(self, url: str) -> None:
        self.visited.append(url)
        self.current_url = url

    def refresh(self) -> None:
        self.refreshed += 1

    def execute_script(self, script: str, *args):
        self.scripts.append(script)
        if "readyState" in script:
            return "complete"
        return None

    def get_screenshot_as_png(self) -> bytes:
        return b"\x89PNG fake"

    def set_page_load_timeout(self, seconds: float) -> None:
        self.page_load_timeout = seconds

    def maximize_window(self) -> None:
        self.maximized = True

    def quit(self) -> None:
        self.quit_calls += 1

