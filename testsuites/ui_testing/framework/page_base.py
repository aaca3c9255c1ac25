"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and URL handling
    - Smart element location with fallback locators
    - Explicit wait strategies (title, URL, element state)
    - Screenshot and debugging utilities

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import allure
from loguru import logger
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from uiauto_tools.common import get_config
from uiauto_tools.report_tools.allure_utils import attach_browser_state, attach_screenshot

from .smart_locator import Locator, LocatorHealth, SmartLocator, format_health_report


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"

# Element state -> expected_conditions factory used by wait_for_element
ELEMENT_STATES = {
    "present": EC.presence_of_element_located,
    "visible": EC.visibility_of_element_located,
    "clickable": EC.element_to_be_clickable,
    "hidden": EC.invisibility_of_element_located,
}


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare ``SITE`` (a key under ``sites`` in the config),
    ``URL_PATH`` and their element locators, then expose named actions.

    Usage:
        class LoginPage(BasePage):
            SITE = "orangehrm"
            URL_PATH = "/web/index.php/auth/login"

            @property
            def username_input(self) -> SmartLocator:
                return self.smart_locator((By.NAME, "username"), name="Username")

            def login(self, username: str, password: str) -> "LoginPage":
                self.fill(self.username_input, username)
                ...
                return self
    """

    # Override in subclasses
    SITE: str = ""
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        driver: WebDriver,
        base_url: str = "",
        timeout: Optional[float] = None,
    ):
        """
        Initialize page object.

        Args:
            driver: Selenium WebDriver
            base_url: Base URL for the application. Defaults to
                ``sites.<SITE>`` from config, then ``ui.base_url``.
            timeout: Explicit wait timeout in seconds (default ui.explicit_wait)
        """
        self.driver = driver
        if not base_url:
            base_url = get_config(f"sites.{self.SITE}") if self.SITE else None
            base_url = base_url or get_config("ui.base_url", "http://localhost:3000")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else get_config("ui.explicit_wait", 10)
        self.poll_frequency = get_config("ui.poll_frequency", 0.5)
        self.wait = WebDriverWait(driver, self.timeout, poll_frequency=self.poll_frequency)
        self._locators: Dict[Tuple[str, Locator], SmartLocator] = {}

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def navigate(self) -> None:
        """Navigate to this page."""
        with allure.step(f"Navigate to {self.url}"):
            self.driver.get(self.url)
            logger.debug(f"Navigated to: {self.url}")

    def navigate_to(self, path: str) -> None:
        """
        Navigate to specific path under the base URL.

        Args:
            path: URL path to navigate to
        """
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            self.driver.get(full_url)

    @property
    def title(self) -> str:
        return self.driver.title

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def refresh(self) -> None:
        with allure.step("Refresh page"):
            self.driver.refresh()

    def smart_locator(
        self,
        primary: Locator,
        fallbacks: Optional[Sequence[Locator]] = None,
        name: str = "custom_element",
    ) -> SmartLocator:
        """
        SmartLocator in *element mode* with primary + fallback locators.

        Page Objects declare element locators as properties built with this
        helper and resolve them later with ``.locate()`` / ``.click()`` etc.
        One instance is kept per (name, primary) so fallback usage feeds
        ``get_health_report``.

        Args:
            primary: Primary (By, value) locator
            fallbacks: Fallback locators to try when primary fails
            name: Human-readable element name for logging/Allure

        Returns:
            SmartLocator instance configured for a single element
        """
        key = (name, primary)
        if key not in self._locators:
            locators = {"primary": primary}
            for i, fb in enumerate(fallbacks or [], start=1):
                locators[f"fallback_{i}"] = fb
            self._locators[key] = SmartLocator(
                self.driver,
                element_name=name,
                locators=locators,
                timeout=self.timeout,
                poll_frequency=self.poll_frequency,
            )
        return self._locators[key]

    def get_health_report(self) -> str:
        """Fallback usage of every element this page has resolved."""
        fallbacks: Dict[str, LocatorHealth] = {}
        for element in self._locators.values():
            fallbacks.update(element.fallbacks_used)
        return format_health_report(fallbacks)

    # =========================================================================
    # Element Interactions
    # =========================================================================

    def find(self, locator: Locator) -> WebElement:
        """Find a single element immediately (no wait)."""
        return self.driver.find_element(*locator)

    def find_all(self, locator: Locator) -> List[WebElement]:
        """Find all matching elements immediately (no wait)."""
        return self.driver.find_elements(*locator)

    def click(self, element: SmartLocator, timeout: Optional[float] = None) -> None:
        """
        Click element once it is clickable.

        Args:
            element: SmartLocator of the element
            timeout: Timeout for element location
        """
        with allure.step(f"Click: {element.name}"):
            element.click(timeout=timeout)

    def fill(
        self,
        element: SmartLocator,
        value: str,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Clear an input element and type a value.

        Args:
            element: SmartLocator of the input
            value: Value to type
            timeout: Timeout for element location
        """
        name = element.name
        shown = "*" * len(value) if "password" in name.lower() else value
        with allure.step(f"Fill {name}: {shown}"):
            element.fill(None, value, timeout=timeout)

    def get_text(self, element: SmartLocator, timeout: Optional[float] = None) -> str:
        return element.get_text(timeout=timeout)

    def get_attribute(
        self,
        element: SmartLocator,
        attribute: str,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        return element.get_attribute(None, attribute, timeout=timeout)

    def is_visible(self, element: SmartLocator, timeout: Optional[float] = 2) -> bool:
        """
        Check if element is visible.

        Args:
            element: SmartLocator of the element
            timeout: Timeout for visibility check

        Returns:
            True if visible
        """
        return element.is_visible(timeout=timeout)

    def is_enabled(self, element: SmartLocator, timeout: Optional[float] = None) -> bool:
        return element.locate(condition="present", timeout=timeout).is_enabled()

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    def wait_for_title_contains(self, text: str, timeout: Optional[float] = None) -> None:
        """
        Wait for the page title to contain text.

        Raises:
            TimeoutException: When the title never matches
        """
        with allure.step(f"Wait for title containing: {text}"):
            self._wait(timeout).until(EC.title_contains(text))

    def wait_for_url_contains(self, fragment: str, timeout: Optional[float] = None) -> None:
        """
        Wait for the current URL to contain a fragment.

        Raises:
            TimeoutException: When the URL never matches
        """
        with allure.step(f"Wait for URL containing: {fragment}"):
            self._wait(timeout).until(EC.url_contains(fragment))

    def wait_for_url_not_contains(self, fragment: str, timeout: Optional[float] = None) -> None:
        """
        Wait for the current URL to stop containing a fragment.

        Raises:
            TimeoutException: When the URL still contains it after the timeout
        """
        with allure.step(f"Wait for URL leaving: {fragment}"):
            self._wait(timeout).until(EC.none_of(EC.url_contains(fragment)))

    def wait_for_element(
        self,
        locator: Locator,
        state: str = "visible",
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Wait for element to reach specified state.

        Args:
            locator: (By, value) locator
            state: Target state - 'present', 'visible', 'clickable', 'hidden'
            timeout: Timeout in seconds

        Returns:
            The WebElement (or True for 'hidden')
        """
        if state not in ELEMENT_STATES:
            raise ValueError(f"Unknown element state: {state}")
        return self._wait(timeout).until(ELEMENT_STATES[state](locator))

    def wait_for_page_ready(self, timeout: Optional[float] = None) -> None:
        """Wait for document.readyState to become 'complete'."""
        self._wait(timeout).until(
            lambda d: d.execute_script("return document.readyState") == "complete"
        )

    def _wait(self, timeout: Optional[float]) -> WebDriverWait:
        if timeout is None:
            return self.wait
        return WebDriverWait(self.driver, timeout, poll_frequency=self.poll_frequency)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot(self, name: str, attach_to_allure: bool = True) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        png = self.driver.get_screenshot_as_png()
        filepath.write_bytes(png)

        if attach_to_allure:
            attach_screenshot(png, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def capture_failure(self, test_name: str) -> None:
        """Attach screenshot, current URL and page source to the report."""
        with allure.step("Capture failure details"):
            attach_browser_state(self.driver, name_prefix=f"failure_{test_name}")


__all__ = [
    "BasePage",
]
