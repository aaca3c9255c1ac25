"""
================================================================================
Smart Locator with Fallback Element Detection
================================================================================

Element location system with:
    - Multiple fallback locator strategies per element
    - Automatic degradation when the primary locator fails
    - Usage analytics pointing at locators that need maintenance

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait


# (By.*, value), e.g. (By.NAME, "username")
Locator = Tuple[str, str]

# Element condition name -> expected_conditions factory
CONDITIONS: Dict[str, Callable[[Locator], Callable]] = {
    "present": EC.presence_of_element_located,
    "visible": EC.visibility_of_element_located,
    "clickable": EC.element_to_be_clickable,
}


class ElementNotFoundError(Exception):
    """Raised when all locator strategies fail to find element."""
    pass


@dataclass
class LocatorHealth:
    """
    Tracks locator health and usage statistics.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred locator
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback locator used (if any)
    """
    element_name: str
    primary_selector: Locator
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[Locator] = None


class SmartLocator:
    """
    Smart element locator with fallback strategies.

    Locators for one element are tried in insertion order
    (``primary``, ``fallback_1``, ...). The first one that satisfies the
    requested condition within the timeout wins.

    Usage:
        >>> smart = SmartLocator(driver, locators={
        ...     "username_input": {
        ...         "primary": (By.NAME, "username"),
        ...         "fallback_1": (By.XPATH, "//input[@name='username']"),
        ...     },
        ... })
        >>> smart.fill("username_input", "Admin")

        Or in element mode, resolving a single element:
        >>> element = SmartLocator(driver, element_name="Login Button",
        ...                        locators={"primary": (By.XPATH, "//button[@type='submit']")})
        >>> element.locate(condition="clickable").click()
    """

    def __init__(
        self,
        driver: WebDriver,
        element_name: Optional[str] = None,
        locators: Optional[Dict] = None,
        timeout: float = 10,
        poll_frequency: float = 0.5,
    ):
        """
        Initialize SmartLocator with a WebDriver.

        Two usage styles are supported:
        1) **Library mode**: ``locators`` maps element names to locator maps,
           then ``smart.click("login_button")``.
        2) **Element mode**: ``element_name`` is given and ``locators`` is a
           single locator map, then ``element.locate()``.

        Args:
            driver: Selenium WebDriver
            element_name: Human-readable element name (element mode)
            locators: Element registry (library mode) or locator map (element mode)
            timeout: Default timeout in seconds for each strategy
            poll_frequency: Polling interval in seconds for explicit waits
        """
        self.driver = driver
        self.timeout = timeout
        self.poll_frequency = poll_frequency
        self._element_name = element_name
        if element_name is not None:
            self._element_locators: Dict[str, Locator] = dict(locators or {})
            self._registry: Dict[str, Dict[str, Locator]] = {}
        else:
            self._element_locators = {}
            self._registry = {name: dict(m) for name, m in (locators or {}).items()}
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    @property
    def name(self) -> str:
        """Human-readable element name (element mode)."""
        return self._element_name or "custom_element"

    def _resolve(self, target) -> Tuple[Dict[str, Locator], str]:
        if isinstance(target, dict):
            return target, self._element_name or "custom_element"
        if isinstance(target, str):
            return self._registry.get(target, {}), target
        return self._element_locators, self._element_name or "custom_element"

    def locate(
        self,
        target=None,
        condition: str = "visible",
        timeout: Optional[float] = None,
    ) -> WebElement:
        """
        Locate element using smart fallback strategy.

        Tries each locator strategy in order until one succeeds.
        Records usage statistics for maintenance insights.

        Args:
            target: Either an element name registered with this locator,
                a locator map (dict) with primary/fallback locators, or None
                to use the instance's own locator map (element mode).
            condition: "present", "visible" or "clickable"
            timeout: Timeout in seconds for each attempt

        Returns:
            The located WebElement

        Raises:
            ElementNotFoundError: When all strategies fail
        """
        locators, display_name = self._resolve(target)
        if not locators:
            raise ElementNotFoundError(
                f"No locators defined for element: {display_name}"
            )
        if condition not in CONDITIONS:
            raise ValueError(f"Unknown element condition: {condition}")

        timeout = self.timeout if timeout is None else timeout
        errors = []

        for strategy_name, locator in locators.items():
            try:
                element = WebDriverWait(
                    self.driver, timeout, poll_frequency=self.poll_frequency
                ).until(CONDITIONS[condition](locator))
            except TimeoutException:
                errors.append(f"{strategy_name}: {locator} -> not {condition} after {timeout}s")
                continue

            health = LocatorHealth(
                element_name=display_name,
                primary_selector=locators.get("primary", locator),
                used_fallback=(strategy_name != "primary"),
                fallback_name=strategy_name if strategy_name != "primary" else None,
                fallback_selector=locator if strategy_name != "primary" else None,
            )
            self._health_records.append(health)

            if strategy_name != "primary":
                logger.warning(
                    f"⚠️ Element '{display_name}' used fallback: "
                    f"{strategy_name} -> {locator}"
                )
                self._fallback_used[display_name] = health
            else:
                logger.debug(f"✅ Element '{display_name}' found: {locator}")

            return element

        error_msg = (
            f"❌ All locators failed for '{display_name}':\n" +
            "\n".join(f"  - {err}" for err in errors)
        )
        logger.error(error_msg)
        raise ElementNotFoundError(error_msg)

    def click(self, target=None, timeout: Optional[float] = None) -> None:
        """Wait until the element is clickable, then click it."""
        self.locate(target, condition="clickable", timeout=timeout).click()

    def fill(
        self,
        target,
        value: str,
        timeout: Optional[float] = None,
        clear_first: bool = True,
    ) -> None:
        """
        Type into an input element using smart location.

        Args:
            target: Element name or locator map
            value: Text to type
            timeout: Timeout for element location
            clear_first: Clear existing content before typing
        """
        element = self.locate(target, condition="clickable", timeout=timeout)
        if clear_first:
            element.clear()
        element.send_keys(value)

    def get_text(self, target=None, timeout: Optional[float] = None) -> str:
        """Visible text of the element."""
        return self.locate(target, condition="visible", timeout=timeout).text or ""

    def get_attribute(
        self,
        target,
        attribute: str,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        """Attribute (or property) value of a present element."""
        return self.locate(target, condition="present", timeout=timeout).get_attribute(attribute)

    def is_visible(self, target=None, timeout: Optional[float] = 2) -> bool:
        """
        Check if element is visible.

        Returns:
            True if element is visible, False otherwise
        """
        try:
            self.locate(target, condition="visible", timeout=timeout)
            return True
        except ElementNotFoundError:
            return False

    @property
    def fallbacks_used(self) -> Dict[str, LocatorHealth]:
        """Element name -> last fallback resolution, for elements that needed one."""
        return dict(self._fallback_used)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists elements that needed a fallback locator (maintenance candidates).

        Returns:
            Formatted health report string
        """
        return format_health_report(self._fallback_used)

    def register_locator(self, element_name: str, locators: Dict[str, Locator]) -> None:
        """
        Register new locator at runtime.

        Args:
            element_name: Unique name for the element
            locators: Dictionary of strategy -> (By, value)
        """
        self._registry[element_name] = dict(locators)
        logger.debug(f"Registered new locator: {element_name}")


def format_health_report(fallbacks_used: Dict[str, LocatorHealth]) -> str:
    """Render the fallback usage of one or more locators as a report."""
    if not fallbacks_used:
        return "✅ All elements used primary locators. No maintenance needed."

    report_lines = [
        "⚠️ Locator Health Report - Fallbacks Used:",
        "",
        "The following elements used fallback locators.",
        "Consider updating the primary selectors:",
        "",
    ]

    for element_name, health in fallbacks_used.items():
        report_lines.extend([
            f"  [{element_name}]",
            f"    Failed primary: {health.primary_selector}",
            f"    Used: {health.fallback_name} -> {health.fallback_selector}",
            "",
        ])

    return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "format_health_report",
    "ElementNotFoundError",
    "LocatorHealth",
    "Locator",
]
