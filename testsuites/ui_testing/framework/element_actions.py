# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module provides UI element interaction utilities with built-in retry
# logic, explicit waits, and Allure integration on top of Selenium.
#
# Key Features:
#   - Retry with exponential backoff for flaky interactions
#   - Explicit waits before every interaction
#   - Allure step integration
#   - Mouse actions (hover, double click) and keyboard chords
#   - Scroll helpers
#
# ================================================================================

import time
from functools import wraps
from typing import Callable, Optional, Tuple, Type, Union

import allure
from loguru import logger
from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    StaleElementReferenceException,
    TimeoutException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import Select, WebDriverWait

from .smart_locator import Locator


Target = Union[Locator, WebElement]

# Transient interaction failures; a timed-out wait is not retried.
TRANSIENT_ERRORS = (
    StaleElementReferenceException,
    ElementClickInterceptedException,
    ElementNotInteractableException,
)


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        delay_seconds: float = 1.0,
        backoff_multiplier: float = 2.0,
        max_delay_seconds: float = 10.0,
        retry_on: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts
            delay_seconds: Initial delay between retries
            backoff_multiplier: Multiplier for exponential backoff
            max_delay_seconds: Maximum delay between retries
            retry_on: Exception types that trigger a retry
        """
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_seconds = max_delay_seconds
        self.retry_on = retry_on


def with_retry(config: RetryConfig = None):
    """
    Decorator for adding retry logic to element actions.

    When the decorated method belongs to an object with a ``retry_config``
    attribute, that configuration wins over the decorator default.

    Args:
        config: RetryConfig object for controlling retry behavior
    """
    default_config = config or RetryConfig()

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cfg = getattr(args[0], "retry_config", None) if args else None
            cfg = cfg or default_config
            delay = cfg.delay_seconds

            for attempt in range(1, cfg.max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except cfg.retry_on as e:
                    if attempt == cfg.max_attempts:
                        logger.error(
                            f"All {cfg.max_attempts} attempts failed for {func.__name__}: {e}"
                        )
                        raise
                    logger.warning(
                        f"Attempt {attempt}/{cfg.max_attempts} failed for "
                        f"{func.__name__}: {e}. Retrying in {delay}s..."
                    )
                    time.sleep(delay)
                    delay = min(delay * cfg.backoff_multiplier, cfg.max_delay_seconds)

        return wrapper
    return decorator


class ElementActions:
    """
    A utility class providing enhanced element interaction methods.

    Wraps Selenium element operations with automatic retries, explicit waits
    and detailed logging.

    Example:
        actions = ElementActions(driver)
        actions.click_element((By.ID, "submit"), description="Submit button")
        actions.fill_input((By.NAME, "username"), "Admin", description="Username field")
        actions.hover_element((By.CSS_SELECTOR, ".figure img"), description="First avatar")
    """

    def __init__(
        self,
        driver: WebDriver,
        default_timeout: float = 10,
        retry_config: Optional[RetryConfig] = None,
    ):
        """
        Initialize ElementActions with a WebDriver.

        Args:
            driver: Selenium WebDriver
            default_timeout: Default wait timeout in seconds
            retry_config: Retry behavior for interactions
        """
        self.driver = driver
        self.default_timeout = default_timeout
        self.retry_config = retry_config or RetryConfig()

    @with_retry()
    @allure.step("Click element: {description}")
    def click_element(
        self,
        target: Target,
        description: str = "",
        timeout: float = None,
        double_click: bool = False
    ) -> None:
        """
        Click on an element with retry logic.

        Args:
            target: (By, value) locator or WebElement
            description: Human-readable description for reporting
            timeout: Wait timeout in seconds
            double_click: Perform double-click instead of single click
        """
        logger.info(f"Clicking element: {description or target}")

        element = self._wait_for(target, "clickable", timeout)
        if double_click:
            ActionChains(self.driver).double_click(element).perform()
        else:
            element.click()

        logger.debug(f"Successfully clicked: {description or target}")

    @with_retry()
    @allure.step("Fill input: {description}")
    def fill_input(
        self,
        target: Target,
        value: str,
        description: str = "",
        clear_first: bool = True,
        timeout: float = None
    ) -> None:
        """
        Fill an input field with text.

        Args:
            target: (By, value) locator or WebElement
            value: Text to enter
            description: Human-readable description for reporting
            clear_first: Clear existing content before typing
            timeout: Wait timeout in seconds
        """
        logger.info(f"Filling input: {description or target} with '{value[:50]}'")

        element = self._wait_for(target, "clickable", timeout)
        if clear_first:
            element.clear()
        element.send_keys(value)

        logger.debug(f"Successfully filled: {description or target}")

    @with_retry()
    @allure.step("Select option: {description}")
    def select_option(
        self,
        target: Target,
        value: Union[str, int],
        description: str = "",
        by: str = "value",
        timeout: float = None
    ) -> None:
        """
        Select an option from a <select> dropdown.

        Args:
            target: (By, value) locator or WebElement of the <select>
            value: Option value, visible text or index
            description: Human-readable description for reporting
            by: Selection method - "value", "label", or "index"
            timeout: Wait timeout in seconds
        """
        if by not in ("value", "label", "index"):
            raise ValueError(f"Unknown selection method: {by}")

        logger.info(f"Selecting option: {value} in {description or target}")

        select = Select(self._wait_for(target, "visible", timeout))
        if by == "value":
            select.select_by_value(str(value))
        elif by == "label":
            select.select_by_visible_text(str(value))
        else:
            select.select_by_index(int(value))

    @with_retry()
    @allure.step("Check checkbox: {description}")
    def check_checkbox(
        self,
        target: Target,
        description: str = "",
        check: bool = True,
        timeout: float = None
    ) -> None:
        """
        Check or uncheck a checkbox.

        Args:
            target: (By, value) locator or WebElement
            description: Human-readable description for reporting
            check: True to check, False to uncheck
            timeout: Wait timeout in seconds
        """
        element = self._wait_for(target, "clickable", timeout)
        action = "Checking" if check else "Unchecking"
        logger.info(f"{action} checkbox: {description or target}")

        if element.is_selected() != check:
            element.click()

    @with_retry()
    @allure.step("Hover element: {description}")
    def hover_element(
        self,
        target: Target,
        description: str = "",
        timeout: float = None
    ) -> WebElement:
        """
        Move the mouse over an element.

        Args:
            target: (By, value) locator or WebElement
            description: Human-readable description for reporting
            timeout: Wait timeout in seconds

        Returns:
            The hovered element
        """
        element = self._wait_for(target, "visible", timeout)
        logger.info(f"Hovering over: {description or target}")
        ActionChains(self.driver).move_to_element(element).perform()
        return element

    @allure.step("Get text: {description}")
    def get_text(
        self,
        target: Target,
        description: str = "",
        timeout: float = None
    ) -> str:
        """
        Get visible text of an element.

        Returns:
            Text content of the element
        """
        text = self._wait_for(target, "visible", timeout).text
        logger.debug(f"Got text from {description or target}: '{text}'")
        return text

    @allure.step("Get attribute: {attribute} from {description}")
    def get_attribute(
        self,
        target: Target,
        attribute: str,
        description: str = "",
        timeout: float = None
    ) -> Optional[str]:
        """
        Get attribute value of an element.

        Returns:
            Attribute value or None if not set
        """
        value = self._wait_for(target, "present", timeout).get_attribute(attribute)
        logger.debug(f"Got attribute {attribute} from {description or target}: '{value}'")
        return value

    @allure.step("Wait for element: {description}")
    def wait_for_element(
        self,
        target: Target,
        description: str = "",
        state: str = "visible",
        timeout: float = None
    ) -> WebElement:
        """
        Wait for an element to reach a state.

        Args:
            target: (By, value) locator or WebElement
            description: Human-readable description for reporting
            state: Expected state - "present", "visible" or "clickable"
            timeout: Wait timeout in seconds

        Returns:
            The WebElement
        """
        logger.info(f"Waiting for {description or target} to be {state}")
        return self._wait_for(target, state, timeout)

    def is_visible(
        self,
        target: Target,
        description: str = "",
        timeout: float = 5
    ) -> bool:
        """
        Check if an element becomes visible within the timeout.

        Returns:
            True if visible, False otherwise
        """
        try:
            self._wait_for(target, "visible", timeout)
            return True
        except TimeoutException:
            logger.debug(f"Element not visible: {description or target}")
            return False

    @allure.step("Press key: {key}")
    def press_key(
        self,
        key: str,
        target: Optional[Target] = None,
        description: str = ""
    ) -> None:
        """
        Press a keyboard key, optionally on a specific element.

        Args:
            key: Key to press (e.g. Keys.ENTER, Keys.TAB)
            target: Optional element to send the key to
            description: Human-readable description for reporting
        """
        if target is not None:
            self._wait_for(target, "present", None).send_keys(key)
        else:
            ActionChains(self.driver).send_keys(key).perform()

        logger.debug(f"Pressed key: {key!r} {description}")

    @allure.step("Key chord: {modifier} + {key}")
    def send_key_chord(self, modifier: str, key: str) -> None:
        """
        Press a modifier + key combination on the focused page (e.g. CTRL+A).

        Args:
            modifier: Modifier key (Keys.CONTROL, Keys.SHIFT, Keys.COMMAND)
            key: Key pressed while the modifier is held
        """
        (
            ActionChains(self.driver)
            .key_down(modifier)
            .send_keys(key)
            .key_up(modifier)
            .perform()
        )

    @allure.step("Take screenshot: {name}")
    def take_screenshot(self, name: str) -> bytes:
        """
        Take a screenshot of the viewport and attach it to the report.

        Returns:
            Screenshot as PNG bytes
        """
        screenshot = self.driver.get_screenshot_as_png()
        allure.attach(
            screenshot,
            name=name,
            attachment_type=allure.attachment_type.PNG
        )
        return screenshot

    def _wait_for(self, target: Target, state: str, timeout: Optional[float]) -> WebElement:
        timeout = self.default_timeout if timeout is None else timeout
        wait = WebDriverWait(self.driver, timeout)
        if isinstance(target, WebElement):
            if state == "present":
                return target
            if state == "clickable":
                return wait.until(EC.element_to_be_clickable(target))
            return wait.until(EC.visibility_of(target))

        if state == "present":
            return wait.until(EC.presence_of_element_located(target))
        if state == "clickable":
            return wait.until(EC.element_to_be_clickable(target))
        if state == "visible":
            return wait.until(EC.visibility_of_element_located(target))
        raise ValueError(f"Unknown element state: {state}")


class ScrollActions:
    """Utility class for scroll-related operations."""

    def __init__(self, driver: WebDriver):
        self.driver = driver

    @allure.step("Scroll to element: {description}")
    def scroll_to_element(
        self,
        target: Target,
        description: str = "",
        behavior: str = "smooth"
    ) -> None:
        """
        Scroll element into view.

        Args:
            target: (By, value) locator or WebElement
            description: Human-readable description
            behavior: Scroll behavior - "smooth" or "instant"
        """
        element = target if isinstance(target, WebElement) else self.driver.find_element(*target)
        self.driver.execute_script(
            "arguments[0].scrollIntoView({behavior: arguments[1], block: 'center'});",
            element,
            behavior,
        )

    @allure.step("Scroll to position: ({x}, {y})")
    def scroll_to_position(self, x: int = 0, y: int = 0) -> None:
        self.driver.execute_script("window.scrollTo(arguments[0], arguments[1]);", x, y)

    @allure.step("Scroll by offset: ({dx}, {dy})")
    def scroll_by(self, dx: int = 0, dy: int = 0) -> None:
        self.driver.execute_script("window.scrollBy(arguments[0], arguments[1]);", dx, dy)

    @allure.step("Scroll to top")
    def scroll_to_top(self) -> None:
        self.driver.execute_script("window.scrollTo(0, 0);")

    @allure.step("Scroll to bottom")
    def scroll_to_bottom(self) -> None:
        self.driver.execute_script("window.scrollTo(0, document.body.scrollHeight);")
