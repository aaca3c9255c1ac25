"""
================================================================================
Driver Factory
================================================================================

Per-thread WebDriver lifecycle management for UI automation.

Every execution thread owns at most one live WebDriver. The driver is created
lazily on first request in a test's setup phase, reused for the rest of that
test, and quit in the test's teardown phase.

Features:
    - Thread-keyed driver registry (never shares a driver across threads)
    - Chrome (default), Firefox and Edge support
    - Window maximization on creation
    - Session-end cleanup of drivers left behind by aborted threads

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from loguru import logger
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from uiauto_tools.common import get_config

from . import drivers


class DriverFactory:
    """
    Registry mapping execution threads to their WebDriver.

    Usage:
        driver = DriverFactory.get_driver("firefox")
        driver.get("https://example.com")
        ...
        DriverFactory.quit_driver()

    Repeated calls to ``get_driver`` on the same thread return the same
    driver until ``quit_driver`` is called; the browser argument of those
    later calls is ignored.
    """

    DEFAULT_BROWSER = drivers.CHROME

    _drivers: Dict[threading.Thread, WebDriver] = {}
    _lock = threading.Lock()

    @classmethod
    def resolve_browser(cls, browser: Optional[str] = None) -> str:
        """
        Normalize a requested browser kind.

        ``None`` selects the configured default (ui.browser). Unknown kinds
        fall back to the default browser.

        Args:
            browser: Requested browser kind, any case

        Returns:
            One of drivers.SUPPORTED_BROWSERS
        """
        requested = browser or get_config("ui.browser", cls.DEFAULT_BROWSER)
        kind = str(requested).strip().lower()
        if kind not in drivers.SUPPORTED_BROWSERS:
            logger.warning(
                f"Unsupported browser '{requested}', "
                f"falling back to {cls.DEFAULT_BROWSER}"
            )
            kind = cls.DEFAULT_BROWSER
        return kind

    @classmethod
    def get_driver(cls, browser: Optional[str] = None) -> WebDriver:
        """
        Return the WebDriver of the calling thread, creating it if needed.

        Args:
            browser: Browser kind for a newly created driver
                ("chrome", "firefox", "edge"; defaults to ui.browser)

        Returns:
            The calling thread's WebDriver

        Raises:
            WebDriverException: When the browser cannot be started. The
                error propagates as-is; nothing is retried or recorded.
        """
        thread = threading.current_thread()
        with cls._lock:
            driver = cls._drivers.get(thread)
        if driver is not None:
            return driver

        driver = cls._create_driver(cls.resolve_browser(browser))
        with cls._lock:
            cls._drivers[thread] = driver
        return driver

    @classmethod
    def quit_driver(cls) -> None:
        """
        Quit the calling thread's WebDriver and forget it.

        No-op when the thread holds no driver. The registry entry is removed
        even if the browser session is already gone.
        """
        thread = threading.current_thread()
        with cls._lock:
            driver = cls._drivers.pop(thread, None)
        if driver is None:
            return

        cls._quit(driver, thread)

    @classmethod
    def has_driver(cls) -> bool:
        """Whether the calling thread currently holds a driver."""
        with cls._lock:
            return threading.current_thread() in cls._drivers

    @classmethod
    def active_count(cls) -> int:
        """Number of live drivers across all threads."""
        with cls._lock:
            return len(cls._drivers)

    @classmethod
    def quit_all(cls) -> None:
        """
        Quit every registered driver.

        Meant for session teardown: drivers whose owning thread never
        reached its own teardown would otherwise leak browser processes.
        """
        with cls._lock:
            leftovers = list(cls._drivers.items())
            cls._drivers.clear()

        if leftovers:
            logger.warning(f"Quitting {len(leftovers)} leftover driver(s)")
        for thread, driver in leftovers:
            cls._quit(driver, thread)

    @classmethod
    def _create_driver(cls, browser: str) -> WebDriver:
        headless = get_config("ui.headless", False)
        options = drivers.build_options(
            browser,
            headless=headless,
            extra_args=get_config("ui.browser_args", []),
        )
        builder = drivers.BROWSER_BUILDERS[browser]

        logger.info(
            f"Starting {browser} driver (headless={headless}) "
            f"for thread {threading.get_ident()}"
        )
        driver = builder(options)

        try:
            driver.set_page_load_timeout(get_config("ui.page_load_timeout", 60))
            if get_config("ui.maximize", True):
                driver.maximize_window()
        except WebDriverException:
            driver.quit()
            raise

        logger.debug(f"Driver ready: {type(driver).__name__}")
        return driver

    @staticmethod
    def _quit(driver: WebDriver, thread: threading.Thread) -> None:
        try:
            driver.quit()
        except WebDriverException as e:
            logger.warning(f"Driver of thread {thread.ident} did not quit cleanly: {e}")
        else:
            logger.debug(f"Driver quit for thread {thread.ident}")


__all__ = [
    "DriverFactory",
]
