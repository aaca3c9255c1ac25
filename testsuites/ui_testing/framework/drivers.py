"""
================================================================================
WebDriver Builders
================================================================================

Construction of concrete Selenium WebDriver instances per browser kind.

Driver binary resolution order:
    1. Explicit path from config (ui.driver_paths.<browser>)
    2. Binary found on PATH (chromedriver / geckodriver / msedgedriver)
    3. webdriver-manager download (requires internet)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import shutil
from typing import Callable, Dict, List, Optional, Union

from loguru import logger
from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from uiauto_tools.common import get_config


BrowserOptions = Union[ChromeOptions, FirefoxOptions, EdgeOptions]

CHROME = "chrome"
FIREFOX = "firefox"
EDGE = "edge"

SUPPORTED_BROWSERS = (CHROME, FIREFOX, EDGE)


def build_options(
    browser: str,
    headless: bool = False,
    extra_args: Optional[List[str]] = None,
) -> BrowserOptions:
    """
    Build browser options for the given browser kind.

    Args:
        browser: One of SUPPORTED_BROWSERS
        headless: Run without a visible window
        extra_args: Additional command-line switches for the browser

    Returns:
        Selenium options object for the browser
    """
    if browser == FIREFOX:
        options = FirefoxOptions()
        if headless:
            options.add_argument("-headless")
    elif browser == EDGE:
        options = EdgeOptions()
        if headless:
            options.add_argument("--headless=new")
    else:
        options = ChromeOptions()
        if headless:
            options.add_argument("--headless=new")
            options.add_argument("--no-sandbox")
            options.add_argument("--disable-dev-shm-usage")

    if headless and browser != FIREFOX:
        # Headless windows cannot be maximized; give them a desktop-sized viewport
        options.add_argument("--window-size=1920,1080")

    for arg in extra_args or []:
        options.add_argument(arg)

    return options


def _driver_path(browser: str, binary_name: str) -> Optional[str]:
    configured = get_config(f"ui.driver_paths.{browser}")
    return configured or shutil.which(binary_name)


def init_chrome_driver(options: ChromeOptions) -> WebDriver:
    local_driver = _driver_path(CHROME, "chromedriver")
    if local_driver:
        logger.info(f"Using local chromedriver at: {local_driver}")
        service = ChromeService(executable_path=local_driver)
    else:
        logger.info("Local chromedriver not found. Falling back to webdriver_manager (requires internet).")
        service = ChromeService(ChromeDriverManager().install())
    return webdriver.Chrome(service=service, options=options)


def init_firefox_driver(options: FirefoxOptions) -> WebDriver:
    local_driver = _driver_path(FIREFOX, "geckodriver")
    if local_driver:
        logger.info(f"Using local geckodriver at: {local_driver}")
        service = FirefoxService(executable_path=local_driver)
    else:
        logger.info("Local geckodriver not found. Falling back to webdriver_manager (requires internet).")
        service = FirefoxService(GeckoDriverManager().install())
    return webdriver.Firefox(service=service, options=options)


def init_edge_driver(options: EdgeOptions) -> WebDriver:
    local_driver = _driver_path(EDGE, "msedgedriver")
    if local_driver:
        logger.info(f"Using local msedgedriver at: {local_driver}")
        service = EdgeService(executable_path=local_driver)
    else:
        logger.info("Local msedgedriver not found. Falling back to webdriver_manager (requires internet).")
        service = EdgeService(EdgeChromiumDriverManager().install())
    return webdriver.Edge(service=service, options=options)


# Browser kind -> driver builder
BROWSER_BUILDERS: Dict[str, Callable[[BrowserOptions], WebDriver]] = {
    CHROME: init_chrome_driver,
    FIREFOX: init_firefox_driver,
    EDGE: init_edge_driver,
}


__all__ = [
    "BROWSER_BUILDERS",
    "SUPPORTED_BROWSERS",
    "CHROME",
    "FIREFOX",
    "EDGE",
    "build_options",
    "init_chrome_driver",
    "init_firefox_driver",
    "init_edge_driver",
]
