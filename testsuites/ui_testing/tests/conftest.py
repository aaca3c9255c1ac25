"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for driver
management, page objects, and test setup/teardown.

Key Features:
- Per-test WebDriver from the thread-keyed DriverFactory
- Lifecycle phase logging (suite / module / class / method)
- Page Object fixtures
- Screenshot, URL and page source capture on failure

================================================================================
"""

import os
from typing import Generator

import allure
import pytest
from loguru import logger
from selenium.webdriver.remote.webdriver import WebDriver

from testsuites.ui_testing.framework.driver_factory import DriverFactory
from testsuites.ui_testing.framework.lifecycle import log_phase
from testsuites.ui_testing.pages.google_search_page import GoogleSearchPage
from testsuites.ui_testing.pages.hovers_page import HoversPage
from testsuites.ui_testing.pages.orangehrm_login_page import OrangeHRMLoginPage
from uiauto_tools.report_tools.allure_utils import attach_browser_state


# ================================================================================
# Lifecycle Fixtures
# ================================================================================

@pytest.fixture(scope="session", autouse=True)
def suite_lifecycle() -> Generator[None, None, None]:
    log_phase("before_suite")
    yield
    log_phase("after_suite")


@pytest.fixture(scope="module", autouse=True)
def module_lifecycle(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    log_phase(f"before_module - {request.module.__name__}")
    yield
    log_phase(f"after_module - {request.module.__name__}")


@pytest.fixture(scope="class", autouse=True)
def class_lifecycle(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    name = request.cls.__name__ if request.cls else None
    if name:
        log_phase(f"before_class - {name}")
    yield
    if name:
        log_phase(f"after_class - {name}")


# ================================================================================
# Driver Fixture
# ================================================================================

@pytest.fixture(scope="function")
def driver(browser: str) -> Generator[WebDriver, None, None]:
    """
    Function-scoped WebDriver for the current thread.

    ``browser`` is parametrized from --browser by the root conftest. The
    driver is quit in teardown whatever the test outcome.
    """
    log_phase(f"before_method - Browser: {browser}")
    try:
        web_driver = DriverFactory.get_driver(browser)
    except Exception as e:
        logger.error(f"Failed to initialize {browser} driver: {e}")
        raise

    yield web_driver

    log_phase("after_method")
    DriverFactory.quit_driver()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(driver: WebDriver) -> OrangeHRMLoginPage:
    """OrangeHRM login page, already opened and loaded."""
    page = OrangeHRMLoginPage(driver)
    page.navigate_to_login_page().wait_for_page_load()
    return page


@pytest.fixture
def google_page(driver: WebDriver) -> GoogleSearchPage:
    return GoogleSearchPage(driver)


@pytest.fixture
def hovers_page(driver: WebDriver) -> HoversPage:
    return HoversPage(driver)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture browser state when a UI test fails.

    Attaches a screenshot, the current URL and the page source of the
    test's driver to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        web_driver = getattr(item, "funcargs", {}).get("driver")
        if web_driver is not None:
            with allure.step("Capture failure details"):
                attach_browser_state(web_driver, name_prefix=f"failure_{item.name}")


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "valid_user": {
            "username": os.environ.get("ORANGEHRM_USERNAME", "Admin"),
            "password": os.environ.get("ORANGEHRM_PASSWORD", "admin123"),
        },
        "invalid_user": {
            "username": "InvalidUser",
            "password": "InvalidPass",
        },
        "search_terms": ["Selenium WebDriver", "Page Object Model"],
    }
