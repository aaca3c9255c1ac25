"""
Driver smoke test: the per-test driver exists and can open a page.
"""

import allure
import pytest
from loguru import logger

from testsuites.ui_testing.framework.driver_factory import DriverFactory


@allure.epic("UI Testing")
@allure.feature("Driver")
@allure.title("Driver is initialized and opens Google")
@pytest.mark.smoke
def test_simple(driver, browser):
    assert driver is not None, "Driver should be initialized in setup"
    assert DriverFactory.get_driver() is driver, "Same thread must get the same driver"
    logger.info(f"Driver initialized successfully: {type(driver).__name__} ({browser})")

    driver.get("https://www.google.com")

    logger.info(f"Page title: {driver.title}")
    assert driver.title
