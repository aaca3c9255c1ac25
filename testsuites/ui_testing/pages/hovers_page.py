"""
================================================================================
Hovers Practice Page Object
================================================================================

Page object for https://practice.expandtesting.com/hovers

Each user avatar ("figure") reveals a caption when the mouse hovers over
it. Mouse and keyboard gestures go through ElementActions.

================================================================================
"""

from __future__ import annotations

import allure
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.smart_locator import Locator


class HoversPage(BasePage):
    """Avatars with hover-revealed captions."""

    SITE = "expandtesting"
    URL_PATH = "/hovers"
    PAGE_TITLE = "Hovers"

    def __init__(self, driver: WebDriver, base_url: str = "", timeout=None):
        super().__init__(driver, base_url=base_url, timeout=timeout)
        self.actions = ElementActions(driver, default_timeout=self.timeout)

    @staticmethod
    def figure_image(index: int = 1) -> Locator:
        """Avatar image of the n-th figure (1-based)."""
        return (By.XPATH, f"//*[@id='core']/div/div/div[{index}]/img")

    @staticmethod
    def figure_caption(index: int = 1) -> Locator:
        return (By.XPATH, f"//*[@id='core']/div/div/div[{index}]/div[contains(@class,'figcaption')]")

    def open(self) -> "HoversPage":
        self.navigate()
        return self

    @allure.step("Hover over figure {index}")
    def hover_over_figure(self, index: int = 1) -> WebElement:
        return self.actions.hover_element(self.figure_image(index))

    def is_caption_visible(self, index: int = 1, timeout: float = 2) -> bool:
        return self.actions.is_visible(self.figure_caption(index), timeout=timeout)

    def get_caption_text(self, index: int = 1) -> str:
        try:
            return self.actions.get_text(self.figure_caption(index))
        except TimeoutException:
            return ""

    @allure.step("Select all (CTRL+A)")
    def select_all(self) -> None:
        self.actions.send_key_chord(Keys.CONTROL, "a")


__all__ = [
    "HoversPage",
]
