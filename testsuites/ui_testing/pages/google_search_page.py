"""
Google search page object.
"""

from __future__ import annotations

import allure
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.smart_locator import SmartLocator


class GoogleSearchPage(BasePage):
    """Google home page with its search box."""

    SITE = "google"
    URL_PATH = "/"
    PAGE_TITLE = "Google"

    @property
    def search_box(self) -> SmartLocator:
        return self.smart_locator(
            primary=(By.NAME, "q"),
            fallbacks=[(By.CSS_SELECTOR, "textarea[name='q'], input[name='q']")],
            name="Search Box",
        )

    def open(self) -> "GoogleSearchPage":
        self.navigate()
        return self

    def is_search_box_visible(self) -> bool:
        return self.is_visible(self.search_box, timeout=self.timeout)

    @allure.step("Search for '{query}'")
    def search_for(self, query: str) -> "GoogleSearchPage":
        """Type the query and submit it with RETURN, then wait for the results title."""
        self.fill(self.search_box, query)
        self.search_box.locate(condition="visible").send_keys(Keys.RETURN)
        self.wait_for_title_contains(query)
        return self


__all__ = [
    "GoogleSearchPage",
]
