"""
================================================================================
OrangeHRM Login Page Object
================================================================================

Page object for the OrangeHRM demo login page:
    https://opensource-demo.orangehrmlive.com/web/index.php/auth/login

Every input element declares a primary locator plus an alternative XPath;
SmartLocator falls back to the alternative when the primary fails.

Verification helpers (is_*, get_error_message, ...) never raise when an
element fails to appear: they answer False / "" so tests can assert on them.

================================================================================
"""

from __future__ import annotations

from typing import Optional, Tuple

import allure
from loguru import logger
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.smart_locator import ElementNotFoundError, SmartLocator


class OrangeHRMLoginPage(BasePage):
    """OrangeHRM login page object."""

    SITE = "orangehrm"
    URL_PATH = "/web/index.php/auth/login"
    PAGE_TITLE = "OrangeHRM"

    USERNAME_FIELD = (By.NAME, "username")
    PASSWORD_FIELD = (By.NAME, "password")

    # =========================================================================
    # Page Elements
    # =========================================================================

    @property
    def username_input(self) -> SmartLocator:
        return self.smart_locator(
            primary=self.USERNAME_FIELD,
            fallbacks=[(By.XPATH, "//input[@name='username']")],
            name="Username Input",
        )

    @property
    def password_input(self) -> SmartLocator:
        return self.smart_locator(
            primary=self.PASSWORD_FIELD,
            fallbacks=[(By.XPATH, "//input[@name='password']")],
            name="Password Input",
        )

    @property
    def login_button(self) -> SmartLocator:
        return self.smart_locator(
            primary=(By.XPATH, "//button[@type='submit']"),
            fallbacks=[(By.XPATH, "//button[@type='submit'] | //button[contains(@class,'oxd-button')]")],
            name="Login Button",
        )

    @property
    def company_logo(self) -> SmartLocator:
        return self.smart_locator((By.XPATH, "//img[@alt='company-branding']"), name="Company Logo")

    @property
    def login_title(self) -> SmartLocator:
        return self.smart_locator(
            (By.XPATH, "//h5[@class='oxd-text oxd-text--h5 orangehrm-login-title']"),
            name="Login Title",
        )

    @property
    def error_message(self) -> SmartLocator:
        return self.smart_locator(
            (By.XPATH, "//p[@class='oxd-text oxd-text--p oxd-alert-content-text']"),
            name="Error Message",
        )

    @property
    def forgot_password_link(self) -> SmartLocator:
        return self.smart_locator(
            (By.XPATH, "//p[@class='oxd-text oxd-text--p orangehrm-login-forgot-header']"),
            name="Forgot Password Link",
        )

    @property
    def username_label(self) -> SmartLocator:
        return self.smart_locator((By.XPATH, "//label[@for='username']"), name="Username Label")

    @property
    def password_label(self) -> SmartLocator:
        return self.smart_locator((By.XPATH, "//label[@for='password']"), name="Password Label")

    # =========================================================================
    # Navigation
    # =========================================================================

    @allure.step("Open OrangeHRM login page")
    def navigate_to_login_page(self) -> "OrangeHRMLoginPage":
        self.navigate()
        return self

    def get_page_title(self) -> str:
        return self.title

    def get_current_url(self) -> str:
        return self.current_url

    @allure.step("Wait for login form")
    def wait_for_page_load(self) -> "OrangeHRMLoginPage":
        """Wait until the username field is present in the DOM."""
        self.wait_for_element(self.USERNAME_FIELD, state="present")
        return self

    @allure.step("Refresh login page")
    def refresh_page(self) -> "OrangeHRMLoginPage":
        self.refresh()
        return self

    # =========================================================================
    # Element Verification
    # =========================================================================

    @allure.step("Verify login form is displayed")
    def is_login_page_loaded(self) -> bool:
        """Username, password and login button are all visible."""
        try:
            for element in (self.username_input, self.password_input, self.login_button):
                element.locate(condition="visible")
        except ElementNotFoundError:
            logger.warning("Login form did not become visible")
            return False
        return True

    def is_company_logo_displayed(self) -> bool:
        return self.is_visible(self.company_logo)

    def get_login_title(self) -> str:
        try:
            return self.get_text(self.login_title)
        except ElementNotFoundError:
            return ""

    # =========================================================================
    # Input
    # =========================================================================

    def enter_username(self, username: str) -> "OrangeHRMLoginPage":
        self.fill(self.username_input, username)
        return self

    def enter_password(self, password: str) -> "OrangeHRMLoginPage":
        self.fill(self.password_input, password)
        return self

    def clear_username(self) -> "OrangeHRMLoginPage":
        self.username_input.locate(condition="present").clear()
        return self

    def clear_password(self) -> "OrangeHRMLoginPage":
        self.password_input.locate(condition="present").clear()
        return self

    def get_username_value(self) -> str:
        return self.get_attribute(self.username_input, "value") or ""

    def get_password_value(self) -> str:
        return self.get_attribute(self.password_input, "value") or ""

    # =========================================================================
    # Actions
    # =========================================================================

    def click_login_button(self) -> "OrangeHRMLoginPage":
        self.click(self.login_button)
        return self

    def click_forgot_password_link(self) -> "OrangeHRMLoginPage":
        self.click(self.forgot_password_link)
        return self

    @allure.step("Login (username={username})")
    def login(self, username: str, password: str) -> "OrangeHRMLoginPage":
        """
        Enter credentials and submit the form.

        Returns self so calls can be chained:
            page.navigate_to_login_page().login("Admin", "admin123")
        """
        return (
            self.enter_username(username)
            .enter_password(password)
            .click_login_button()
        )

    # =========================================================================
    # Validation
    # =========================================================================

    def is_error_message_displayed(self) -> bool:
        return self.is_visible(self.error_message, timeout=self.timeout)

    def get_error_message(self) -> str:
        try:
            return self.get_text(self.error_message)
        except ElementNotFoundError:
            return ""

    def is_username_field_empty(self) -> bool:
        return self.get_username_value() == ""

    def is_password_field_empty(self) -> bool:
        return self.get_password_value() == ""

    def is_login_button_enabled(self) -> bool:
        return self.is_enabled(self.login_button)

    def get_field_labels(self) -> Tuple[str, str]:
        """Return (username label, password label) texts."""
        return self.get_text(self.username_label), self.get_text(self.password_label)

    def has_left_login_page(self, timeout: Optional[float] = None) -> bool:
        """Whether the browser navigated away from the login route."""
        try:
            self.wait_for_url_not_contains("auth/login", timeout=timeout)
        except TimeoutException:
            return False
        return True
