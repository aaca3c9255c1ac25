"""
================================================================================
UI Testing Framework
================================================================================

Selenium-based UI automation framework built on the Page Object Model.

Components:
    - driver_factory: Per-thread WebDriver lifecycle management
    - drivers: Browser options and concrete driver construction
    - smart_locator: Element location with fallback strategies
    - page_base: Base page object for common operations
    - element_actions: Retrying element interactions, mouse and keyboard
    - listeners: pytest plugin logging test and suite events
    - lifecycle: Thread-aware lifecycle phase logging

Author: Automation Team
License: MIT
================================================================================
"""

from .driver_factory import DriverFactory
from .smart_locator import SmartLocator, ElementNotFoundError
from .page_base import BasePage
from .element_actions import ElementActions, RetryConfig
from .listeners import TestListener
from .lifecycle import log_phase

__all__ = [
    "DriverFactory",
    "SmartLocator",
    "ElementNotFoundError",
    "BasePage",
    "ElementActions",
    "RetryConfig",
    "TestListener",
    "log_phase",
]
