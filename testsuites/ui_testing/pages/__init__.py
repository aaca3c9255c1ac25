"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators (primary + fallback)
    - Page-specific actions
    - Verification methods

================================================================================
"""

from .orangehrm_login_page import OrangeHRMLoginPage
from .google_search_page import GoogleSearchPage
from .hovers_page import HoversPage

__all__ = [
    "OrangeHRMLoginPage",
    "GoogleSearchPage",
    "HoversPage",
]
