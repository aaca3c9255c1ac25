"""
================================================================================
UI Automation Tools
================================================================================

Shared infrastructure for the Selenium UI test harness.

Modules:
    - common: Configuration loading and Loguru logging setup
    - report_tools: Allure attachments, result summaries and report generation

Example:
    from uiauto_tools.common import get_config, init_logger
    from uiauto_tools.report_tools.allure_utils import attach_text

    init_logger()
    browser = get_config("ui.browser", "chrome")
    attach_text(browser, name="Browser")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
