"""
================================================================================
Test Suite Pytest Configuration
================================================================================

Registers the project-wide markers, tags tests by directory and keeps
live-browser tests out of default runs.

================================================================================
"""

import pytest

from uiauto_tools.common import get_config


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for release"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "negative: Invalid input and error path tests"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Live-browser tests (need --run-ui or ui.enabled)"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests using fake drivers"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "login: Tests related to the OrangeHRM login page"
    )
    config.addinivalue_line(
        "markers", "search: Tests related to Google search"
    )
    config.addinivalue_line(
        "markers", "actions: Mouse and keyboard interaction tests"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-mark tests by directory and skip live-browser tests unless enabled.
    """
    run_ui = get_config("ui.enabled", False)
    skip_ui = pytest.mark.skip(reason="live-browser test: pass --run-ui or set UI__ENABLED=true")

    for item in items:
        parts = item.path.parts

        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)
            if not run_ui:
                item.add_marker(skip_ui)

        if "unit" in parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Selenium Page Object UI Automation Harness",
        f"browser={config.getoption('browser') or get_config('ui.browser', 'chrome')} "
        f"headless={get_config('ui.headless', False)} "
        f"ui_enabled={get_config('ui.enabled', False)}",
        "=" * 60,
        "",
    ]
