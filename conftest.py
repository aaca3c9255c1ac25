"""
Repository-level pytest configuration.

Responsibilities:
  - Command-line options for the UI harness (--browser, --headless, --run-ui)
  - Logger initialization and the TestListener plugin
  - Parametrizing driver tests over the requested browser kinds
  - Session-end cleanup of any driver left behind by an aborted thread

Command-line options win over config/config.yaml and environment overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator, List

import pytest

from testsuites.ui_testing.framework.driver_factory import DriverFactory
from testsuites.ui_testing.framework.listeners import TestListener
from uiauto_tools.common import get_config, init_logger, set_config


pytest_plugins = ["pytester"]

LISTENER_PLUGIN_NAME = "uiauto-test-listener"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("uiauto", "UI automation harness")
    group.addoption(
        "--browser",
        action="store",
        default=None,
        help="Browser kind(s) for UI tests: chrome, firefox, edge. "
             "A comma separated list runs each driver test once per browser.",
    )
    group.addoption(
        "--headless",
        action="store_true",
        default=None,
        help="Run browsers headless (overrides ui.headless)",
    )
    group.addoption(
        "--headed",
        action="store_false",
        dest="headless",
        default=None,
        help="Run browsers with a visible window (overrides ui.headless)",
    )
    group.addoption(
        "--run-ui",
        action="store_true",
        default=False,
        help="Run live-browser UI tests (skipped by default unless ui.enabled)",
    )


def pytest_configure(config: pytest.Config) -> None:
    init_logger()

    headless = config.getoption("headless")
    if headless is not None:
        set_config("ui.headless", headless)
    if config.getoption("run_ui"):
        set_config("ui.enabled", True)

    # Register once; xdist workers each configure their own session
    if not config.pluginmanager.has_plugin(LISTENER_PLUGIN_NAME):
        config.pluginmanager.register(TestListener(), LISTENER_PLUGIN_NAME)


def requested_browsers(config: pytest.Config) -> List[str]:
    """Browser kinds from --browser, or the configured default."""
    raw = config.getoption("browser") or get_config("ui.browser", "chrome")
    browsers = [b.strip() for b in str(raw).split(",") if b.strip()]
    return browsers or ["chrome"]


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Run every test that requests ``browser`` once per requested browser kind."""
    if "browser" in metafunc.fixturenames:
        metafunc.parametrize("browser", requested_browsers(metafunc.config), scope="function")


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _harness_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.

    Credentials are the public OrangeHRM demo account.
    """
    defaults = {
        "ORANGEHRM_USERNAME": "Admin",
        "ORANGEHRM_PASSWORD": "admin123",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield


@pytest.fixture(scope="session", autouse=True)
def _quit_leftover_drivers() -> Generator[None, None, None]:
    yield
    DriverFactory.quit_all()
