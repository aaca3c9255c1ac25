"""
Fixtures for framework unit tests. No browser is started.
"""

from __future__ import annotations

import copy

import pytest

from testsuites.ui_testing.framework import drivers
from testsuites.ui_testing.framework.driver_factory import DriverFactory
from testsuites.unit.fakes import FakeDriver
from uiauto_tools.common import global_config, set_config


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def isolated_config(monkeypatch):
    """Work on a private copy of the configuration; restored afterwards."""
    monkeypatch.setattr(global_config, "_config", copy.deepcopy(global_config.get_all()))
    monkeypatch.setattr(global_config, "_config_dir", global_config._config_dir)


@pytest.fixture
def fast_waits(isolated_config):
    """Keep explicit waits short so negative paths fail fast."""
    set_config("ui.explicit_wait", 0.2)
    set_config("ui.poll_frequency", 0.01)


@pytest.fixture
def fake_builders(monkeypatch, isolated_config):
    """
    Replace the real browser builders with FakeDriver factories.

    Yields the list of (browser, options, driver) tuples in creation order.
    """
    created = []

    def make_builder(kind):
        def builder(options):
            driver = FakeDriver()
            created.append((kind, options, driver))
            return driver
        return builder

    for kind in drivers.SUPPORTED_BROWSERS:
        monkeypatch.setitem(drivers.BROWSER_BUILDERS, kind, make_builder(kind))

    DriverFactory.quit_all()
    yield created
    DriverFactory.quit_all()
