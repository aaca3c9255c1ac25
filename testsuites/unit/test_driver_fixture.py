"""
The per-test ``driver`` fixture and failure capture, run in an inner pytest
session against fake browser builders.
"""

import pytest

from testsuites.ui_testing.framework.driver_factory import DriverFactory
from uiauto_tools.report_tools import allure_utils


INNER_CONFTEST = """
import pytest

pytest_plugins = ["testsuites.ui_testing.tests.conftest"]


@pytest.fixture
def browser():
    return "chrome"
"""


@pytest.fixture
def attachments(monkeypatch):
    names = []
    monkeypatch.setattr(
        allure_utils.allure, "attach",
        lambda body, name=None, attachment_type=None: names.append(name),
    )
    return names


def test_failed_test_still_releases_its_driver(pytester, fake_builders, attachments):
    pytester.makeconftest(INNER_CONFTEST)
    pytester.makepyfile(
        """
        from testsuites.ui_testing.framework.driver_factory import DriverFactory


        def test_login_fails(driver):
            driver.get("https://example.com/login")
            assert False, "forced failure"


        def test_next_test_starts_without_driver():
            assert not DriverFactory.has_driver()
        """
    )

    result = pytester.runpytest()

    result.assert_outcomes(failed=1, passed=1)
    assert len(fake_builders) == 1
    kind, _, driver = fake_builders[0]
    assert kind == "chrome"
    assert driver.quit_calls == 1
    assert DriverFactory.active_count() == 0
    assert attachments == [
        "failure_test_login_fails_screenshot",
        "failure_test_login_fails_url",
        "failure_test_login_fails_page_source",
    ]


def test_passing_test_attaches_nothing(pytester, fake_builders, attachments):
    pytester.makeconftest(INNER_CONFTEST)
    pytester.makepyfile(
        """
        def test_open_page(driver):
            driver.get("https://example.com/")
            assert driver.current_url == "https://example.com/"
        """
    )

    result = pytester.runpytest()

    result.assert_outcomes(passed=1)
    assert fake_builders[0][2].quit_calls == 1
    assert DriverFactory.active_count() == 0
    assert attachments == []
