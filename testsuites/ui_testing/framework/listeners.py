"""
================================================================================
Test Listener
================================================================================

pytest plugin reporting test and suite events through loguru:

    🚀 suite started (name, total tests)
    🔥 test started (name, class, method)
    ✅ test passed (duration)
    ❌ test failed (exception, duration)
    ⏭️ test skipped
    🏁 suite finished (passed / failed / skipped)

Registered once per session from the root conftest.

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from loguru import logger


class TestListener:
    """Logs test lifecycle events and keeps pass/fail/skip counts."""

    __test__ = False

    def __init__(self) -> None:
        self.suite_name = ""
        self.total = 0
        self.passed: List[str] = []
        self.failed: List[str] = []
        self.skipped: List[str] = []

    # -------------------------------------------------------------------------
    # Suite events
    # -------------------------------------------------------------------------

    def pytest_collection_finish(self, session: pytest.Session) -> None:
        self.suite_name = session.name
        self.total = len(session.items)
        logger.info(f"🚀 [LISTENER] Test suite started: {self.suite_name}")
        logger.info(f"🚀 [LISTENER] Total tests: {self.total}")

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        logger.info(f"🏁 [LISTENER] Test suite finished: {self.suite_name or session.name}")
        logger.info(f"🏁 [LISTENER] Passed: {len(self.passed)}")
        logger.info(f"🏁 [LISTENER] Failed: {len(self.failed)}")
        logger.info(f"🏁 [LISTENER] Skipped: {len(self.skipped)}")

    # -------------------------------------------------------------------------
    # Test events
    # -------------------------------------------------------------------------

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_setup(self, item: pytest.Item) -> None:
        cls = getattr(item, "cls", None)
        logger.info(f"🔥 [LISTENER] Test started: {item.name}")
        logger.info(f"🔥 [LISTENER] Test class: {cls.__name__ if cls else item.module.__name__}")
        logger.info(f"🔥 [LISTENER] Test method: {getattr(item, 'originalname', item.name)}")

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        duration_ms = int(report.duration * 1000)

        if report.skipped:
            self.skipped.append(report.nodeid)
            logger.info(f"⏭️ [LISTENER] Test skipped: {report.nodeid}")
        elif report.failed and report.when in ("setup", "call"):
            self.failed.append(report.nodeid)
            logger.error(f"❌ [LISTENER] Test failed: {report.nodeid}")
            logger.error(f"❌ [LISTENER] Exception: {self._failure_message(report)}")
            logger.error(f"❌ [LISTENER] Duration: {duration_ms}ms")
        elif report.passed and report.when == "call":
            self.passed.append(report.nodeid)
            logger.info(f"✅ [LISTENER] Test passed: {report.nodeid}")
            logger.info(f"✅ [LISTENER] Duration: {duration_ms}ms")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def summary(self) -> Dict[str, Any]:
        return {
            "suite": self.suite_name,
            "total": self.total,
            "passed": len(self.passed),
            "failed": len(self.failed),
            "skipped": len(self.skipped),
        }

    @staticmethod
    def _failure_message(report: pytest.TestReport) -> str:
        text = getattr(report, "longreprtext", "") or str(report.longrepr or "")
        lines = [line for line in text.splitlines() if line.strip()]
        return lines[-1].strip() if lines else "<no details>"


__all__ = [
    "TestListener",
]
