"""
================================================================================
Allure Report Utilities
================================================================================

Helpers for enriching Allure reports with browser artifacts, and for
post-processing the raw Allure results of a run.

Features:
- Attachment helpers (text, HTML, screenshots)
- Browser state capture for failed UI tests
- Result summary with a per-browser breakdown
- HTML report generation via the Allure CLI, keeping trend history

================================================================================
"""

import json
import shutil
import subprocess
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from selenium.common.exceptions import WebDriverException


STATUSES = ("passed", "failed", "broken", "skipped")


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """Attach plain text to the current Allure test or step."""
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_html(html: str, name: str = "HTML"):
    """Attach an HTML document (e.g. page source) to the report."""
    allure.attach(html, name=name, attachment_type=allure.attachment_type.HTML)


def attach_screenshot(png: bytes, name: str = "Screenshot"):
    """
    Attach PNG screenshot bytes to Allure report.

    Args:
        png: Screenshot bytes (e.g. from driver.get_screenshot_as_png())
        name: Attachment name
    """
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)


def attach_browser_state(driver: Any, name_prefix: str = "failure") -> None:
    """
    Attach screenshot, current URL and page source of a live WebDriver.

    Each artifact is captured independently; a dead browser session only
    costs the artifacts it cannot produce.

    Args:
        driver: Selenium WebDriver instance
        name_prefix: Prefix for attachment names
    """
    try:
        attach_screenshot(driver.get_screenshot_as_png(), name=f"{name_prefix}_screenshot")
    except WebDriverException as e:
        logger.warning(f"Failed to capture screenshot: {e}")

    try:
        attach_text(driver.current_url, name=f"{name_prefix}_url")
    except WebDriverException as e:
        logger.warning(f"Failed to read current URL: {e}")

    try:
        attach_html(driver.page_source, name=f"{name_prefix}_page_source")
    except WebDriverException as e:
        logger.warning(f"Failed to capture page source: {e}")


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Outcome counts of one run, overall and per browser."""
    __test__ = False

    counts: Counter = field(default_factory=Counter)
    by_browser: Dict[str, Counter] = field(default_factory=lambda: defaultdict(Counter))
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def passed(self) -> int:
        return self.counts["passed"]

    @property
    def failed(self) -> int:
        return self.counts["failed"]

    @property
    def broken(self) -> int:
        return self.counts["broken"]

    @property
    def skipped(self) -> int:
        return self.counts["skipped"]

    @property
    def pass_rate(self) -> float:
        """Passed share of executed tests, in percent. Skipped and unknown results are left out."""
        executed = self.passed + self.failed + self.broken
        if executed == 0:
            return 0.0
        return (self.passed / executed) * 100

    def record(self, status: str, browser: Optional[str], duration_ms: int) -> None:
        status = status if status in STATUSES else "unknown"
        self.counts[status] += 1
        if browser:
            self.by_browser[browser][status] += 1
        self.duration_ms += max(duration_ms, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            **{status: self.counts[status] for status in STATUSES},
            "unknown": self.counts["unknown"],
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "by_browser": {b: dict(c) for b, c in sorted(self.by_browser.items())},
            "timestamp": self.timestamp,
        }


def result_browser(result: Dict[str, Any]) -> Optional[str]:
    """Browser a result ran on, from its ``browser`` parameter."""
    for parameter in result.get("parameters", []):
        if parameter.get("name") == "browser":
            return str(parameter.get("value", "")).strip("'\"") or None
    return None


class AllureReportProcessor:
    """
    Summarizes raw Allure results and renders the HTML report.

    Trend history is carried from one generated report into the next run's
    results so the Allure trend graphs keep working.
    """

    def __init__(
        self,
        results_dir: Path,
        report_dir: Optional[Path] = None,
        history_dir: Optional[Path] = None
    ):
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir or self.results_dir.parent / "allure-report")
        self.history_dir = Path(history_dir or self.results_dir.parent / "allure-history")

    def parse_results(self) -> List[Dict[str, Any]]:
        """Load every ``*-result.json``; unreadable files are skipped with a warning."""
        results = []
        for result_file in sorted(self.results_dir.glob("*-result.json")):
            try:
                results.append(json.loads(result_file.read_text(encoding="utf-8")))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to parse {result_file}: {e}")
        return results

    def generate_summary(self) -> TestResultSummary:
        summary = TestResultSummary()
        for result in self.parse_results():
            summary.record(
                result.get("status", "unknown"),
                result_browser(result),
                result.get("stop", 0) - result.get("start", 0),
            )
        return summary

    def generate_report(self) -> bool:
        """
        Generate the Allure HTML report.

        Returns:
            True if the Allure CLI produced the report
        """
        history = self.report_dir / "history"
        if history.exists():
            shutil.copytree(history, self.results_dir / "history", dirs_exist_ok=True)

        cmd = ["allure", "generate", str(self.results_dir), "-o", str(self.report_dir), "--clean"]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
            return False

        if result.returncode != 0:
            logger.error(f"Report generation failed: {result.stderr}")
            return False

        logger.info(f"Report generated at {self.report_dir}")
        return True

    def save_history(self) -> None:
        """Snapshot the report's history folder under history_dir/<timestamp>."""
        history = self.report_dir / "history"
        if not history.exists():
            return
        snapshot = self.history_dir / datetime.now().strftime("%Y%m%d_%H%M%S")
        shutil.copytree(history, snapshot)
        logger.info(f"History saved to {snapshot}")

    def log_summary(self) -> TestResultSummary:
        summary = self.generate_summary()

        logger.info("=" * 60)
        logger.info("TEST EXECUTION SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Total Tests:    {summary.total}")
        logger.info(f"Passed:         {summary.passed} ✅")
        logger.info(f"Failed:         {summary.failed} ❌")
        logger.info(f"Broken:         {summary.broken} ⚠️")
        logger.info(f"Skipped:        {summary.skipped} ⏭️")
        logger.info(f"Pass Rate:      {summary.pass_rate:.2f}%")
        logger.info(f"Duration:       {summary.duration_ms / 1000:.2f}s")
        for browser, counts in sorted(summary.by_browser.items()):
            logger.info(
                f"  {browser:<8} passed={counts['passed']} "
                f"failed={counts['failed'] + counts['broken']} skipped={counts['skipped']}"
            )
        logger.info("=" * 60)
        return summary


# ================================================================================
# Convenience Functions
# ================================================================================

def generate_allure_report(
    results_dir: str,
    output_dir: Optional[str] = None,
    open_report: bool = False
) -> bool:
    """
    Generate Allure report from results and log the run summary.

    Args:
        results_dir: Path to allure-results directory
        output_dir: Optional output directory
        open_report: Whether to open report in browser

    Returns:
        True if successful
    """
    processor = AllureReportProcessor(
        Path(results_dir),
        Path(output_dir) if output_dir else None
    )

    success = processor.generate_report()
    processor.log_summary()

    if success:
        processor.save_history()
        if open_report:
            subprocess.run(["allure", "open", str(processor.report_dir)])

    return success
