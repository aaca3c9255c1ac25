#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# Unified entry point for running the harness test suites.
#
# Features:
#   - Run live-browser UI tests on one or more browsers
#   - Run browser-free framework unit tests
#   - Marker (tag) filtering and parallel workers (pytest-xdist)
#   - Allure report generation and result summary
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite ui --browser chrome firefox --headless
#   python run_tests.py --suite ui --tags smoke login --parallel 4
#
# ================================================================================

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List

from loguru import logger

from uiauto_tools.report_tools.allure_utils import generate_allure_report


SUITE_PATHS = {
    "ui": "testsuites/ui_testing/tests",
    "unit": "testsuites/unit",
    "all": "testsuites/",
}

BROWSERS = ["chrome", "firefox", "edge"]


def setup_logging() -> None:
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        level="INFO"
    )


class TestRunner:
    """
    Main test runner class for orchestrating test execution.

    This class handles:
    - Test suite selection and execution
    - Parallel execution configuration
    - Report generation
    """

    __test__ = False

    def __init__(
        self,
        suite: str = "all",
        tags: List[str] = None,
        parallel: int = 1,
        browsers: List[str] = None,
        headless: bool = False,
        allure_report: bool = True,
        verbose: bool = False
    ):
        """
        Initialize test runner.

        Args:
            suite: Test suite to run - "ui", "unit", "all"
            tags: List of pytest markers to filter tests
            parallel: Number of parallel workers
            browsers: Browsers for UI tests - "chrome", "firefox", "edge"
            headless: Run browsers in headless mode
            allure_report: Generate Allure report
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.parallel = parallel
        self.browsers = browsers or ["chrome"]
        self.headless = headless
        self.allure_report = allure_report
        self.verbose = verbose

        # Paths
        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    @property
    def runs_ui(self) -> bool:
        return self.suite in ("ui", "all")

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        if self.runs_ui:
            logger.info(f"Browsers: {', '.join(self.browsers)}")
            logger.info(f"Headless: {self.headless}")
        logger.info("=" * 60)

        self._prepare_environment()

        cmd = self.build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            exit_code = subprocess.run(cmd, cwd=str(self.root_dir)).returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report:
            logger.info("Generating Allure report...")
            generate_allure_report(str(self.allure_results), str(self.allure_report_dir))

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        self.allure_results.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest", SUITE_PATHS[self.suite]]

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        cmd.append("-v" if self.verbose else "-q")

        if self.runs_ui:
            cmd.append("--run-ui")
            cmd.append(f"--browser={','.join(self.browsers)}")
            cmd.append("--headless" if self.headless else "--headed")

        return cmd

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")

        logger.info("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Selenium Page Object Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Framework unit tests only (no browser needed)
  python run_tests.py --suite unit --no-allure

  # Smoke UI tests on Chrome and Firefox, headless, 4 workers
  python run_tests.py --suite ui --tags smoke --browser chrome firefox --headless -n 4

  # Everything with verbose output
  python run_tests.py --suite all --verbose
        """
    )

    parser.add_argument(
        "--suite",
        choices=sorted(SUITE_PATHS),
        default="all",
        help="Test suite to run (default: all)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., smoke login regression)"
    )

    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)"
    )

    parser.add_argument(
        "--browser",
        nargs="+",
        choices=BROWSERS,
        default=["chrome"],
        help="Browser(s) for UI tests (default: chrome)"
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run browsers without a visible window"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main(argv: List[str] = None) -> int:
    """Main entry point."""
    setup_logging()
    args = build_parser().parse_args(argv)

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        browsers=args.browser,
        headless=args.headless,
        allure_report=not args.no_allure,
        verbose=args.verbose
    )

    return runner.run()


if __name__ == "__main__":
    sys.exit(main())
