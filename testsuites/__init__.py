"""
Test suites package.

Keeps `testsuites` importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - page objects and framework imports from test modules
"""
