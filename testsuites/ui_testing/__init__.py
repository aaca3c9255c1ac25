"""Selenium Page Object Model UI testing: framework, page objects and tests."""
