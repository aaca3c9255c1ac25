"""
================================================================================
UI Automation Tools Common Utilities
================================================================================

Shared configuration management and logging setup for the harness.

Exports:
    - get_config / set_config: Dot-path configuration access
    - init_logger: Initialize loguru logger with standard settings

Usage:
    from uiauto_tools.common import get_config, init_logger

    init_logger()
    timeout = get_config("ui.explicit_wait", 10)

================================================================================
"""

from .global_config import (
    ConfigurationError,
    get_all,
    get_config,
    init_logger,
    reload_config,
    reset_config,
    set_config,
)


__all__ = [
    "ConfigurationError",
    "get_all",
    "get_config",
    "init_logger",
    "reload_config",
    "reset_config",
    "set_config",
]
