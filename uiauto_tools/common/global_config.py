"""
================================================================================
Global Configuration for the UI Harness
================================================================================

Centralized configuration management for the harness, including logging
setup and configuration file loading.

Features:
    - YAML-based configuration loading (config/config.yaml + config/{ENV}.yaml)
    - Environment variable overrides
    - Type coercion of environment values based on the requested default
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Global configuration storage
_config: Dict[str, Any] = {}
_config_dir: Optional[Path] = None
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{thread.id}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Short environment variable names mapped onto config keys
ENV_MAPPING: Dict[str, str] = {
    "BROWSER": "ui.browser",
    "HEADLESS": "ui.headless",
    "UI_BASE_URL": "ui.base_url",
    "UI_ENABLED": "ui.enabled",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}


class ConfigurationError(Exception):
    """Raised when configuration loading fails."""
    pass


def init_logger(level: str = None, format_str: str = None, log_file: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Should be called once at the start of a test session (the root conftest
    does this) so all harness modules log the same way.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
        log_file: Optional file sink. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = level or get_config("logging.level", "INFO")
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=str(log_level).upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    log_file = log_file or get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=str(log_level).upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            compression="zip",
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    if not _config:
        _load_config()


def _find_config_dir() -> Optional[Path]:
    env_dir = os.getenv("UIAUTO_CONFIG_DIR")
    possible_config_dirs = [
        Path(env_dir) if env_dir else None,
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ]
    for dir_path in possible_config_dirs:
        if dir_path is not None and dir_path.is_dir():
            return dir_path
    return None


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e


def _load_config(config_dir: Optional[Path] = None) -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. Default configuration file (config/config.yaml)
        3. Environment-specific configuration (config/{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config, _config_dir

    _config = _get_defaults()
    _config_dir = config_dir or _config_dir or _find_config_dir()

    if _config_dir is None:
        logger.warning("No configuration directory found. Using defaults.")
    else:
        default_config_path = _config_dir / "config.yaml"
        if default_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(default_config_path))
            logger.debug(f"Loaded configuration from {default_config_path}")

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config_path = _config_dir / f"{env}.yaml"
        if env_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(env_config_path))
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _get_defaults() -> Dict[str, Any]:
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
        "ui": {
            "enabled": False,
            "browser": "chrome",
            "headless": False,
            "maximize": True,
            "explicit_wait": 10,
            "poll_frequency": 0.5,
            "page_load_timeout": 60,
            "browser_args": [],
            "driver_paths": {},
        },
        "sites": {
            "orangehrm": "https://opensource-demo.orangehrmlive.com",
            "google": "https://www.google.com",
            "expandtesting": "https://practice.expandtesting.com",
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merges two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Environment variable naming convention:
        - Short names from ENV_MAPPING (BROWSER, HEADLESS, LOG_LEVEL, ...)
        - Double underscore separates nested keys: UI__EXPLICIT_WAIT=20
          overrides ui.explicit_wait
    """
    for env_key, config_key in ENV_MAPPING.items():
        if env_key in os.environ:
            _set_nested(_config, config_key.split("."), os.environ[env_key])

    for key, value in os.environ.items():
        if "__" in key and not key.startswith("_"):
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        if not isinstance(d.get(key), dict):
            d[key] = {}
        d = d[key]
    d[keys[-1]] = value


def _convert_type(value: str, reference: Any) -> Any:
    """
    Convert a string value (from the environment) to match the reference type.
    """
    if isinstance(reference, bool):
        return value.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError:
            return value
    if isinstance(reference, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    String values are coerced to the type of ``default`` when one is given,
    so ``HEADLESS=true`` yields ``True`` for ``get_config("ui.headless", False)``.

    Args:
        key: Dot-separated key path (e.g., "ui.browser", "logging.level").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("ui.browser", "chrome")
        'firefox'
        >>> get_config("ui.explicit_wait", 10)
        20
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    if isinstance(value, str) and default is not None and not isinstance(default, str):
        return _convert_type(value, default)
    return value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def get_all() -> Dict[str, Any]:
    """Returns a copy of the whole configuration."""
    _ensure_config_loaded()
    return _deep_merge({}, _config)


def reload_config(config_dir: Optional[Path] = None) -> None:
    """
    Reloads the configuration from files and the environment.

    Args:
        config_dir: Optional directory to load config.yaml from instead of
            the discovered one.
    """
    global _config, _config_dir
    _config = {}
    if config_dir is not None:
        _config_dir = Path(config_dir)
    _load_config()
    logger.info("Configuration reloaded.")


def reset_config() -> None:
    """Forget loaded configuration and the discovered config directory."""
    global _config, _config_dir
    _config = {}
    _config_dir = None
