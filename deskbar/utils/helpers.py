"""
Helper utilities for the deskbar menu.

Provides:
- App launching (fire-and-forget, detached from the menu)
- Settings loading with defaults
"""

import subprocess
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

SETTINGS_RELPATH = Path(".config") / "deskbar" / "settings.toml"

DEFAULT_SETTINGS = {
    "menu": {
        "category_limit": 8,
        "policy": "single",
    },
    "search": {
        "max_results": 20,
    },
}

VALID_POLICIES = ("single", "multi")


def sanitize_exec(exec_str: str) -> str:
    """
    Remove desktop-entry field codes from an Exec line.

    Splits on whitespace, drops every token starting with "%" (%f, %U,
    %i, ...) and joins the rest with single spaces. Quoted arguments are
    not reassembled.

    Example:
        sanitize_exec("firefox %U --new-window") -> "firefox --new-window"
    """
    return " ".join(
        token for token in exec_str.split() if not token.startswith("%")
    )


def _spawn(command: str) -> None:
    """Start command through the shell; errors are logged, never raised."""
    try:
        subprocess.Popen(
            command,
            shell=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
        logger.debug(f"Launched: {command}")
    except Exception:
        logger.exception(f"Failed to launch: {command}")


def launch_app(exec_str: str) -> None:
    """
    Launch an application from its Exec line without blocking.

    The sanitized command runs as `sh -c <command>` in its own session,
    started from a worker thread. Nothing is returned and failures are
    not reported to the caller.

    Args:
        exec_str: Raw Exec value from the desktop entry

    Example:
        from deskbar.utils.helpers import launch_app
        launch_app(app.exec)
    """
    command = sanitize_exec(exec_str)
    if not command:
        logger.debug(f"Nothing to launch for exec {exec_str!r}")
        return

    threading.Thread(
        target=_spawn,
        args=(command,),
        name="deskbar-launch",
        daemon=True,
    ).start()


def default_settings_path() -> Optional[Path]:
    """
    Get ~/.config/deskbar/settings.toml.

    Returns:
        The settings path, or None if the home directory cannot be resolved
    """
    try:
        return Path.home() / SETTINGS_RELPATH
    except (RuntimeError, KeyError):
        # RuntimeError on 3.12+, KeyError from pwd on older versions
        return None


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load menu settings from TOML file.

    Args:
        path: Settings file, defaults to ~/.config/deskbar/settings.toml

    Returns:
        Dictionary containing settings with defaults applied

    Example settings structure:
        {
            "menu": {
                "category_limit": 8,
                "policy": "single"
            },
            "search": {
                "max_results": 20
            }
        }
    """
    settings_path = Path(path) if path is not None else default_settings_path()
    if settings_path is None:
        logger.info("Home directory not resolvable, using default settings")
        return _deep_merge(DEFAULT_SETTINGS, {})

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (OSError, ValueError):
        # toml.TomlDecodeError and UnicodeDecodeError are ValueErrors
        logger.warning(f"Could not load settings from {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    return _validate(_deep_merge(DEFAULT_SETTINGS, loaded))


def _validate(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Replace out-of-range values with their defaults."""
    for section, defaults in DEFAULT_SETTINGS.items():
        if not isinstance(settings.get(section), dict):
            logger.warning(f"Invalid [{section}] section, using defaults")
            settings[section] = dict(defaults)

    for section, key in (("menu", "category_limit"), ("search", "max_results")):
        value = settings[section][key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            default = DEFAULT_SETTINGS[section][key]
            logger.warning(f"Invalid {section}.{key} = {value!r}, using {default}")
            settings[section][key] = default

    policy = settings["menu"]["policy"]
    if policy not in VALID_POLICIES:
        default = DEFAULT_SETTINGS["menu"]["policy"]
        logger.warning(f"Unknown menu.policy = {policy!r}, using '{default}'")
        settings["menu"]["policy"] = default

    return settings


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    # Nested defaults must not be shared with the caller's dicts
    for key, value in result.items():
        if isinstance(value, dict) and key not in override:
            result[key] = _deep_merge(value, {})

    return result
