"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import HookConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".ktlint-hook.json"

# Environment variable -> config key
ENV_OVERRIDES = {
    "KTLINT_HOOK_FORMAT_TASK": "format_task",
    "KTLINT_HOOK_CHECK_TASK": "check_task",
    "KTLINT_HOOK_NAME": "hook_name",
    "KTLINT_HOOK_WRAPPER": "wrapper",
}


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/ktlint-hook/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "ktlint-hook" / "config.json"


def get_project_config_path(root_dir: Path | None = None) -> Path:
    """Path to .ktlint-hook.json in the build root (defaults to cwd)."""
    if root_dir is None:
        root_dir = Path.cwd()
    return root_dir / PROJECT_CONFIG_NAME


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to parse config at {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config at {path}: expected a JSON object")
        return None
    return data


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        KTLINT_HOOK_FORMAT_TASK - overrides format_task
        KTLINT_HOOK_CHECK_TASK - overrides check_task
        KTLINT_HOOK_NAME - overrides hook_name
        KTLINT_HOOK_WRAPPER - overrides wrapper
        KTLINT_HOOK_EXTENSIONS - overrides extensions (comma separated)

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    for env_name, key in ENV_OVERRIDES.items():
        if value := os.environ.get(env_name):
            result[key] = value

    if extensions := os.environ.get("KTLINT_HOOK_EXTENSIONS"):
        result["extensions"] = [ext.strip() for ext in extensions.split(",")]

    return result


def load_config(root_dir: Path | None = None) -> HookConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (KTLINT_HOOK_*)
        2. Project config (.ktlint-hook.json in the build root)
        3. User config (~/.config/ktlint-hook/config.json)
        4. HookConfig defaults

    Args:
        root_dir: Build root to load .ktlint-hook.json from (defaults to cwd)

    Returns:
        Validated HookConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation

    Example:
        >>> load_config().format_task
        'ktlintFormat'
    """
    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged.update(user_config)

    if project_config := load_json_file(get_project_config_path(root_dir)):
        merged.update(project_config)

    merged = apply_env_overrides(merged)
    return HookConfig(**merged)
