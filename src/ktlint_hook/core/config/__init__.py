"""
Configuration models and loading.

Pydantic model for ktlint-hook settings with multi-layer merging:
defaults < user < project < env vars.
"""

from .env import load_layered_env
from .loader import (
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import HookConfig

__all__ = [
    "HookConfig",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
