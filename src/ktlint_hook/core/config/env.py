"""Environment loading helpers.

Settings can come from .env files as well as the shell:
- OS environment (highest precedence)
- Project environment file (.env in the current directory)
- User environment file (~/.config/ktlint-hook/.env)

A .env file never overrides a variable already present in the process
environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

from .loader import get_xdg_config_home


def _read_env(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    values = dotenv_values(path)
    out: dict[str, str] = {}
    for k, v in values.items():
        if k is None or v is None:
            continue
        out[str(k)] = str(v)
    return out


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> None:
    """Load environment variables from user + project .env files.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_paths is None:
        user_env_paths = [get_xdg_config_home() / "ktlint-hook" / ".env"]
    if project_env_paths is None:
        project_env_paths = [project_dir / ".env"]

    merged: dict[str, str] = {}
    for path in user_env_paths:
        merged.update(_read_env(path))
    for path in project_env_paths:
        merged.update(_read_env(path))

    for key, value in merged.items():
        if key not in os.environ:
            os.environ[key] = value
