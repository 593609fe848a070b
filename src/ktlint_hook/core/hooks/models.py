"""
Hook data models for ktlint-hook.

HookSpec is the immutable input of the script generator. HookInstallResult
describes what the installer did to the hook file.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ktlint_hook.core.constants import DEFAULT_EXTENSIONS, DEFAULT_WRAPPER

_EXTENSION_RE = re.compile(r"^[A-Za-z0-9_+-]+$")


class InvalidHookNameError(ValueError):
    """Hook name that would resolve outside the hooks directory."""


def check_hook_name(name: str) -> str:
    """Return name when it is a plain file name inside the hooks directory.

    Raises:
        InvalidHookNameError: For empty names, '.', '..' or names with a separator.
    """
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise InvalidHookNameError(f"hook name must be a plain file name, got {name!r}")
    return name


class HookSpec(BaseModel):
    """
    Everything the generated script depends on.

    Constructed once per install (or generate) invocation and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    task_name: str = Field(description="Gradle task the hook runs (e.g. ktlintFormat)")
    update_commit: bool = Field(
        default=False, description="Re-stage files the task rewrote after it runs"
    )
    prefix: str = Field(
        default="",
        description="Path from the repository work tree to the build root, '' if equal",
    )
    wrapper: str = Field(default=DEFAULT_WRAPPER, description="Build wrapper script name")
    extensions: tuple[str, ...] = Field(
        default=DEFAULT_EXTENSIONS, description="Source file extensions the hook lints"
    )

    @field_validator("task_name", "wrapper")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("prefix")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        prefix = v.replace("\\", "/").strip()
        if prefix.startswith("/"):
            raise ValueError(f"prefix must be relative to the repository root: {v!r}")
        while prefix.startswith("./"):
            prefix = prefix[2:]
        prefix = prefix.rstrip("/")
        if prefix == ".":
            return ""
        if ".." in prefix.split("/"):
            raise ValueError(f"prefix must stay inside the repository: {v!r}")
        return prefix

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        extensions = tuple(ext.strip().lstrip(".") for ext in v if ext.strip().lstrip("."))
        if not extensions:
            raise ValueError("at least one file extension is required")
        for ext in extensions:
            if not _EXTENSION_RE.match(ext):
                raise ValueError(f"invalid file extension: {ext!r}")
        return extensions


class InstallAction(str, Enum):
    """What the installer did to the hook file."""

    CREATED = "created"
    APPENDED = "appended"
    REPLACED = "replaced"
    SKIPPED = "skipped"


class HookInstallResult(BaseModel):
    """Result of a hook installation."""

    success: bool = Field(description="Whether the hook file now holds the managed region")
    action: InstallAction = Field(description="How the hook file was changed")
    hook_file: str | None = Field(default=None, description="Path of the hook file")
    git_dir: str | None = Field(default=None, description="Git metadata directory")
    prefix: str = Field(default="", description="Build root relative to the work tree")
    message: str | None = Field(default=None, description="Summary message")
