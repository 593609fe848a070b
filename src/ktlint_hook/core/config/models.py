"""
Configuration data models for ktlint-hook.

These models define the structure of .ktlint-hook.json and
~/.config/ktlint-hook/config.json files.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ktlint_hook.core.constants import (
    CHECK_TASK_NAME,
    DEFAULT_EXTENSIONS,
    DEFAULT_HOOK_NAME,
    DEFAULT_WRAPPER,
    FORMAT_TASK_NAME,
)
from ktlint_hook.core.hooks.models import check_hook_name


class HookConfig(BaseModel):
    """
    Project settings for the installed hooks.

    Task names must match tasks registered in the Gradle build the
    hook invokes.
    """

    model_config = ConfigDict(extra="ignore")

    format_task: str = Field(
        default=FORMAT_TASK_NAME,
        description="Task run by the format hook; its rewrites are re-staged",
    )
    check_task: str = Field(
        default=CHECK_TASK_NAME,
        description="Task run by the check hook",
    )
    hook_name: str = Field(
        default=DEFAULT_HOOK_NAME,
        description="Git hook file the managed region is installed into",
    )
    wrapper: str = Field(
        default=DEFAULT_WRAPPER,
        description="Gradle wrapper script in the build root",
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Source file extensions staged files are filtered by",
    )

    @field_validator("format_task", "check_task", "hook_name", "wrapper")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("hook_name")
    @classmethod
    def _plain_file_name(cls, v: str) -> str:
        return check_hook_name(v)

    @field_validator("extensions")
    @classmethod
    def _extensions_not_empty(cls, v: list[str]) -> list[str]:
        extensions = [ext.strip().lstrip(".") for ext in v if ext.strip().lstrip(".")]
        if not extensions:
            raise ValueError("at least one file extension is required")
        return extensions
