"""
Git hook generation and installation.

Key Functions:
    generate_git_hook: Render the managed-region script for a HookSpec
    install_git_hook: Install or upgrade the managed region in a hook file
    merge_hook_content: Pure merge of a script into existing hook text

Key Models:
    HookSpec: Immutable generator input
    HookInstallResult: What the installer changed

Usage:
    from ktlint_hook.core.hooks import install_git_hook

    result = install_git_hook("pre-commit", "ktlintFormat", update_commit=True)
    if not result.success:
        print(result.message)
"""

from ktlint_hook.core.hooks.installer import install_git_hook, merge_hook_content
from ktlint_hook.core.hooks.models import (
    HookInstallResult,
    HookSpec,
    InstallAction,
    InvalidHookNameError,
)
from ktlint_hook.core.hooks.script import (
    generate_git_hook,
    generate_hook_file,
    wrap_managed_region,
)

__all__ = [
    # Generator
    "generate_git_hook",
    "generate_hook_file",
    "wrap_managed_region",
    # Installer
    "install_git_hook",
    "merge_hook_content",
    # Models
    "HookInstallResult",
    "HookSpec",
    "InstallAction",
    # Errors
    "InvalidHookNameError",
]
