"""
ktlint-hook - staged-file git hooks for ktlint Gradle tasks.

Installs a pre-commit hook that runs a ktlint Gradle task over the Kotlin
files staged for commit only, and provides the filter the lint task uses
to narrow its file set to that list.
"""

__version__ = "0.4.0-dev"

# Re-export core models for convenience
from ktlint_hook.core.config.models import HookConfig
from ktlint_hook.core.hooks.models import HookInstallResult, HookSpec

__all__ = ["HookConfig", "HookInstallResult", "HookSpec", "__version__"]
