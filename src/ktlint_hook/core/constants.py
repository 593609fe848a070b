"""
Shared constants for the generated hook and the staged-file filter.

The marker lines delimit the region of a hook file that ktlint-hook owns.
They are matched literally, so changing them orphans regions written by
earlier installs.
"""

# Build parameter carrying the newline-separated staged file list
FILTER_INCLUDE_PROPERTY_NAME = "internalKtlintGitFilter"

SH_SHEBANG = "#!/bin/sh\n"

START_HOOK_SECTION = "######## KTLINT-GRADLE HOOK START ########\n"
END_HOOK_SECTION = "######## KTLINT-GRADLE HOOK END ########\n"

# Snapshot of unstaged changes, stored inside the git metadata directory
UNSTAGED_DIFF_FILE_NAME = "unstaged-ktlint-git-hook.diff"

DEFAULT_HOOK_NAME = "pre-commit"
DEFAULT_WRAPPER = "gradlew"
DEFAULT_EXTENSIONS = ("kt", "kts")

FORMAT_TASK_NAME = "ktlintFormat"
CHECK_TASK_NAME = "ktlintCheck"
