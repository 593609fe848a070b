"""
Pre-commit hook script generation.

Turns a HookSpec into the shell text stored between the managed-region
markers. Generation is pure: no file system or git access happens here,
and every value interpolated into the script is quoted in this module.

The generated script, run by git at commit time:

1. Lists staged (non-deleted) files with an extension of interest,
   relative to the build root.
2. Exits 0 with "No Kotlin staged files." when the list is empty.
3. Snapshots unstaged changes and reverse-applies them so the lint task
   only sees staged content.
4. Runs the Gradle task with the list in the filter build parameter.
5. Optionally re-stages the listed files (format tasks rewrite them).
6. Re-applies the unstaged snapshot on every exit path and exits with
   the Gradle exit code.

Hook content above the region may enable ``set -e``; the Gradle exit
code is captured with ``||`` and restoration is also trapped on EXIT, so
a failing step never leaves the working tree without its unstaged edits.
"""

from __future__ import annotations

import re
import shlex

from ktlint_hook.core.constants import (
    END_HOOK_SECTION,
    FILTER_INCLUDE_PROPERTY_NAME,
    SH_SHEBANG,
    START_HOOK_SECTION,
    UNSTAGED_DIFF_FILE_NAME,
)
from ktlint_hook.core.hooks.models import HookSpec

NO_FILES_MESSAGE = "No Kotlin staged files."


def generate_git_command(prefix: str) -> str:
    """Staged-diff query, scoped to the build root when prefix is set.

    ``--relative`` both limits the diff to the prefix directory and
    reports paths relative to it, which is what the lint task filter
    compares against.
    """
    command = "git --no-pager diff --name-status --no-color --cached"
    if prefix:
        command += f" --relative={shlex.quote(prefix + '/')}"
    return command


def generate_extension_pattern(extensions: tuple[str, ...]) -> str:
    """awk regex matching paths that end in one of the extensions."""
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return rf"/\.({alternatives})$/"


def generate_gradle_command(spec: HookSpec) -> str:
    """Gradle invocation, addressing the build root's wrapper explicitly."""
    if spec.prefix:
        wrapper = shlex.quote(f"./{spec.prefix}/{spec.wrapper}")
        command = f"{wrapper} -p {shlex.quote(f'./{spec.prefix}')}"
    else:
        command = shlex.quote(f"./{spec.wrapper}")
    return (
        f"{command} --quiet {shlex.quote(spec.task_name)} "
        f'-P{FILTER_INCLUDE_PROPERTY_NAME}="$CHANGED_FILES"'
    )


def generate_post_check(spec: HookSpec) -> str:
    """Re-stage step for format hooks, empty otherwise."""
    if not spec.update_commit:
        return ""
    if spec.prefix:
        path = shlex.quote(f"./{spec.prefix}/") + '"$file"'
    else:
        path = '"$file"'
    return (
        'echo "$CHANGED_FILES" | while read -r file; do\n'
        f"    if [ -f {path} ]; then\n"
        f"        git add {path}\n"
        "    fi\n"
        "done\n"
    )


def generate_git_hook(spec: HookSpec) -> str:
    """
    Generate the script body that lives inside the managed region.

    Args:
        spec: Task, re-stage flag and build root prefix to generate for

    Returns:
        Shell text starting and ending with a newline

    Example:
        >>> script = generate_git_hook(HookSpec(task_name="ktlintCheck"))
        >>> "./gradlew --quiet ktlintCheck" in script
        True
    """
    awk_program = (
        f"$1 != \"D\" && $NF ~ {generate_extension_pattern(spec.extensions)} {{ print $NF }}"
    )
    changed_files = f"{generate_git_command(spec.prefix)} | awk {shlex.quote(awk_program)}"

    return f"""
CHANGED_FILES="$({changed_files})"

if [ -z "$CHANGED_FILES" ]; then
    echo "{NO_FILES_MESSAGE}"
    exit 0
fi;

echo "Running ktlint over these files:"
echo "$CHANGED_FILES"

diff="$(git rev-parse --git-dir)/{UNSTAGED_DIFF_FILE_NAME}"

ktlint_restore_unstaged() {{
    trap - EXIT INT TERM HUP
    if [ -s "$diff" ]; then
        if ! git apply --ignore-whitespace "$diff"; then
            echo "Could not restore unstaged changes, they are kept in $diff" >&2
            return 0
        fi
    fi
    rm -f "$diff"
}}
trap 'ktlint_restore_unstaged; exit 130' INT TERM HUP
trap 'ktlint_restore_unstaged' EXIT

git diff --color=never --no-ext-diff --binary > "$diff"
if [ -s "$diff" ]; then
    git apply -R "$diff"
fi

gradleCommandExitCode=0
{generate_gradle_command(spec)} || gradleCommandExitCode=$?

echo "Completed ktlint run."
{generate_post_check(spec)}
ktlint_restore_unstaged
unset diff

echo "Completed ktlint hook."
exit $gradleCommandExitCode
"""


def wrap_managed_region(script: str) -> str:
    """Surround a generated script with the start and end marker lines."""
    return f"{START_HOOK_SECTION}{script}{END_HOOK_SECTION}"


def generate_hook_file(spec: HookSpec) -> str:
    """Full content for a new hook file: shebang plus the managed region."""
    return SH_SHEBANG + wrap_managed_region(generate_git_hook(spec))
