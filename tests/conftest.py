"""
Pytest configuration and shared fixtures.

Provides isolated configuration, temporary git repositories and helpers
for running generated hooks with a fake Gradle wrapper.
"""

import shutil
import subprocess
from pathlib import Path

import pytest

# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep user config and KTLINT_HOOK_* variables out of every test."""
    xdg = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    for name in (
        "KTLINT_HOOK_FORMAT_TASK",
        "KTLINT_HOOK_CHECK_TASK",
        "KTLINT_HOOK_NAME",
        "KTLINT_HOOK_WRAPPER",
        "KTLINT_HOOK_EXTENSIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    return xdg


# ==============================================================================
# Git Fixtures
# ==============================================================================


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def run_git():
    """Run a git command in a repository and return stdout."""
    return _git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one committed Kotlin file."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    repo = tmp_path / "repo"
    repo.mkdir()

    _git(repo, "init")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")

    src = repo / "src"
    src.mkdir()
    (src / "Main.kt").write_text("fun main() {}\n")
    (repo / "README.md").write_text("# repo\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "Initial commit")

    return repo


@pytest.fixture
def no_repo_dir(tmp_path: Path) -> Path:
    """A directory that is not inside any git repository."""
    directory = tmp_path / "plain"
    directory.mkdir()
    return directory


FAKE_GRADLEW = """#!/bin/sh
# Fake Gradle wrapper: records its arguments and the file it would lint.
here="$(dirname "$0")"
printf '%s\\n' "$@" > "$GRADLE_LOG"
cat "$here/src/Main.kt" > "$GRADLE_SEEN"
if [ -n "$GRADLE_REWRITE" ]; then
    printf '%s\\n' "$GRADLE_REWRITE" > "$here/src/Main.kt"
fi
exit "${GRADLE_EXIT:-0}"
"""


@pytest.fixture
def fake_gradlew():
    """Factory installing an executable fake gradlew in a build root (left untracked)."""

    def _write(build_root: Path) -> Path:
        wrapper = build_root / "gradlew"
        wrapper.write_text(FAKE_GRADLEW)
        wrapper.chmod(0o755)
        return wrapper

    return _write
