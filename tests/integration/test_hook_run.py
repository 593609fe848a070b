"""
End-to-end tests: run installed hooks with sh against real repositories.

A fake gradlew records its arguments and the content it saw, and can
rewrite the linted file or fail, standing in for ktlint Gradle tasks.
"""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from ktlint_hook.core.hooks import install_git_hook

pytestmark = pytest.mark.skipif(
    shutil.which("sh") is None or shutil.which("git") is None,
    reason="requires sh and git",
)


def run_hook(
    repo: Path,
    tmp_path: Path,
    *,
    exit_code: int = 0,
    rewrite: str = "",
    hook_name: str = "pre-commit",
) -> subprocess.CompletedProcess[str]:
    env = {
        **os.environ,
        "GRADLE_LOG": str(tmp_path / "gradle-args.log"),
        "GRADLE_SEEN": str(tmp_path / "gradle-seen.kt"),
        "GRADLE_EXIT": str(exit_code),
        "GRADLE_REWRITE": rewrite,
    }
    return subprocess.run(
        ["sh", str(repo / ".git" / "hooks" / hook_name)],
        cwd=repo,
        env=env,
        capture_output=True,
        text=True,
    )


class TestNoStagedFiles:
    """The hook short-circuits when nothing relevant is staged."""

    def test_nothing_staged(self, git_repo: Path, tmp_path: Path, fake_gradlew) -> None:
        fake_gradlew(git_repo)
        install_git_hook("pre-commit", "ktlintCheck", project_dir=git_repo)

        result = run_hook(git_repo, tmp_path)

        assert result.returncode == 0
        assert "No Kotlin staged files." in result.stdout
        assert not (tmp_path / "gradle-args.log").exists()

    def test_only_non_kotlin_staged(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        fake_gradlew(git_repo)
        install_git_hook("pre-commit", "ktlintCheck", project_dir=git_repo)
        (git_repo / "README.md").write_text("# changed\n")
        run_git(git_repo, "add", "README.md")

        result = run_hook(git_repo, tmp_path)

        assert result.returncode == 0
        assert "No Kotlin staged files." in result.stdout
        assert not (tmp_path / "gradle-args.log").exists()

    def test_deleted_kotlin_file_ignored(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        fake_gradlew(git_repo)
        install_git_hook("pre-commit", "ktlintCheck", project_dir=git_repo)
        run_git(git_repo, "rm", "--cached", "-q", "src/Main.kt")

        result = run_hook(git_repo, tmp_path)

        assert result.returncode == 0
        assert "No Kotlin staged files." in result.stdout


class TestCheckHook:
    """Check hooks pass the staged list to Gradle and propagate its exit code."""

    def test_passes_staged_files(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        fake_gradlew(git_repo)
        install_git_hook("pre-commit", "ktlintCheck", project_dir=git_repo)
        (git_repo / "src" / "Main.kt").write_text("fun main() { }\n")
        (git_repo / "build.gradle.kts").write_text("plugins {}\n")
        run_git(git_repo, "add", "src/Main.kt", "build.gradle.kts")

        result = run_hook(git_repo, tmp_path)

        assert result.returncode == 0, result.stderr
        assert "Running ktlint over these files:" in result.stdout
        assert "Completed ktlint hook." in result.stdout
        args = (tmp_path / "gradle-args.log").read_text().splitlines()
        assert args[:2] == ["--quiet", "ktlintCheck"]
        assert args[2] == "-PinternalKtlintGitFilter=build.gradle.kts"
        assert args[3] == "src/Main.kt"

    def test_restores_unstaged_changes_when_gradle_fails(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        fake_gradlew(git_repo)
        install_git_hook("pre-commit", "ktlintCheck", project_dir=git_repo)
        main = git_repo / "src" / "Main.kt"
        main.write_text("fun main() {}\nval staged = 1\n")
        run_git(git_repo, "add", "src/Main.kt")
        main.write_text("fun main() {}\nval staged = 1\nval unstaged = 2\n")

        result = run_hook(git_repo, tmp_path, exit_code=3)

        assert result.returncode == 3
        assert "Completed ktlint hook." in result.stdout
        # Gradle only saw the staged content
        assert (tmp_path / "gradle-seen.kt").read_text() == "fun main() {}\nval staged = 1\n"
        # Unstaged edit restored, index untouched
        assert main.read_text() == "fun main() {}\nval staged = 1\nval unstaged = 2\n"
        assert run_git(git_repo, "show", ":src/Main.kt") == "fun main() {}\nval staged = 1\n"
        assert not (git_repo / ".git" / "unstaged-ktlint-git-hook.diff").exists()

    def test_restores_unstaged_changes_under_errexit(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        fake_gradlew(git_repo)
        hooks_dir = git_repo / ".git" / "hooks"
        hooks_dir.mkdir(exist_ok=True)
        (hooks_dir / "pre-commit").write_text("#!/bin/sh\nset -e\n")
        install_git_hook("pre-commit", "ktlintCheck", project_dir=git_repo)
        main = git_repo / "src" / "Main.kt"
        main.write_text("fun main() {}\nval staged = 1\n")
        run_git(git_repo, "add", "src/Main.kt")
        main.write_text("fun main() {}\nval staged = 1\nval unstaged = 2\n")

        result = run_hook(git_repo, tmp_path, exit_code=3)

        assert result.returncode == 3
        assert "Completed ktlint hook." in result.stdout
        assert main.read_text() == "fun main() {}\nval staged = 1\nval unstaged = 2\n"
        assert run_git(git_repo, "show", ":src/Main.kt") == "fun main() {}\nval staged = 1\n"
        assert not (git_repo / ".git" / "unstaged-ktlint-git-hook.diff").exists()

    def test_check_hook_does_not_restage(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        fake_gradlew(git_repo)
        install_git_hook("pre-commit", "ktlintCheck", project_dir=git_repo)
        (git_repo / "src" / "Main.kt").write_text("fun main() {  }\n")
        run_git(git_repo, "add", "src/Main.kt")

        result = run_hook(git_repo, tmp_path, rewrite="fun main() {}")

        assert result.returncode == 0
        assert run_git(git_repo, "show", ":src/Main.kt") == "fun main() {  }\n"


class TestFormatHook:
    """Format hooks re-stage the files the task rewrote."""

    def test_restages_formatted_file(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        fake_gradlew(git_repo)
        install_git_hook("pre-commit", "ktlintFormat", True, project_dir=git_repo)
        (git_repo / "src" / "Main.kt").write_text("fun main(){}\n")
        run_git(git_repo, "add", "src/Main.kt")

        result = run_hook(git_repo, tmp_path, rewrite="fun main() {}")

        assert result.returncode == 0, result.stderr
        assert run_git(git_repo, "show", ":src/Main.kt") == "fun main() {}\n"
        assert run_git(git_repo, "status", "--porcelain", "src") == ""


class TestSubdirectoryBuild:
    """Hooks for a build root below the repository root."""

    def test_paths_relative_to_build_root(
        self, git_repo: Path, tmp_path: Path, fake_gradlew, run_git
    ) -> None:
        build_root = git_repo / "android"
        (build_root / "src").mkdir(parents=True)
        (build_root / "src" / "Main.kt").write_text("fun main(){}\n")
        fake_gradlew(build_root)
        (git_repo / "src" / "Main.kt").write_text("fun outside() {}\n")
        run_git(git_repo, "add", "android/src/Main.kt", "src/Main.kt")
        install_git_hook(
            "pre-commit", "ktlintFormat", True, project_dir=build_root, root_dir=build_root
        )

        result = run_hook(git_repo, tmp_path, rewrite="fun main() {}")

        assert result.returncode == 0, result.stderr
        args = (tmp_path / "gradle-args.log").read_text().splitlines()
        assert args[:4] == ["-p", "./android", "--quiet", "ktlintFormat"]
        assert args[4:] == ["-PinternalKtlintGitFilter=src/Main.kt"]
        assert run_git(git_repo, "show", ":android/src/Main.kt") == "fun main() {}\n"
        assert run_git(git_repo, "show", ":src/Main.kt") == "fun outside() {}\n"
