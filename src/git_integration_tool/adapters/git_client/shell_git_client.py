from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from git_integration_tool.domain.entities import BranchName
from git_integration_tool.domain.errors import VCSError
from git_integration_tool.domain.ports import VersionControlPort


class ShellGitClientAdapter(VersionControlPort):
    def __init__(
        self,
        repo_path: Path,
        *,
        git_executable: str = "git",
        timeout_seconds: float | None = None,
        runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        self._repo_path = repo_path
        self._git_executable = git_executable
        self._timeout_seconds = timeout_seconds
        self._runner = runner
        self._logger = logging.getLogger(__name__)

    @property
    def repo_path(self) -> Path:
        return self._repo_path

    def current_branch(self) -> BranchName:
        result = self._run_git(["rev-parse", "--abbrev-ref", "HEAD"])
        branch = (result.stdout or "").strip()
        if not branch:
            raise VCSError(
                f"Unable to determine current branch in {self._repo_path}",
                command=[self._git_executable, "rev-parse", "--abbrev-ref", "HEAD"],
            )
        return branch

    def checkout(self, branch: BranchName) -> None:
        self._run_git(["checkout", branch])

    def create_branch(self, branch: BranchName) -> None:
        self._logger.info(
            "creating branch",
            extra={"event": "git.branch.create", "branch": branch, "repo_path": str(self._repo_path)},
        )
        self._run_git(["branch", branch])

    def stage_all(self, path: str = ".") -> None:
        self._run_git(["add", "--all", "--", path])

    def commit(self, message: str | None, *, amend: bool = False) -> None:
        if amend:
            self._run_git(["commit", "--amend", "--no-edit"])
            return
        if not message:
            raise ValueError("A commit message is required unless amending")
        self._run_git(["commit", "-m", message])

    def merge(self, source_branch: BranchName, *, no_ff: bool = True, log: bool = True) -> None:
        args = ["merge"]
        if no_ff:
            args.append("--no-ff")
        if log:
            args.append("--log")
        args.extend(["--no-edit", source_branch])
        self._run_git(args)

    def push(self, remote: str, branch: BranchName, *, force_with_lease: bool = False) -> None:
        args = ["push"]
        if force_with_lease:
            args.append("--force-with-lease")
        args.extend([remote, branch])
        self._run_git(args)

    def _run_git(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        command = [self._git_executable, *args]
        self._logger.debug(
            "running git command",
            extra={"event": "git.command.start", "command": " ".join(command), "cwd": str(self._repo_path)},
        )
        try:
            return self._runner(
                command,
                cwd=str(self._repo_path),
                check=True,
                text=True,
                capture_output=True,
                timeout=self._timeout_seconds,
            )
        except FileNotFoundError as error:
            raise VCSError(
                f"Git executable '{self._git_executable}' was not found in PATH",
                command=command,
            ) from error
        except OSError as error:
            raise VCSError(
                f"Git executable '{self._git_executable}' could not be run: {error}",
                command=command,
            ) from error
        except subprocess.TimeoutExpired as error:
            raise VCSError(
                f"Git command timed out after {self._timeout_seconds}s: {' '.join(command)}",
                command=command,
            ) from error
        except subprocess.CalledProcessError as error:
            stderr = (error.stderr or "").strip()
            stdout = (error.stdout or "").strip()
            details = stderr or stdout or "No command output"
            self._logger.error(
                "git command failed",
                extra={
                    "event": "git.command.error",
                    "command": " ".join(command),
                    "cwd": str(self._repo_path),
                    "return_code": error.returncode,
                    "details": details,
                },
            )
            raise VCSError(
                f"Git command failed ({error.returncode}): {' '.join(command)}\n{details}",
                command=command,
                return_code=error.returncode,
                details=details,
            ) from error
