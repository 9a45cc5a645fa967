from __future__ import annotations
"""External command runtime owned by the checks layer.

Linters and test runners are opaque collaborators; checks only see the exit
code and captured output.
"""

import subprocess
from pathlib import Path
from typing import Callable, Protocol, Sequence


class CommandRunner(Protocol):
    """Check-scoped contract for executing an external command."""

    def run(self, command: Sequence[str], cwd: Path) -> tuple[int, str, str]:
        """Execute `command` and return `(exit_code, stdout, stderr)`."""
        ...


class ShellCommandRunner:
    """Run a check command as a child process."""

    def __init__(
        self,
        *,
        timeout_seconds: float | None = None,
        runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._runner = runner

    def run(self, command: Sequence[str], cwd: Path) -> tuple[int, str, str]:
        if not command:
            raise ValueError("Check command must not be empty")

        try:
            completed = self._runner(
                list(command),
                cwd=str(cwd),
                check=False,
                text=True,
                capture_output=True,
                timeout=self._timeout_seconds,
            )
        except FileNotFoundError as error:
            raise RuntimeError(f"Check executable '{command[0]}' was not found in PATH") from error
        except OSError as error:
            raise RuntimeError(f"Check executable '{command[0]}' could not be run: {error}") from error
        except subprocess.TimeoutExpired as error:
            raise RuntimeError(
                f"Check command timed out after {self._timeout_seconds}s in {cwd}: {' '.join(command)}"
            ) from error

        return completed.returncode, completed.stdout or "", completed.stderr or ""
