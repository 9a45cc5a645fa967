from __future__ import annotations
"""Check action that runs one external command (linter, test runner, ...)."""

import logging
import shlex
from typing import Sequence

from git_integration_tool.checks.command_runtime import CommandRunner
from git_integration_tool.domain.actions import Action
from git_integration_tool.domain.entities import ActionResult, WorkspaceContext


LOGGER = logging.getLogger(__name__)

_OUTPUT_TAIL_CHARS = 2000


class RunCommandCheckAction(Action):
    """Pass when the configured command exits with code 0.

    Expected usage:
    - Construct once per named check (e.g. `lint`, `test`).
    - Execute with the repository `WorkspaceContext`; the command runs in
      `context.local_path`.
    - The tail of the command output is kept in `ActionResult.metadata`.
    """

    def __init__(self, check_name: str, command: str | Sequence[str], runner: CommandRunner) -> None:
        """Initialize check.

        Args:
            check_name: Name shown in summaries and errors.
            command: Shell-like string (split with `shlex`) or argument list.
            runner: Command runtime implementation.
        """
        self._check_name = check_name
        self._command = tuple(shlex.split(command) if isinstance(command, str) else command)
        if not self._command:
            raise ValueError(f"Command for check '{check_name}' must not be empty")
        self._runner = runner

    @property
    def name(self) -> str:
        return self._check_name

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def execute(self, context: WorkspaceContext) -> ActionResult:
        LOGGER.info(
            "running check",
            extra={"event": "check.start", "check": self.name, "command": " ".join(self._command)},
        )
        try:
            exit_code, stdout, stderr = self._runner.run(self._command, context.local_path)
        except RuntimeError as error:
            LOGGER.error("check could not run", extra={"event": "check.error", "check": self.name})
            return ActionResult(action_name=self.name, success=False, message=str(error))

        output = (stderr.strip() or stdout.strip())[-_OUTPUT_TAIL_CHARS:]
        success = exit_code == 0
        LOGGER.info(
            "check finished",
            extra={"event": "check.completed", "check": self.name, "exit_code": exit_code, "success": success},
        )
        message = "passed" if success else f"exited with code {exit_code}"
        return ActionResult(
            action_name=self.name,
            success=success,
            message=message,
            metadata={"exit_code": exit_code, "output": output},
        )
