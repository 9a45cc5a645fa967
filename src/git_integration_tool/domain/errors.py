from __future__ import annotations
"""Workflow error taxonomy.

Every failure path of the commit/amend/integrate workflows raises one of these.
The CLI maps any `WorkflowError` to a non-zero exit code.
"""

from typing import Sequence


class WorkflowError(RuntimeError):
    """Base class for all workflow failures."""


class PreconditionError(WorkflowError):
    """Raised when a rights-guarded operation runs on the wrong branch."""

    def __init__(self, expected_branch: str, actual_branch: str) -> None:
        super().__init__(f"Expected current branch to be {expected_branch}, but was {actual_branch}.")
        self.expected_branch = expected_branch
        self.actual_branch = actual_branch


class VCSError(WorkflowError):
    """Raised when an underlying version-control command fails."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        return_code: int | None = None,
        details: str = "",
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.return_code = return_code
        self.details = details


class ConflictError(WorkflowError):
    """Raised when merging trunk into the destination branch does not complete cleanly."""

    def __init__(self, source_branch: str, target_branch: str, details: str) -> None:
        super().__init__(
            f"Merging {source_branch} into {target_branch} failed; "
            f"resolve manually on {target_branch}.\n{details}"
        )
        self.source_branch = source_branch
        self.target_branch = target_branch
        self.details = details


class InvariantViolation(WorkflowError):
    """Raised when a branch that was just created still cannot be checked out."""


class CheckFailedError(WorkflowError):
    """Raised when a pre-integration check fails."""

    def __init__(self, check_names: Sequence[str], details: str = "") -> None:
        message = f"Pre-integration checks failed: {', '.join(check_names)}"
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)
        self.check_names = tuple(check_names)
        self.details = details
