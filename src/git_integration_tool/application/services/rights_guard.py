from __future__ import annotations
"""Commit-rights precondition for history-mutating operations."""

from dataclasses import dataclass
import logging

from git_integration_tool.domain.errors import PreconditionError
from git_integration_tool.domain.ports import VersionControlPort


LOGGER = logging.getLogger(__name__)

INITIAL_COMMIT_TOKEN = "initial"


def is_initial_commit_message(message: str | None) -> bool:
    """Return whether `message` marks a bootstrap commit exempt from the guard."""
    return bool(message) and INITIAL_COMMIT_TOKEN in message.lower()


@dataclass(slots=True)
class CommitRightsGuard:
    """Allow commits and amends only while the trunk branch is checked out."""

    vcs: VersionControlPort
    trunk_branch: str

    def ensure_commit_rights(self) -> None:
        current = self.vcs.current_branch()
        if current != self.trunk_branch:
            LOGGER.warning(
                "commit rights denied",
                extra={"event": "guard.denied", "expected_branch": self.trunk_branch, "actual_branch": current},
            )
            raise PreconditionError(expected_branch=self.trunk_branch, actual_branch=current)
        LOGGER.info("commit rights granted", extra={"event": "guard.granted", "branch": current})

    def ensure_commit_rights_for(self, message: str | None) -> bool:
        """Apply the guard unless `message` is an initial commit.

        Returns:
            `True` when the guard was bypassed.
        """
        if is_initial_commit_message(message):
            LOGGER.info(
                "commit rights check bypassed for initial commit",
                extra={"event": "guard.bypassed", "commit_message": message},
            )
            return True
        self.ensure_commit_rights()
        return False
