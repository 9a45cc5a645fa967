from __future__ import annotations
"""Push the current branch after a local mutation."""

from dataclasses import dataclass
import logging

from git_integration_tool.domain.entities import BranchName
from git_integration_tool.domain.ports import VersionControlPort


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PublishWorkflow:
    """Publish whatever branch is checked out right now to the configured remote.

    A failed push raises `VCSError` and leaves the local commit/merge in place.
    """

    vcs: VersionControlPort
    remote: str = "origin"

    def publish(self, *, force_with_lease: bool = False) -> BranchName:
        branch = self.vcs.current_branch()
        LOGGER.info(
            "publishing branch",
            extra={
                "event": "publish.start",
                "remote": self.remote,
                "branch": branch,
                "force_with_lease": force_with_lease,
            },
        )
        self.vcs.push(self.remote, branch, force_with_lease=force_with_lease)
        LOGGER.info(
            "changes published",
            extra={"event": "publish.success", "remote": self.remote, "branch": branch},
        )
        return branch
