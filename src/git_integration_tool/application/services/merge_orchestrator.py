from __future__ import annotations
"""Merge trunk into the destination branch, publish it and return to trunk."""

from dataclasses import dataclass
import logging

from git_integration_tool.application.services.publish_workflow import PublishWorkflow
from git_integration_tool.domain.entities import BranchName
from git_integration_tool.domain.errors import ConflictError, VCSError
from git_integration_tool.domain.ports import VersionControlPort


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class MergeOutcome:
    merged_into: BranchName
    published_branch: BranchName
    final_branch: BranchName


@dataclass(slots=True)
class MergeOrchestrator:
    """Non-fast-forward merge of trunk into the checked-out branch.

    On merge failure nothing is published and the repository is left on the
    destination branch for manual resolution.
    """

    vcs: VersionControlPort
    publisher: PublishWorkflow
    trunk_branch: str

    def merge_trunk(self) -> MergeOutcome:
        target = self.vcs.current_branch()
        LOGGER.info(
            "merging trunk",
            extra={"event": "merge.start", "source_branch": self.trunk_branch, "target_branch": target},
        )
        try:
            self.vcs.merge(self.trunk_branch, no_ff=True, log=True)
        except VCSError as error:
            LOGGER.error(
                "merge failed; repository left on target branch",
                extra={"event": "merge.failed", "source_branch": self.trunk_branch, "target_branch": target},
            )
            raise ConflictError(self.trunk_branch, target, error.details or str(error)) from error

        published = self.publisher.publish()
        self.vcs.checkout(self.trunk_branch)
        LOGGER.info(
            "trunk integrated",
            extra={"event": "merge.completed", "target_branch": target, "final_branch": self.trunk_branch},
        )
        return MergeOutcome(merged_into=target, published_branch=published, final_branch=self.trunk_branch)
