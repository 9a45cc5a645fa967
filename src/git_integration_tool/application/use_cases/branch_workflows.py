from __future__ import annotations
"""Application use case for the commit, amend and integrate workflows."""

from dataclasses import dataclass, field
import logging
from pathlib import Path

from git_integration_tool.application.services.branch_synchronizer import BranchSynchronizer
from git_integration_tool.application.services.integration_policy import (
    normalize_message,
    resolve_destination_branch,
)
from git_integration_tool.application.services.merge_orchestrator import MergeOrchestrator
from git_integration_tool.application.services.publish_workflow import PublishWorkflow
from git_integration_tool.application.services.rights_guard import CommitRightsGuard
from git_integration_tool.domain.actions import ActionPipeline
from git_integration_tool.domain.entities import BranchPolicy, WorkflowSummary, WorkspaceContext
from git_integration_tool.domain.errors import CheckFailedError
from git_integration_tool.domain.ports import VersionControlPort


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class BranchIntegrationWorkflow:
    """Core orchestration use case.

    Responsibilities:
    - guard commit/amend with the trunk-only rights check
    - stage, commit and publish
    - run pre-integration checks, pick the destination branch, synchronize it,
      merge trunk into it, publish and return to trunk

    Every step runs strictly after its predecessor; the first failure raises and
    skips the rest without undoing completed steps.
    """

    vcs: VersionControlPort
    policy: BranchPolicy
    repo_path: Path
    checks: ActionPipeline = field(default_factory=lambda: ActionPipeline([]))

    def commit(self, message: str) -> WorkflowSummary:
        """Stage everything, commit with `message` and publish.

        Raises:
            ValueError: `message` is blank.
            PreconditionError: not on trunk and `message` is not an initial commit.
            VCSError: a git command failed.
        """
        normalized = normalize_message(message)
        if normalized is None:
            raise ValueError("A commit message is required")

        summary = WorkflowSummary(command="commit")
        if self._guard().ensure_commit_rights_for(normalized):
            summary.record("rights check bypassed (initial commit)")
        else:
            summary.record("rights check passed")

        self.vcs.stage_all(".")
        summary.record("staged all changes")
        self.vcs.commit(normalized)
        summary.record("committed")

        summary.published_branch = self._publisher().publish()
        summary.record(f"published {summary.published_branch}")
        summary.final_branch = self.vcs.current_branch()

        LOGGER.info(
            "files committed",
            extra={"event": "workflow.commit.completed", "branch": summary.final_branch},
        )
        return summary

    def amend(self, *, force_with_lease: bool = False) -> WorkflowSummary:
        """Stage everything into the last commit and publish.

        The rights check always applies, whatever the last commit message was.
        """
        summary = WorkflowSummary(command="amend")
        self._guard().ensure_commit_rights()
        summary.record("rights check passed")

        self.vcs.stage_all(".")
        summary.record("staged all changes")
        self.vcs.commit(None, amend=True)
        summary.record("amended last commit")

        summary.published_branch = self._publisher().publish(force_with_lease=force_with_lease)
        summary.record(f"published {summary.published_branch}")
        summary.final_branch = self.vcs.current_branch()

        LOGGER.info(
            "commit amended",
            extra={"event": "workflow.amend.completed", "branch": summary.final_branch},
        )
        return summary

    def integrate(self, message: str | None = None, *, run_checks: bool = True) -> WorkflowSummary:
        """Merge trunk into the destination branch and end on trunk.

        Args:
            message: Explicit message; its presence routes the merge to trunk
                instead of the integration branch.
            run_checks: Run the configured pre-integration checks first.

        Raises:
            CheckFailedError: a pre-integration check failed; nothing was touched.
            ConflictError: the merge failed; the repository stays on the destination.
            InvariantViolation: a freshly created destination could not be checked out.
            VCSError: any other git command failed.
        """
        summary = WorkflowSummary(command="integrate")

        if run_checks and self.checks.actions:
            results = tuple(self.checks.run(WorkspaceContext(local_path=self.repo_path), fail_fast=True))
            summary.check_results = results
            failed = [result for result in results if not result.success]
            if failed:
                details = "\n".join(
                    f"[{result.action_name}] {result.message}\n{result.metadata.get('output', '')}".rstrip()
                    for result in failed
                )
                raise CheckFailedError([result.action_name for result in failed], details)
            summary.record(f"checks passed: {', '.join(result.action_name for result in results)}")

        destination = resolve_destination_branch(message, self.policy)
        summary.destination_branch = destination
        LOGGER.info(
            "integration destination resolved",
            extra={"event": "workflow.integrate.destination", "destination": destination},
        )

        sync = BranchSynchronizer(self.vcs).synchronize(destination)
        if sync.created:
            summary.record(f"created {destination}")
        if sync.switched:
            summary.record(f"switched from {sync.starting_branch} to {destination}")

        outcome = MergeOrchestrator(
            vcs=self.vcs,
            publisher=self._publisher(),
            trunk_branch=self.policy.trunk_branch,
        ).merge_trunk()
        summary.record(f"merged {self.policy.trunk_branch} into {outcome.merged_into}")
        summary.published_branch = outcome.published_branch
        summary.record(f"published {outcome.published_branch}")
        summary.final_branch = self.vcs.current_branch()
        summary.record(f"checked out {summary.final_branch}")

        LOGGER.info(
            "trunk integrated successfully",
            extra={
                "event": "workflow.integrate.completed",
                "destination": destination,
                "final_branch": summary.final_branch,
            },
        )
        return summary

    def _guard(self) -> CommitRightsGuard:
        return CommitRightsGuard(vcs=self.vcs, trunk_branch=self.policy.trunk_branch)

    def _publisher(self) -> PublishWorkflow:
        return PublishWorkflow(vcs=self.vcs, remote=self.policy.remote)
