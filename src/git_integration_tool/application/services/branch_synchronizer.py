from __future__ import annotations
"""Make the destination branch exist and be checked out before merging."""

from dataclasses import dataclass
import logging

from git_integration_tool.domain.entities import BranchName
from git_integration_tool.domain.errors import InvariantViolation, VCSError
from git_integration_tool.domain.ports import VersionControlPort


LOGGER = logging.getLogger(__name__)

MAX_BRANCH_CREATIONS = 1


@dataclass(slots=True)
class SyncOutcome:
    """What the synchronizer had to do to reach the destination."""

    destination: BranchName
    starting_branch: BranchName
    switched: bool
    created: bool


@dataclass(slots=True)
class BranchSynchronizer:
    """Switch to the destination branch, creating it once when it is missing.

    Each attempt re-queries the current branch. A checkout failure on the
    first attempt creates the branch and restarts; a checkout failure after
    that creation raises `InvariantViolation`.
    """

    vcs: VersionControlPort

    def synchronize(self, destination: BranchName) -> SyncOutcome:
        starting_branch: BranchName | None = None
        current: BranchName | None = None
        created = False
        last_error: VCSError | None = None

        for attempt in range(MAX_BRANCH_CREATIONS + 1):
            current = self.vcs.current_branch()
            if starting_branch is None:
                starting_branch = current

            if current == destination:
                LOGGER.info(
                    "already on destination branch",
                    extra={"event": "sync.noop", "branch": destination, "attempt": attempt},
                )
                return SyncOutcome(destination, starting_branch, switched=False, created=created)

            try:
                self.vcs.checkout(destination)
            except VCSError as error:
                last_error = error
                if attempt < MAX_BRANCH_CREATIONS:
                    LOGGER.info(
                        "destination branch missing; creating it",
                        extra={"event": "sync.branch.missing", "branch": destination, "from_branch": current},
                    )
                    self.vcs.create_branch(destination)
                    created = True
                continue

            LOGGER.info(
                "switched to destination branch",
                extra={"event": "sync.switched", "from_branch": current, "to_branch": destination},
            )
            return SyncOutcome(destination, starting_branch, switched=True, created=created)

        raise InvariantViolation(
            f"Branch {destination} was created but checking it out still failed "
            f"(current branch: {current})."
        ) from last_error
