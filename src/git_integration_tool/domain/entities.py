from __future__ import annotations
"""Core domain entities shared by workflows, checks and the CLI.

These data models are intentionally framework-agnostic and can be reused across
different adapters (CLI, tests, future APIs).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


BranchName = str


@dataclass(frozen=True, slots=True)
class BranchPolicy:
    """Well-known branches and the publish remote.

    Attributes:
        trunk_branch: Stable branch every integration ends on.
        integration_branch: Shared staging branch for routine integration.
        remote: Remote that receives every published branch.
    """

    trunk_branch: BranchName = "master"
    integration_branch: BranchName = "integrate"
    remote: str = "origin"


@dataclass(slots=True)
class WorkspaceContext:
    """Mutable per-run context passed through the check pipeline.

    Attributes:
        local_path: Working repository path.
        metadata: Generic key/value bag for cross-check communication.
    """

    local_path: Path
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ActionResult:
    """Standard result returned by each `Action.execute()` call.

    Attributes:
        action_name: Action identifier for logs and summaries.
        success: Whether the action succeeded.
        message: Human-readable action outcome.
        metadata: Optional structured result payload for downstream consumers.
    """

    action_name: str
    success: bool
    message: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class WorkflowSummary:
    """Record of one commit/amend/integrate run, used for CLI output."""

    command: str
    steps: list[str] = field(default_factory=list)
    destination_branch: BranchName | None = None
    published_branch: BranchName | None = None
    final_branch: BranchName | None = None
    check_results: tuple[ActionResult, ...] = ()

    def record(self, step: str) -> None:
        self.steps.append(step)
