from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from git_integration_tool.domain.errors import VCSError
from git_integration_tool.domain.ports import VersionControlPort


@dataclass
class FakeGitClient(VersionControlPort):
    """In-memory repository: branches map to lists of commit labels."""

    current: str = "master"
    branches: dict[str, list[str]] = field(default_factory=lambda: {"master": ["root"]})
    calls: list[tuple] = field(default_factory=list)
    pushed: list[tuple[str, str]] = field(default_factory=list)
    staged: bool = False
    conflict_on_merge: bool = False
    push_error: str | None = None
    unreachable_branches: set[str] = field(default_factory=set)

    def current_branch(self) -> str:
        self.calls.append(("current_branch",))
        return self.current

    def checkout(self, branch: str) -> None:
        self.calls.append(("checkout", branch))
        if branch not in self.branches or branch in self.unreachable_branches:
            raise VCSError(f"error: pathspec '{branch}' did not match any file(s) known to git")
        self.current = branch

    def create_branch(self, branch: str) -> None:
        self.calls.append(("create_branch", branch))
        if branch in self.branches:
            raise VCSError(f"fatal: a branch named '{branch}' already exists")
        self.branches[branch] = list(self.branches[self.current])

    def stage_all(self, path: str = ".") -> None:
        self.calls.append(("stage_all", path))
        self.staged = True

    def commit(self, message: str | None, *, amend: bool = False) -> None:
        self.calls.append(("commit", message, amend))
        history = self.branches[self.current]
        if amend:
            history[-1] = f"{history[-1]} (amended)"
        else:
            history.append(message)
        self.staged = False

    def merge(self, source_branch: str, *, no_ff: bool = True, log: bool = True) -> None:
        self.calls.append(("merge", source_branch, no_ff, log))
        if self.conflict_on_merge:
            raise VCSError(
                "Git command failed (1): git merge",
                return_code=1,
                details="CONFLICT (content): Merge conflict in app.py",
            )
        self.branches[self.current].append(f"merge {source_branch} into {self.current}")

    def push(self, remote: str, branch: str, *, force_with_lease: bool = False) -> None:
        self.calls.append(("push", remote, branch, force_with_lease))
        if self.push_error:
            raise VCSError(self.push_error)
        self.pushed.append((remote, branch))

    def mutating_calls(self) -> list[tuple]:
        return [call for call in self.calls if call[0] != "current_branch"]


@pytest.fixture
def fake_git() -> FakeGitClient:
    return FakeGitClient()
