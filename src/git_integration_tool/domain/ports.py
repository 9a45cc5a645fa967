from __future__ import annotations
"""Hexagonal architecture port interfaces.

Workflows depend only on these abstractions. Adapters provide concrete
implementations backed by the `git` CLI (or in-memory fakes in tests).
"""

from abc import ABC, abstractmethod

from .entities import BranchName


class VersionControlPort(ABC):
    """Primitive version-control operations against one working repository.

    Every method either returns normally or raises `VCSError`. Implementations
    must not retry and must not cache the current branch.
    """

    @abstractmethod
    def current_branch(self) -> BranchName:
        """Return the name of the checked-out branch."""
        raise NotImplementedError

    @abstractmethod
    def checkout(self, branch: BranchName) -> None:
        """Switch the working tree to an existing branch."""
        raise NotImplementedError

    @abstractmethod
    def create_branch(self, branch: BranchName) -> None:
        """Create a branch at the current commit without switching to it."""
        raise NotImplementedError

    @abstractmethod
    def stage_all(self, path: str = ".") -> None:
        """Stage every change (including deletions) under `path`."""
        raise NotImplementedError

    @abstractmethod
    def commit(self, message: str | None, *, amend: bool = False) -> None:
        """Record staged changes.

        Args:
            message: Commit message. Ignored (may be `None`) when amending.
            amend: Rewrite the last commit, keeping its message.
        """
        raise NotImplementedError

    @abstractmethod
    def merge(self, source_branch: BranchName, *, no_ff: bool = True, log: bool = True) -> None:
        """Merge `source_branch` into the current branch."""
        raise NotImplementedError

    @abstractmethod
    def push(self, remote: str, branch: BranchName, *, force_with_lease: bool = False) -> None:
        """Push `branch` to `remote`."""
        raise NotImplementedError
