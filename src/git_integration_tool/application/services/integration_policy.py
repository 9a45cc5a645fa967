from __future__ import annotations
"""Destination-branch selection for integration runs."""

from git_integration_tool.domain.entities import BranchName, BranchPolicy


def normalize_message(message: str | None) -> str | None:
    """Treat missing, empty and whitespace-only messages alike as absent."""
    if message is None:
        return None
    stripped = message.strip()
    return stripped if stripped else None


def resolve_destination_branch(message: str | None, policy: BranchPolicy) -> BranchName:
    """Pick where an integration run merges trunk into.

    An explicit message means the operator wants the result landed on trunk;
    without one, routine work goes to the integration branch.
    """
    if normalize_message(message) is not None:
        return policy.trunk_branch
    return policy.integration_branch
