from __future__ import annotations
"""Domain check contracts and pipeline composition primitives."""

from abc import ABC, abstractmethod
from typing import Sequence

from .entities import ActionResult, WorkspaceContext


class Action(ABC):
    """Pluggable pre-integration check interface.

    Implementers should:
    - read required state from `WorkspaceContext`,
    - avoid touching the branch pointer or the index,
    - return an `ActionResult` describing success/failure.
    """

    @property
    def name(self) -> str:
        """Stable default check name used in summaries/logging."""
        return self.__class__.__name__

    @abstractmethod
    def execute(self, context: WorkspaceContext) -> ActionResult:
        """Execute the check against the working repository.

        Args:
            context: Mutable context for the current run.

        Returns:
            ActionResult with execution outcome details.
        """
        raise NotImplementedError


class ActionPipeline:
    """Ordered sequence of `Action` instances executed before integration."""

    def __init__(self, actions: Sequence[Action]) -> None:
        self._actions = tuple(actions)

    @property
    def actions(self) -> tuple[Action, ...]:
        return self._actions

    def run(self, context: WorkspaceContext, *, fail_fast: bool = True) -> list[ActionResult]:
        """Run configured checks in order.

        Args:
            context: Mutable per-run context.
            fail_fast: Stop executing remaining checks after the first failure.
        """
        results: list[ActionResult] = []
        for action in self._actions:
            result = action.execute(context)
            if not result.action_name:
                result.action_name = action.name
            results.append(result)
            if fail_fast and not result.success:
                break
        return results
