"""Primitive: execute a chain of reversible actions with unwind on failure.

Actions run one after the other. The first action that raises stops the
chain; every action that succeeded before it is undone in reverse order
and the failing action's exception is re-raised unchanged. The failing
action itself is never undone. If all actions succeed they are all
committed and no compensation runs.

Example trace for four actions where the third raises:

    execute action1
    execute action2
    action3 raises
    undo action2
    undo action1

Usage:
    execute_chain(create_bucket, create_user, grant_access)

    chain = ActionChain((create_bucket, create_user, grant_access))
    chain.execute()
    chain.execute()  # Safe to re-run; each execute() re-arms its action
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import uuid4

import structlog

from undoable.domain.primitives.reversible_action import ReversibleAction
from undoable.domain.primitives.unwind_stack import UnwindStack

log = structlog.get_logger()


def execute_chain(
    *actions: ReversibleAction,
    strict_compensation: bool = False,
) -> None:
    """Execute actions in order, unwinding prior successes on first failure.

    Args:
        *actions: Actions to execute, in order. May be empty.
        strict_compensation: Raise ChainUnwindError instead of the original
            error if a compensation raises during the unwind.

    Raises:
        Exception: The first failing forward operation's exception,
            unchanged, after all previously successful actions are undone.
        ChainUnwindError: Only in strict mode, when a compensation failed.
    """
    chain_log = log.bind(chain_id=str(uuid4()), action_count=len(actions))
    chain_log.debug("chain_started")

    with UnwindStack(strict_compensation=strict_compensation) as stack:
        for position, action in enumerate(actions, start=1):
            try:
                action.execute()
            except Exception as e:
                chain_log.info(
                    "chain_unwinding",
                    failed_action=action.name,
                    failed_position=position,
                    error=str(e),
                    error_type=type(e).__name__,
                    rollback_count=len(stack),
                )
                raise
            stack.push(action)

    chain_log.debug("chain_committed")


@dataclass(frozen=True)
class ActionChain:
    """An ordered, re-runnable sequence of reversible actions.

    Attributes:
        actions: The actions, in execution order.
        strict_compensation: See execute_chain().
    """

    actions: tuple[ReversibleAction, ...]
    strict_compensation: bool = False

    @classmethod
    def of(
        cls,
        actions: Iterable[ReversibleAction],
        strict_compensation: bool = False,
    ) -> ActionChain:
        """Build a chain from any iterable of actions."""
        return cls(actions=tuple(actions), strict_compensation=strict_compensation)

    def execute(self) -> None:
        """Run the chain. See execute_chain() for semantics."""
        execute_chain(*self.actions, strict_compensation=self.strict_compensation)

    def __len__(self) -> int:
        return len(self.actions)
