"""Primitive: an action that can be executed, undone, or committed.

A ReversibleAction pairs a forward operation with a compensating backward
operation. Executing the action arms the compensation; undoing it runs the
compensation at most once; committing it defuses the compensation so that
later undo calls do nothing.

State machine:
    UNARMED   --execute--> ARMED
    ARMED     --undo-----> COMMITTED   (backward runs)
    COMMITTED --undo-----> COMMITTED   (no-op)
    UNARMED   --undo-----> UNARMED     (no-op)
    any       --commit---> COMMITTED
    any       --execute--> ARMED

An action may be reused: every execute() starts a new activation and
re-arms the compensation, even if the forward operation then raises.

Usage:
    create = ReversibleAction(
        forward=lambda: bucket.create(),
        backward=lambda: bucket.delete(),
        name="create_bucket",
    )
    create.execute()
    try:
        configure_bucket()
    except Exception:
        create.undo()
        raise
    create.commit()
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

import structlog

log = structlog.get_logger()

ForwardOperation = Callable[[], Any]
BackwardOperation = Callable[[], None]


class SupportsCommit(Protocol):
    """Anything that can be committed."""

    def commit(self) -> None: ...


class ActionState(str, Enum):
    """Lifecycle state of a reversible action."""

    UNARMED = "unarmed"
    ARMED = "armed"
    COMMITTED = "committed"


class ReversibleAction:
    """A forward operation paired with its compensating operation.

    The backward operation is assumed never to raise. If it does while
    being called through undo(), the exception propagates to the caller
    and the action stays COMMITTED, so the compensation is never retried.

    Instances are not safe for concurrent activation; drive each one from
    a single thread of control at a time.

    Attributes:
        name: Label used in log events and repr.
    """

    def __init__(
        self,
        forward: ForwardOperation,
        backward: BackwardOperation,
        name: str | None = None,
    ) -> None:
        """Initialize the action in the UNARMED state.

        Args:
            forward: Zero-argument callable performing the effect. Signals
                failure by raising.
            backward: Zero-argument callable reverting the effect.
            name: Optional label. Defaults to the forward callable's name.
        """
        self._forward = forward
        self._backward = backward
        self._state = ActionState.UNARMED
        self.name = name or getattr(forward, "__name__", "action")

    @property
    def state(self) -> ActionState:
        return self._state

    @property
    def is_armed(self) -> bool:
        """True if a call to undo() would run the compensation."""
        return self._state is ActionState.ARMED

    @property
    def committed(self) -> bool:
        """True if a call to undo() would be a no-op."""
        return self._state is not ActionState.ARMED

    def execute(self) -> Any:
        """Arm the compensation, then run the forward operation.

        The action is armed before the forward operation is invoked, so a
        forward operation that raises still leaves the action undoable.

        Returns:
            Whatever the forward operation returns.

        Raises:
            Exception: Whatever the forward operation raises, unchanged.
        """
        self._state = ActionState.ARMED
        try:
            result = self._forward()
        except Exception as e:
            log.debug(
                "action_execute_failed",
                action=self.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        log.debug("action_executed", action=self.name)
        return result

    def undo(self) -> None:
        """Run the compensation if the action is armed.

        Idempotent: the compensation runs at most once per execute().
        """
        if self._state is not ActionState.ARMED:
            return
        self._state = ActionState.COMMITTED
        log.debug("action_undone", action=self.name)
        self._backward()

    def commit(self) -> None:
        """Defuse the compensation; subsequent undo() calls are no-ops."""
        self._state = ActionState.COMMITTED

    def __repr__(self) -> str:
        return f"ReversibleAction(name={self.name!r}, state={self._state.value})"


def commit_all(*actions: SupportsCommit) -> None:
    """Commit every given action, in order.

    Accepts sync and async actions alike; commit() is always synchronous.
    """
    for action in actions:
        action.commit()
