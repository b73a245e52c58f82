"""Primitive: reversible actions for coroutine-based callers.

AsyncReversibleAction follows the same state machine as ReversibleAction.
Its forward and backward operations may be plain callables or coroutine
functions; any awaitable they return is awaited.

execute_chain_async() applies the chain semantics of execute_chain():
strictly sequential, LIFO unwind of prior successes on first failure,
commit-all on success. Steps are never run concurrently.

Usage:
    provision = AsyncReversibleAction(
        forward=client.create_volume,
        backward=client.delete_volume,
    )
    await execute_chain_async(provision, attach, mount)
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

import structlog

from undoable.domain.errors.compensation import (
    ChainUnwindError,
    CompensationFailedError,
)
from undoable.domain.primitives.reversible_action import ActionState, commit_all
from undoable.domain.primitives.unwind_stack import record_compensation_failure

log = structlog.get_logger()

# Zero-argument callables, sync or async
AsyncForwardOperation = Callable[[], Any] | Callable[[], Awaitable[Any]]
AsyncBackwardOperation = Callable[[], None] | Callable[[], Awaitable[None]]


async def _call(operation: Callable[[], Any]) -> Any:
    result = operation()
    if inspect.isawaitable(result):
        return await result
    return result


class AsyncReversibleAction:
    """A forward/backward operation pair driven from async code.

    Same contract as ReversibleAction: execute() arms before running
    forward, undo() runs backward at most once per activation, commit()
    defuses. Not safe for concurrent activation.
    """

    def __init__(
        self,
        forward: AsyncForwardOperation,
        backward: AsyncBackwardOperation,
        name: str | None = None,
    ) -> None:
        self._forward = forward
        self._backward = backward
        self._state = ActionState.UNARMED
        self.name = name or getattr(forward, "__name__", "action")

    @property
    def state(self) -> ActionState:
        return self._state

    @property
    def is_armed(self) -> bool:
        return self._state is ActionState.ARMED

    @property
    def committed(self) -> bool:
        return self._state is not ActionState.ARMED

    async def execute(self) -> Any:
        """Arm the compensation, then run (and await) the forward operation."""
        self._state = ActionState.ARMED
        result = await _call(self._forward)
        log.debug("action_executed", action=self.name)
        return result

    async def undo(self) -> None:
        """Run the compensation if armed; otherwise do nothing."""
        if self._state is not ActionState.ARMED:
            return
        self._state = ActionState.COMMITTED
        log.debug("action_undone", action=self.name)
        await _call(self._backward)

    def commit(self) -> None:
        self._state = ActionState.COMMITTED

    def __repr__(self) -> str:
        return f"AsyncReversibleAction(name={self.name!r}, state={self._state.value})"


async def execute_chain_async(
    *actions: AsyncReversibleAction,
    strict_compensation: bool = False,
) -> None:
    """Execute async actions in order, unwinding prior successes on failure.

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
    executed: list[AsyncReversibleAction] = []

    for position, action in enumerate(actions, start=1):
        try:
            await action.execute()
        except BaseException as e:
            chain_log.info(
                "chain_unwinding",
                failed_action=action.name,
                failed_position=position,
                error=str(e),
                error_type=type(e).__name__,
                rollback_count=len(executed),
            )
            failures: list[CompensationFailedError] = []
            for done in reversed(executed):
                try:
                    await done.undo()
                except Exception as rollback_error:
                    failures.append(
                        record_compensation_failure(chain_log, done.name, rollback_error)
                    )
            chain_log.info("unwind_completed", failed_compensations=len(failures))
            if failures and strict_compensation and isinstance(e, Exception):
                raise ChainUnwindError(e, failures) from e
            raise
        executed.append(action)

    commit_all(*actions)
    chain_log.debug("chain_committed")
