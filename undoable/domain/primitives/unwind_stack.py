"""Primitive: an explicit LIFO stack of actions awaiting rollback.

Each successfully executed action is pushed onto the stack. On failure the
stack is unwound: actions are popped and undone, last pushed first. On
success the stack is released: every action is committed and nothing is
undone.

Used as a context manager it behaves like scope-exit deferred cleanup:

    with UnwindStack() as stack:
        create_bucket.execute()
        stack.push(create_bucket)
        create_user.execute()
        stack.push(create_user)
    # Exception inside the block: create_user undone, then create_bucket,
    # and the exception is re-raised.
    # Normal exit: both actions committed.

Compensations are assumed never to raise. If one does, the failure is
logged and the unwind continues with the remaining actions.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any

import structlog

from undoable.domain.errors.compensation import (
    ChainUnwindError,
    CompensationFailedError,
)
from undoable.domain.primitives.reversible_action import (
    ReversibleAction,
    commit_all,
)

log = structlog.get_logger()


def record_compensation_failure(
    logger: Any, action_name: str, error: Exception
) -> CompensationFailedError:
    """Log a compensation that raised during an unwind and wrap it.

    Shared by the sync and async unwind paths so both emit the same
    `compensation_failed` event.
    """
    logger.error(
        "compensation_failed",
        action=action_name,
        error=str(error),
        error_type=type(error).__name__,
    )
    return CompensationFailedError(action_name, error)


class UnwindStack:
    """LIFO stack of executed actions with unwind/release semantics.

    Attributes:
        strict_compensation: When True, leaving the context with an
            exception raises ChainUnwindError if any compensation failed.
    """

    def __init__(self, strict_compensation: bool = False) -> None:
        self.strict_compensation = strict_compensation
        self._actions: list[ReversibleAction] = []

    def push(self, action: ReversibleAction) -> None:
        """Record an action whose compensation must run on unwind."""
        self._actions.append(action)

    def unwind(self) -> list[CompensationFailedError]:
        """Pop and undo every action, most recently pushed first.

        Returns:
            One CompensationFailedError per compensation that raised, in
            the order the failures occurred. Empty when all succeeded.
        """
        failures: list[CompensationFailedError] = []
        while self._actions:
            action = self._actions.pop()
            try:
                action.undo()
            except Exception as e:
                failures.append(record_compensation_failure(log, action.name, e))
        return failures

    def release(self) -> None:
        """Commit every pushed action and empty the stack without undoing."""
        commit_all(*self._actions)
        self._actions.clear()

    def __len__(self) -> int:
        return len(self._actions)

    def __bool__(self) -> bool:
        return bool(self._actions)

    def __enter__(self) -> UnwindStack:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        """Unwind on exception, release otherwise.

        Returns:
            False - the original exception, if any, is always re-raised
            unless strict mode replaces it with ChainUnwindError. Only
            Exception subclasses are replaced; KeyboardInterrupt, SystemExit
            and CancelledError always propagate as they are.
        """
        if exc_val is None:
            self.release()
            return False

        log.info(
            "unwind_started",
            error=str(exc_val),
            error_type=exc_type.__name__ if exc_type else "Unknown",
            rollback_count=len(self._actions),
        )
        failures = self.unwind()
        log.info("unwind_completed", failed_compensations=len(failures))

        if failures and self.strict_compensation and isinstance(exc_val, Exception):
            raise ChainUnwindError(exc_val, failures) from exc_val
        return False
