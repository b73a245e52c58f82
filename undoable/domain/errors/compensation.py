"""Compensation errors.

Compensating operations are assumed infallible. These errors exist to
report the cases where one broke that contract during a chain unwind.

Usage:
    try:
        execute_chain(a, b, c, strict_compensation=True)
    except ChainUnwindError as e:
        for failure in e.compensation_failures:
            log.error("compensation_failed", action=failure.action_name)
"""

from __future__ import annotations

from undoable.domain.exceptions import UndoableError


class CompensationFailedError(UndoableError):
    """A single compensating operation raised during an unwind.

    Attributes:
        action_name: Name of the action whose compensation failed.
        cause: The exception raised by the compensation.
    """

    def __init__(self, action_name: str, cause: BaseException) -> None:
        self.action_name = action_name
        self.cause = cause
        super().__init__(
            f"Compensation for action '{action_name}' failed: "
            f"{type(cause).__name__}: {cause}"
        )


class ChainUnwindError(UndoableError):
    """A chain failed and at least one compensation failed while unwinding.

    Only raised when strict compensation is enabled. The forward error that
    triggered the unwind is kept as `original_error` and is also set as
    `__cause__`.

    Attributes:
        original_error: Exception raised by the failing forward operation.
        compensation_failures: Failures in the order they occurred.
    """

    def __init__(
        self,
        original_error: BaseException,
        compensation_failures: list[CompensationFailedError],
    ) -> None:
        self.original_error = original_error
        self.compensation_failures = compensation_failures
        super().__init__(
            f"Chain failed with {type(original_error).__name__}: {original_error}; "
            f"{len(compensation_failures)} compensation(s) failed during unwind"
        )
