"""Domain errors for undoable.

All exceptions inherit from UndoableError.
"""

from undoable.domain.errors.compensation import (
    ChainUnwindError,
    CompensationFailedError,
)

__all__: list[str] = ["CompensationFailedError", "ChainUnwindError"]
