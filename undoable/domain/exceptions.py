"""Base exception classes for the undoable domain layer."""


class UndoableError(Exception):
    """Base exception for all library errors.

    Errors raised by caller-supplied forward operations are never wrapped
    in this type; it is reserved for failures of the library's own
    machinery, such as a compensation that broke its no-raise contract.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
