"""Custom exceptions for projection lookups.

These exceptions are raised at the registry boundary, never from the
per-frame grid computation.
"""


class ProjectionError(Exception):
    """Base exception for all projection-related errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize projection error with optional code context.

        Args:
            message: Human-readable error description.
            code: Projection code that caused the error.
        """
        self.code = code
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with code context if available."""
        if self.code:
            return f"{self.message} (code: {self.code})"
        return self.message


class UnknownProjectionError(ProjectionError):
    """Raised when a projection code is not registered.

    Callers that must not fail (such as the status classifier) check
    membership first instead of catching this.
    """

    pass
