class ProcessorError(Exception):
    """Base exception for all bulk-delete errors."""


class InputFormatError(ProcessorError):
    """Raised when a mapping file line is not a 'userKey,filename' pair."""

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class UserNotFoundError(ProcessorError):
    """Raised when a user key does not resolve to a Canvas user."""


class ReportWriteError(ProcessorError):
    """Raised when the run report cannot be persisted."""
