class CanvasError(Exception):
    """Base exception for all Canvas API client errors."""


class CanvasNetworkError(CanvasError):
    """Raised when a Canvas call fails due to network/infrastructure issues."""


class CanvasApiError(CanvasError):
    """Raised when Canvas answers with an unexpected error status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
