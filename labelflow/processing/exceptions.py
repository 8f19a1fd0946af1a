class ProcessingError(Exception):
    """Raised when the remote processing engine cannot complete a stage."""


class ProcessingNetworkError(ProcessingError):
    """Raised when the engine call fails due to network/infrastructure issues."""


class ProcessingResponseError(ProcessingError):
    """Raised when the engine answers with a non-success status or a malformed body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class CircuitOpenError(ProcessingError):
    """Raised when a call is refused because the circuit breaker is open."""
