class OrchestratorError(Exception):
    """Base exception for all label orchestration errors."""


class InvalidInputError(OrchestratorError):
    """Raised when a request is rejected before any remote call is issued."""


class ProcessingUnavailableError(OrchestratorError):
    """Raised when a remote engine call fails (timeout, non-2xx, open circuit)."""
