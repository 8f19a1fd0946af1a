class ValidationError(Exception):
    """Raised when the regulatory validation engine fails."""


class ValidationNetworkError(ValidationError):
    """Raised when the validation call fails due to network/infrastructure issues."""


class ValidationResponseError(ValidationError):
    """Raised when the validation engine returns an unusable response."""
