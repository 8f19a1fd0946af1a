class AuditError(Exception):
    """Raised when an audit record cannot be persisted."""


class UnknownUserError(AuditError):
    """Raised when the acting user does not exist in the user table."""
