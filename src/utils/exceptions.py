"""Custom exception classes."""


class ValidationError(Exception):
    """Raised when a registration payload is missing or has a malformed field."""

    def __init__(self, field: str, message: str = None):
        self.field = field
        self.message = message or f"Missing required field: {field}"
        super().__init__(self.message)


class StoreError(Exception):
    """Raised when the record store cannot be reached or rejects a request."""
    pass


class DuplicateRegistrationError(StoreError):
    """Raised when an insert collides with an existing registration ID."""
    pass


class RegistrationNotFoundError(StoreError):
    """Raised when a status update targets a record that doesn't exist."""
    pass


class NotificationError(Exception):
    """Raised when the email provider refuses or fails to send a message."""
    pass


class InvalidStatusError(Exception):
    """Raised when a status value is outside pending/approved/rejected."""

    def __init__(self, status):
        self.status = status
        super().__init__(f"Invalid status: {status!r}")


class ConfigurationError(Exception):
    """Raised when required environment settings are missing."""
    pass
