"""
PersistenceError - Raised when the store or a transaction fails.
Maps to: HTTP 500 Internal Server Error
"""


class PersistenceError(Exception):
    """Storage or transaction failure, wrapping the driver error."""

    def __init__(self, message: str = "Storage failure", cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause
