"""
Domain errors and their HTTP mapping.
Every error carries the status code and the message shown to the caller; store errors
keep internal detail separately so it is logged but never returned.
"""


class ReplateError(Exception):
    """Base error. Subclasses set status_code and a default message."""

    status_code = 500
    message = "Internal server error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ReplateError):
    """Missing or malformed caller input."""

    status_code = 400
    message = "Invalid request."


class DuplicateUser(ReplateError):
    status_code = 400
    message = "User already exists."


class InvalidCredentials(ReplateError):
    status_code = 401
    message = "Invalid credentials."


class NoToken(ReplateError):
    status_code = 401
    message = "Access denied. No token."


class InvalidToken(ReplateError):
    status_code = 403
    message = "Invalid or expired token."


class Forbidden(ReplateError):
    status_code = 403
    message = "You can only remove your own listings."


class NotFound(ReplateError):
    status_code = 404
    message = "Listing not found."


class StoreError(ReplateError):
    """Backing store failure. `detail` is for logs only."""

    def __init__(self, detail: str = "", message: str | None = None):
        super().__init__(message)
        self.detail = detail or self.message

    def __str__(self) -> str:
        return self.detail


class StoreUnavailable(StoreError):
    """Store unreachable, timed out, or answered with a non-success status."""

    status_code = 502
    message = "Document store unavailable."


class StoreWriteError(StoreError):
    """Store reachable but the write did not persist."""

    status_code = 500
    message = "Failed to save changes."
