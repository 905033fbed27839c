"""Error types raised by the job_deck client core."""

from typing import Optional


class JobDeckError(Exception):
    """Base class for every job_deck failure."""
    pass


class ValidationError(JobDeckError):
    """A required field was missing. Raised before any network call."""
    pass


class RequestError(JobDeckError):
    """Backend answered with a non-success status, or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body  # raw response text, when there was one


class NotFoundError(RequestError):
    """The id does not exist or is not owned by the caller."""

    def __init__(self, message: str = "Not found", status_code: Optional[int] = 404, body: Optional[str] = None):
        super().__init__(message, status_code, body)


class PersistenceWarning(UserWarning):
    """Local snapshot could not be read or written. Only ever logged."""
    pass
