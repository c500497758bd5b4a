from __future__ import annotations


class BackendError(Exception):
    """A call to the REST backend failed.

    ``status_code`` is None when the request never got an HTTP answer.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(BackendError):
    """The backend rejected the bearer token (HTTP 401)."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401)
