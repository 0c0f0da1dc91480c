class ApiError(Exception):
    """A remote API call failed (HTTP error, network error or bad payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ApiError):
    """HTTP 429 from the catalog API."""


class AuthError(ApiError):
    """Remote sign-in / profile / token refresh was rejected."""


class MissingApiKeyError(ApiError, RuntimeError):
    """No TMDb api key configured."""
