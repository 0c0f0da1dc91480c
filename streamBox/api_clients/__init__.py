"""
api_clients
~~~~~~~~~~~
Thin wrappers around the external REST APIs (TMDb catalog, DummyJSON auth).
"""

from streamBox.api_clients.errors      import ApiError, AuthError, MissingApiKeyError, RateLimitError
from streamBox.api_clients.tmdb_client import TMDBClient
from streamBox.api_clients.auth_client import AuthClient

__all__ = ["ApiError", "AuthError", "MissingApiKeyError", "RateLimitError", "TMDBClient", "AuthClient"]
