"""Thin client for the Salesforce REST API.

Authenticate with an OAuth password grant, then call the REST endpoints
through :class:`SalesforceClient`. Responses are handed back as decoded
JSON without interpretation.
"""

from importlib.metadata import PackageNotFoundError, version

from .auth import Session, authenticate
from .client import SalesforceClient
from .config import Credentials, get_version, set_version
from .dispatch import RequestOptions, Response
from .exceptions import (
    AuthenticationError,
    MissingCredentialsError,
    RouteArityError,
    SalesforceAPIError,
    UnknownRouteError,
)

try:
    __version__ = version("salesforce-api")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

__all__ = [
    "AuthenticationError",
    "Credentials",
    "MissingCredentialsError",
    "RequestOptions",
    "Response",
    "RouteArityError",
    "SalesforceAPIError",
    "SalesforceClient",
    "Session",
    "UnknownRouteError",
    "authenticate",
    "get_version",
    "set_version",
]
