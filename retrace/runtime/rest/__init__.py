"""REST runtime abstractions."""

from .http_client import HTTPClient
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner

__all__ = [
    "HTTPClient",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
]
