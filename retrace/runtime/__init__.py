"""Runtime layer: request execution shared by exchange connectors."""

from .rest import HTTPClient, ResponseAdapter, RestEndpointSpec, RestRunner

__all__ = [
    "HTTPClient",
    "ResponseAdapter",
    "RestEndpointSpec",
    "RestRunner",
]
