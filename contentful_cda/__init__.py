"""
Async client for the Contentful Content Delivery API.

Builds an authenticated, GET-only HTTP client bound to one space and wraps it
in thin helpers for spaces, content types, entries and assets.
"""

from contentful_cda.client import ContentfulApiError, ContentfulClient, create_client
from contentful_cda.config import NormalizedRequestConfig, normalize
from contentful_cda.environment import RuntimeEnvironment, detect_environment
from contentful_cda.http_client import HttpClient, TransportError, create_http_client
from contentful_cda.settings import ClientParameters, MissingParameterError
from contentful_cda.version import __version__

__all__ = [
    "ClientParameters",
    "ContentfulApiError",
    "ContentfulClient",
    "HttpClient",
    "MissingParameterError",
    "NormalizedRequestConfig",
    "RuntimeEnvironment",
    "TransportError",
    "__version__",
    "create_client",
    "create_http_client",
    "detect_environment",
    "normalize",
]
