"""Validation and normalization of client parameters into request configuration."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import httpx

from contentful_cda.environment import RuntimeEnvironment
from contentful_cda.settings import ClientParameters, MissingParameterError
from contentful_cda.user_agent import get_user_agent_header
from contentful_cda.version import __version__

DEFAULT_HOSTNAME = "cdn.contentful.com"
PREVIEW_HOSTNAME = "preview.contentful.com"
DELIVERY_CONTENT_TYPE = "application/vnd.contentful.delivery.v1+json"
SDK_NAME = f"contentful-cda.py/{__version__}"

LinkResolver = Callable[[Mapping[str, Any] | None], bool]


@dataclass(frozen=True, slots=True)
class NormalizedRequestConfig:
    """Validated, defaulted parameters consumed by the HTTP client factory."""

    space: str
    access_token: str
    insecure: bool
    host: str | None
    default_hostname: str
    headers: Mapping[str, str]
    resolve_links: bool
    user_agent: str
    proxy: str | None = None
    transport: httpx.AsyncBaseTransport | None = None
    timeout: float = 30.0


def force_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set ``name`` on ``headers``, dropping any case-insensitive duplicates first."""
    lowered = name.lower()
    for existing in [key for key in headers if key.lower() == lowered]:
        del headers[existing]
    headers[name] = value


def create_link_resolver(resolve_links: bool) -> LinkResolver:
    """Return a predicate deciding per query whether links should be resolved."""

    def should_links_resolve(query: Mapping[str, Any] | None = None) -> bool:
        if query and "resolveLinks" in query:
            return bool(query["resolveLinks"])
        return resolve_links

    return should_links_resolve


def normalize(
    params: ClientParameters,
    environment: RuntimeEnvironment | None = None,
) -> NormalizedRequestConfig:
    if not params.access_token:
        raise MissingParameterError("access_token")
    if not params.space:
        raise MissingParameterError("space")

    resolve_links = True if params.resolve_links is None else bool(params.resolve_links)
    user_agent = get_user_agent_header(
        SDK_NAME,
        params.application,
        params.integration,
        environment=environment,
    )

    headers = dict(params.headers or {})
    force_header(headers, "Content-Type", DELIVERY_CONTENT_TYPE)
    force_header(headers, "X-Contentful-User-Agent", user_agent)

    return NormalizedRequestConfig(
        space=params.space,
        access_token=params.access_token,
        insecure=params.insecure,
        host=params.host,
        default_hostname=DEFAULT_HOSTNAME,
        headers=MappingProxyType(headers),
        resolve_links=resolve_links,
        user_agent=user_agent,
        proxy=params.proxy,
        transport=params.transport,
        timeout=params.timeout,
    )
