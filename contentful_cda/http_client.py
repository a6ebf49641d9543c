"""HTTP client factory for the Contentful Content Delivery API."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import httpx

from contentful_cda.config import NormalizedRequestConfig, force_header
from contentful_cda.environment import RuntimeEnvironment, detect_environment

logger = logging.getLogger(__name__)


class TransportError(RuntimeError):
    """A GET failed at the network level or returned a non-2xx status."""

    def __init__(self, message: str, *, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.response = response
        self.status_code = response.status_code if response is not None else None


def create_url(config: NormalizedRequestConfig) -> str:
    """Build ``{scheme}://{hostname}:{port}/spaces/{space}/``; the scheme comes only from ``insecure``."""
    hostname, _, port = (config.host or "").partition(":")
    hostname = hostname or config.default_hostname
    port = port or ("80" if config.insecure else "443")
    scheme = "http" if config.insecure else "https"
    base_url = f"{scheme}://{hostname}:{port}/spaces/"
    if config.space:
        base_url += f"{config.space}/"
    return base_url


def create_default_headers(
    config: NormalizedRequestConfig,
    environment: RuntimeEnvironment,
) -> dict[str, str]:
    headers = dict(config.headers)
    force_header(headers, "Authorization", f"Bearer {config.access_token}")

    # Browser-hosted interpreters refuse script-set user-agent and accept-encoding.
    if environment.server_side:
        force_header(headers, "user-agent", environment.runtime)
        force_header(headers, "Accept-Encoding", "gzip")
    return headers


@dataclass(frozen=True, slots=True)
class HttpClient:
    """GET-only client bound to a space base URL and a fixed default header set."""

    base_url: str
    default_headers: Mapping[str, str]
    _client: httpx.AsyncClient

    async def get(
        self,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Issue ``GET base_url + path`` and return the raw 2xx response."""
        url = f"{self.base_url}{path}"
        request_headers = dict(self.default_headers)
        for name, value in (headers or {}).items():
            force_header(request_headers, name, value)

        def _transport_error(message: str, *, exc: Exception | None = None) -> TransportError:
            logger.error(message, extra={"method": "GET", "url": url}, exc_info=exc)
            return TransportError(message)

        try:
            response = await self._client.get(
                url,
                params=dict(query) if query else None,
                headers=request_headers,
            )
        except httpx.TimeoutException as exc:
            raise _transport_error(f"Contentful request timed out (GET {url}).", exc=exc) from exc
        except httpx.RequestError as exc:
            raise _transport_error(f"Contentful request failed (GET {url}): {exc!s}", exc=exc) from exc

        if not response.is_success:
            snippet = response.text.strip()
            if len(snippet) > 512:
                snippet = f"{snippet[:512]}..."
            logger.warning(
                "Contentful responded with error",
                extra={"method": "GET", "url": url, "status_code": response.status_code},
            )
            raise TransportError(
                f"Contentful error ({response.status_code}) during GET {url}: {snippet or 'no body provided.'}",
                response=response,
            )

        return response

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()


def create_http_client(
    config: NormalizedRequestConfig,
    environment: RuntimeEnvironment | None = None,
) -> HttpClient:
    """
    Build an HttpClient for the configured space.

    ``proxy``, ``transport`` and ``timeout`` are passed to httpx as-is.
    """
    env = environment or detect_environment()
    base_url = create_url(config)
    default_headers = create_default_headers(config, env)
    logger.debug(
        "Creating Contentful HTTP client",
        extra={"base_url": base_url, "server_side": env.server_side},
    )
    return HttpClient(
        base_url=base_url,
        default_headers=MappingProxyType(default_headers),
        _client=httpx.AsyncClient(
            timeout=config.timeout,
            proxy=config.proxy,
            transport=config.transport,
        ),
    )
