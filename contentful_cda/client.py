"""
Content Delivery API client for reading a single Contentful space.

``create_client`` validates parameters, builds the GET-only HttpClient and
wraps it in typed helper methods with consistent JSON decoding and logging.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from contentful_cda.config import LinkResolver, create_link_resolver, normalize
from contentful_cda.environment import RuntimeEnvironment
from contentful_cda.http_client import HttpClient, create_http_client
from contentful_cda.settings import ClientParameters

logger = logging.getLogger(__name__)


class ContentfulApiError(RuntimeError):
    """Represents a successful response whose body could not be used."""


def _require_non_empty(value: str, field_name: str) -> str:
    """Normalize and validate non-empty request arguments."""
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{field_name} must be a non-empty string.")
    return cleaned


@dataclass(slots=True)
class ContentfulClient:
    """Typed wrapper around the space-bound HttpClient."""

    http: HttpClient
    should_links_resolve: LinkResolver

    async def __aenter__(self) -> "ContentfulClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP resources."""
        await self.http.aclose()

    async def get_space(self) -> dict[str, Any]:
        """Fetch the space the client is bound to."""
        return await self._get("")

    async def get_content_type(self, content_type_id: str) -> dict[str, Any]:
        content_type_id_clean = _require_non_empty(content_type_id, "content_type_id")
        return await self._get(f"content_types/{content_type_id_clean}")

    async def get_content_types(self, query: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self._get("content_types", query)

    async def get_entry(
        self,
        entry_id: str,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Fetch one entry through the collection endpoint so ``include`` works."""
        entry_id_clean = _require_non_empty(entry_id, "entry_id")
        collection = await self.get_entries({**(query or {}), "sys.id": entry_id_clean})
        items = collection.get("items") or []
        if not items:
            raise ContentfulApiError(f"Entry {entry_id_clean} was not found.")
        return items[0]

    async def get_entries(self, query: Mapping[str, Any] | None = None) -> dict[str, Any]:
        resolve = self.should_links_resolve(query)
        logger.debug("Fetching entries", extra={"resolve_links": resolve})
        return await self._get("entries", query)

    async def get_asset(self, asset_id: str) -> dict[str, Any]:
        asset_id_clean = _require_non_empty(asset_id, "asset_id")
        return await self._get(f"assets/{asset_id_clean}")

    async def get_assets(self, query: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self._get("assets", query)

    async def _get(self, path: str, query: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Issue a GET and decode the JSON body; transport errors propagate unchanged."""
        params = {key: value for key, value in (query or {}).items() if key != "resolveLinks"}
        response = await self.http.get(path, query=params)
        try:
            data: dict[str, Any] = response.json()
        except json.JSONDecodeError as exc:
            logger.error("Contentful returned invalid JSON", extra={"path": path})
            raise ContentfulApiError(f"Contentful returned invalid JSON during GET {path}.") from exc
        return data


def create_client(
    params: ClientParameters | None = None,
    *,
    environment: RuntimeEnvironment | None = None,
    **options: Any,
) -> ContentfulClient:
    """
    Create a client for the Content Delivery API.

    Accepts a ``ClientParameters`` instance or the same fields as keyword
    arguments::

        client = create_client(space="mySpaceId", access_token="myAccessToken")

    Raises ``MissingParameterError`` before any network activity when
    ``access_token`` or ``space`` is missing.
    """
    if params is None:
        params = ClientParameters(**options)
    elif options:
        raise TypeError("Pass either ClientParameters or keyword options, not both.")

    config = normalize(params, environment)
    http = create_http_client(config, environment)
    return ContentfulClient(
        http=http,
        should_links_resolve=create_link_resolver(config.resolve_links),
    )
