"""Client parameters and environment-driven loading for the delivery client."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

import httpx
from dotenv import load_dotenv

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


class MissingParameterError(ValueError):
    """Raised when a required client parameter is absent or empty."""

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"Expected parameter {parameter}")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean value (true/false).")


@dataclass(frozen=True, slots=True)
class ClientParameters:
    """Caller-supplied options for building a delivery client.

    ``resolve_links`` is ``None`` when the caller did not set it, which is
    distinct from an explicit ``False``. ``proxy``, ``transport`` and
    ``timeout`` are handed to httpx untouched.
    """

    space: str | None = None
    access_token: str | None = None
    insecure: bool = False
    host: str | None = None
    headers: Mapping[str, str] | None = None
    resolve_links: bool | None = None
    application: str | None = None
    integration: str | None = None
    proxy: str | None = None
    transport: httpx.AsyncBaseTransport | None = None
    timeout: float = 30.0

    @classmethod
    def load(cls) -> "ClientParameters":
        """
        Load parameters from environment variables.

        Python-dotenv is used so a local .env file can hold the space ID and
        token without exporting them globally.
        """
        load_dotenv()

        access_token = os.getenv("CONTENTFUL_ACCESS_TOKEN", "").strip()
        if not access_token:
            raise MissingParameterError("access_token")

        space = os.getenv("CONTENTFUL_SPACE_ID", "").strip()
        if not space:
            raise MissingParameterError("space")

        insecure_raw = os.getenv("CONTENTFUL_INSECURE", "").strip()
        insecure = _parse_bool("CONTENTFUL_INSECURE", insecure_raw) if insecure_raw else False

        resolve_links_raw = os.getenv("CONTENTFUL_RESOLVE_LINKS", "").strip()
        resolve_links = (
            _parse_bool("CONTENTFUL_RESOLVE_LINKS", resolve_links_raw) if resolve_links_raw else None
        )

        timeout_raw = os.getenv("CONTENTFUL_TIMEOUT", "").strip() or "30"
        try:
            timeout = float(timeout_raw)
        except ValueError as exc:
            raise ValueError("CONTENTFUL_TIMEOUT must be a numeric value.") from exc
        if timeout <= 0:
            raise ValueError("CONTENTFUL_TIMEOUT must be greater than zero.")

        return cls(
            space=space,
            access_token=access_token,
            insecure=insecure,
            host=os.getenv("CONTENTFUL_HOST", "").strip() or None,
            resolve_links=resolve_links,
            application=os.getenv("CONTENTFUL_APPLICATION", "").strip() or None,
            integration=os.getenv("CONTENTFUL_INTEGRATION", "").strip() or None,
            proxy=os.getenv("CONTENTFUL_PROXY", "").strip() or None,
            timeout=timeout,
        )
