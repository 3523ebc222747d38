"""Content-addressed metadata: gateway URL rewrite, fetch and publish."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx

from diamond_gateway.config import AppSettings
from diamond_gateway.errors import EncodingError, ParseError, ResolutionError, TransportError
from diamond_gateway.observability.logging import get_logger
from diamond_gateway.types import JsonDict

IPFS_SCHEME = "ipfs://"
DEFAULT_GATEWAY_URL = "https://nftstorage.link/ipfs/"
DEFAULT_UPLOAD_URL = "https://api.nft.storage/upload"


def serialize_content(content: Mapping[str, Any]) -> bytes:
    try:
        return json.dumps(dict(content), sort_keys=True, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"metadata is not JSON-serializable: {exc}") from exc


def to_gateway_location(uri: str | None, gateway_url: str = DEFAULT_GATEWAY_URL) -> str | None:
    """Rewrite ``ipfs://<cid>/<path>`` to ``<gateway_url><cid>/<path>``.

    Anything else yields ``None``, the "no content" signal.
    """
    if not uri or not uri.startswith(IPFS_SCHEME):
        return None
    base = gateway_url if gateway_url.endswith("/") else f"{gateway_url}/"
    return f"{base}{uri[len(IPFS_SCHEME):]}"


def _extract_cid(payload: Any) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("value")
    if isinstance(value, Mapping) and isinstance(value.get("cid"), str):
        return str(value["cid"])
    if isinstance(payload.get("cid"), str):
        return str(payload["cid"])
    return None


class ContentResolver:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        gateway_url: str = DEFAULT_GATEWAY_URL,
        upload_url: str = DEFAULT_UPLOAD_URL,
        api_token: str = "",
    ) -> None:
        self._client = client
        self._gateway_url = gateway_url
        self._upload_url = upload_url
        self._api_token = api_token

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        client: httpx.AsyncClient | None = None,
    ) -> ContentResolver:
        return cls(
            client or httpx.AsyncClient(timeout=settings.http_timeout_seconds),
            gateway_url=settings.content_gateway_url,
            upload_url=settings.content_upload_url,
            api_token=settings.content_api_token,
        )

    def to_fetchable_location(self, uri: str | None) -> str | None:
        return to_gateway_location(uri, self._gateway_url)

    async def fetch_json(self, uri: str | None) -> JsonDict:
        location = self.to_fetchable_location(uri)
        if location is None:
            raise ResolutionError(f"not a content-addressed URI: {uri!r}")

        try:
            response = await self._client.get(location)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"fetching {location} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(f"content at {uri} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise ParseError(f"content at {uri} is not a JSON object")
        return payload

    async def publish(self, content: Mapping[str, Any]) -> str:
        """Store ``content`` and return its ``ipfs://`` URI.

        Equal records are not guaranteed to map to equal URIs; that depends on
        the backend.
        """
        body = serialize_content(content)
        headers = {"Content-Type": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        try:
            response = await self._client.post(self._upload_url, content=body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"publishing metadata failed: {exc}") from exc

        try:
            cid = _extract_cid(response.json())
        except ValueError as exc:
            raise ParseError("upload response is not valid JSON") from exc
        if cid is None:
            raise ParseError("upload response carries no content identifier")

        uri = f"{IPFS_SCHEME}{cid}"
        get_logger("content_resolver").info("metadata_published", uri=uri, size=len(body))
        return uri

    async def aclose(self) -> None:
        await self._client.aclose()
