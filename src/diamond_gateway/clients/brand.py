from __future__ import annotations

import re

from diamond_gateway.context import GatewayContext
from diamond_gateway.domain.changes import BrandParameterChange
from diamond_gateway.evm.gateway import FacetHandle
from diamond_gateway.observability.logging import get_logger
from diamond_gateway.types import FacetKind, JsonDict

_HTTP_SCHEME = re.compile(r"^https?://")


class BrandClient:
    def __init__(self, context: GatewayContext) -> None:
        self._ctx = context

    def _facet(self) -> FacetHandle:
        return self._ctx.facet(FacetKind.BRAND)

    async def get_name(self) -> str:
        return str(await self._facet().call("getBrandName"))

    async def get_uri(self) -> str:
        """Brand URI without its http(s) scheme, as shown to users."""
        return _HTTP_SCHEME.sub("", str(await self._facet().call("getBrandURI")))

    async def get_metadata_uri(self) -> str:
        return str(await self._facet().call("getBrandMetadataURI"))

    async def get_metadata(self) -> JsonDict:
        return await self._ctx.content.fetch_json(await self.get_metadata_uri())

    async def build_parameter_change_calldata(self, change: BrandParameterChange) -> list[bytes]:
        """Encode brand updates for a governance proposal.

        Name and description live in the metadata record, so touching either
        republishes the record and points the brand at the new URI.
        """
        change.ensure_valid()
        facet = self._facet()
        calldatas: list[bytes] = []

        if change.touches_metadata:
            metadata_uri = await self.get_metadata_uri()
            metadata: JsonDict = {}
            if self._ctx.content.to_fetchable_location(metadata_uri) is not None:
                metadata = dict(await self._ctx.content.fetch_json(metadata_uri))
            if change.name is not None:
                metadata["name"] = change.name
            if change.description is not None:
                metadata["description"] = change.description

            new_metadata_uri = await self._ctx.content.publish(metadata)
            get_logger("brand_client").info(
                "brand_metadata_republished",
                previous_uri=metadata_uri,
                uri=new_metadata_uri,
            )
            if change.name is not None:
                calldatas.append(facet.encode("setBrandName", change.name))
            calldatas.append(facet.encode("setBrandMetadataURI", new_metadata_uri))

        if change.uri is not None:
            calldatas.append(facet.encode("setBrandURI", change.uri))
        return calldatas
