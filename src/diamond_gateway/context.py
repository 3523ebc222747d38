from __future__ import annotations

from dataclasses import dataclass, field

import httpx
from eth_account.signers.local import LocalAccount

from diamond_gateway.chains.registry import NetworkProfile, resolve_profile
from diamond_gateway.config import AppSettings
from diamond_gateway.content.resolver import ContentResolver
from diamond_gateway.errors import ExecutionContextError
from diamond_gateway.evm.contexts import (
    ReadContext,
    Web3ProviderFactory,
    Web3ReadContext,
    Web3SigningContext,
)
from diamond_gateway.evm.gateway import ContractGateway, FacetHandle
from diamond_gateway.types import FacetKind


@dataclass(slots=True, frozen=True)
class GatewayContext:
    """Everything a client operation needs, built once by the application."""

    profile: NetworkProfile
    reader: ReadContext
    content: ContentResolver
    gateway: ContractGateway = field(default_factory=ContractGateway)

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> GatewayContext:
        profile = resolve_profile(settings.chain)
        if settings.rpc_url:
            profile = profile.with_rpc_url(settings.rpc_url)
        w3 = Web3ProviderFactory(settings).create(profile)
        return cls(
            profile=profile,
            reader=Web3ReadContext(w3),
            content=ContentResolver.from_settings(settings, http_client),
            gateway=ContractGateway(cache=settings.handle_cache_enabled),
        )

    def facet(self, facet_kind: FacetKind | str, context: ReadContext | None = None) -> FacetHandle:
        return self.gateway.get_facet(self.profile, facet_kind, context or self.reader)

    def signing_context(self, account: LocalAccount) -> Web3SigningContext:
        if not isinstance(self.reader, Web3ReadContext):
            raise ExecutionContextError("signing contexts need a web3-backed read context")
        return Web3SigningContext(self.reader.w3, account)

    async def aclose(self) -> None:
        await self.content.aclose()
