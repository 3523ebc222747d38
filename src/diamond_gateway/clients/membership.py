from __future__ import annotations

from decimal import Decimal

from eth_utils import from_wei

from diamond_gateway.chains.registry import NetworkProfile
from diamond_gateway.clients.base import require_signer
from diamond_gateway.context import GatewayContext
from diamond_gateway.domain.changes import MembershipParameterChange
from diamond_gateway.errors import AddressNotDeployedError, ResolutionError
from diamond_gateway.evm.abi_codec import encode_function_call
from diamond_gateway.evm.contexts import SigningContext
from diamond_gateway.evm.gateway import FacetHandle
from diamond_gateway.observability.logging import get_logger
from diamond_gateway.types import FacetKind


def _membership_address(profile: NetworkProfile) -> str:
    address = profile.addresses.membership
    if not address:
        raise AddressNotDeployedError(profile.chain, FacetKind.MEMBERSHIP_TOKEN.value)
    return address


def encode_membership_change(profile: NetworkProfile, change: MembershipParameterChange) -> list[bytes]:
    """Calldata for the membership facet, setMaxSupply before setMintPrice."""
    abi = profile.abi_for(FacetKind.MEMBERSHIP_GOVERNANCE)
    return [
        encode_function_call(abi, call.function, call.args)
        for call in change.facet_calls(_membership_address(profile))
    ]


class MembershipClient:
    """Membership token reads, minting and mint-parameter calldata."""

    def __init__(self, context: GatewayContext) -> None:
        self._ctx = context

    @property
    def membership_address(self) -> str:
        return _membership_address(self._ctx.profile)

    def _facet(self, signer: SigningContext | None = None) -> FacetHandle:
        return self._ctx.facet(FacetKind.MEMBERSHIP_GOVERNANCE, signer)

    def _token(self) -> FacetHandle:
        return self._ctx.facet(FacetKind.MEMBERSHIP_TOKEN)

    async def get_mint_price_wei(self) -> int:
        return int(await self._facet().call("getMintPrice", self.membership_address))

    async def get_mint_price(self) -> Decimal:
        return Decimal(from_wei(await self.get_mint_price_wei(), "ether"))

    async def get_max_supply(self) -> int:
        return int(await self._facet().call("getMaxSupply", self.membership_address))

    async def get_total_supply(self) -> int:
        return int(await self._token().call("totalSupply"))

    async def get_balance(self, owner: str) -> int:
        return int(await self._token().call("balanceOf", owner))

    async def get_nft_image(self, token_id: int = 0) -> str:
        token_uri = await self._token().call("tokenURI", token_id)
        metadata = await self._ctx.content.fetch_json(token_uri)
        image = self._ctx.content.to_fetchable_location(metadata.get("image"))
        if image is None:
            raise ResolutionError(f"membership metadata image is not content-addressed: {metadata.get('image')!r}")
        return image

    async def mint(self, signer: SigningContext, recipient: str) -> str:
        """Mint one membership token, paying the configured on-chain mint price."""
        require_signer(signer)
        price = await self.get_mint_price_wei()
        get_logger("membership_client").info(
            "membership_mint",
            chain=self._ctx.profile.chain,
            recipient=recipient,
            value=price,
        )
        return await self._facet(signer).transact(
            "mint", self.membership_address, recipient, value=price
        )

    def build_parameter_change_calldata(self, change: MembershipParameterChange) -> list[bytes]:
        return encode_membership_change(self._ctx.profile, change)
