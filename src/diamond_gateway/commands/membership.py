from __future__ import annotations

from argparse import Namespace

from diamond_gateway.chains import resolve_profile
from diamond_gateway.clients.membership import MembershipClient, encode_membership_change
from diamond_gateway.commands.common import failed, run_with_context, settings_for
from diamond_gateway.config import AppSettings
from diamond_gateway.context import GatewayContext
from diamond_gateway.domain.changes import MembershipParameterChange
from diamond_gateway.errors import GatewayError
from diamond_gateway.types import CommandResult, CommandStatus, JsonDict


def run_membership_info(args: Namespace, settings: AppSettings) -> CommandResult:
    owner = str(getattr(args, "owner", "") or "").strip()

    async def _info(context: GatewayContext) -> JsonDict:
        client = MembershipClient(context)
        details: JsonDict = {
            "chain": context.profile.chain,
            "membership_address": client.membership_address,
            "mint_price": str(await client.get_mint_price()),
            "gas_token_symbol": context.profile.gas_token_symbol,
            "max_supply": await client.get_max_supply(),
            "total_supply": await client.get_total_supply(),
        }
        if owner:
            details["owner"] = owner
            details["balance"] = await client.get_balance(owner)
        return details

    return run_with_context("membership-info", args, settings, _info)


def run_encode_membership_change(args: Namespace, settings: AppSettings) -> CommandResult:
    """Encode calldata without touching the network."""
    change = MembershipParameterChange(
        max_supply=getattr(args, "max_supply", None),
        mint_price=getattr(args, "mint_price", None),
    )
    profile = resolve_profile(settings_for(args, settings).chain)
    try:
        calldatas = encode_membership_change(profile, change)
    except GatewayError as exc:
        return failed("encode-membership-change", exc)

    return CommandResult(
        command="encode-membership-change",
        status=CommandStatus.OK,
        details={
            "chain": profile.chain,
            "target": profile.addresses.diamond,
            "calldatas": ["0x" + calldata.hex() for calldata in calldatas],
        },
    )
