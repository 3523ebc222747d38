from __future__ import annotations

from argparse import Namespace

from diamond_gateway.chains import FALLBACK_CHAIN, PROFILES, known_chains, resolve_profile
from diamond_gateway.commands.common import settings_for
from diamond_gateway.config import AppSettings
from diamond_gateway.types import CommandResult, CommandStatus


def run_list_chains(_: Namespace, __: AppSettings) -> CommandResult:
    return CommandResult(
        command="list-chains",
        status=CommandStatus.OK,
        details={
            "chains": [
                {
                    "chain": name,
                    "chain_id": PROFILES[name].chain_id,
                    "chain_name": PROFILES[name].chain_name,
                    "diamond_deployed": bool(PROFILES[name].addresses.diamond),
                }
                for name in known_chains()
            ],
            "fallback": FALLBACK_CHAIN,
        },
    )


def run_show_chain(args: Namespace, settings: AppSettings) -> CommandResult:
    requested = settings_for(args, settings).chain
    profile = resolve_profile(requested)
    return CommandResult(
        command="show-chain",
        status=CommandStatus.OK,
        details={
            **profile.as_dict(),
            "requested_chain": requested,
            "fallback_used": requested != profile.chain,
            "wallet": profile.wallet_add_chain_params(),
        },
    )
