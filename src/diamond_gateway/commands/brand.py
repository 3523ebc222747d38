from __future__ import annotations

from argparse import Namespace

from diamond_gateway.clients.brand import BrandClient
from diamond_gateway.commands.common import run_with_context
from diamond_gateway.config import AppSettings
from diamond_gateway.context import GatewayContext
from diamond_gateway.types import CommandResult, JsonDict


def run_brand_info(args: Namespace, settings: AppSettings) -> CommandResult:
    with_metadata = bool(getattr(args, "with_metadata", False))

    async def _info(context: GatewayContext) -> JsonDict:
        client = BrandClient(context)
        details: JsonDict = {
            "chain": context.profile.chain,
            "name": await client.get_name(),
            "uri": await client.get_uri(),
            "metadata_uri": await client.get_metadata_uri(),
        }
        if with_metadata:
            details["metadata"] = await client.get_metadata()
        return details

    return run_with_context("brand-info", args, settings, _info)
