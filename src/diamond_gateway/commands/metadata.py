from __future__ import annotations

from argparse import Namespace

from diamond_gateway.commands.common import run_with_context
from diamond_gateway.config import AppSettings
from diamond_gateway.content.resolver import to_gateway_location
from diamond_gateway.context import GatewayContext
from diamond_gateway.types import CommandResult, CommandStatus, JsonDict


def run_resolve_uri(args: Namespace, settings: AppSettings) -> CommandResult:
    uri = str(getattr(args, "uri", "")).strip()
    location = to_gateway_location(uri, settings.content_gateway_url)
    return CommandResult(
        command="resolve-uri",
        status=CommandStatus.OK,
        details={"uri": uri, "location": location, "content_addressed": location is not None},
    )


def run_fetch_metadata(args: Namespace, settings: AppSettings) -> CommandResult:
    uri = str(getattr(args, "uri", "")).strip()

    async def _fetch(context: GatewayContext) -> JsonDict:
        return {"uri": uri, "metadata": await context.content.fetch_json(uri)}

    return run_with_context("fetch-metadata", args, settings, _fetch)
