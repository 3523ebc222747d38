from __future__ import annotations

import asyncio
from argparse import Namespace
from collections.abc import Awaitable, Callable

from diamond_gateway.config import AppSettings
from diamond_gateway.context import GatewayContext
from diamond_gateway.errors import GatewayError
from diamond_gateway.types import CommandResult, CommandStatus, JsonDict

GatewayOperation = Callable[[GatewayContext], Awaitable[JsonDict]]


def settings_for(args: Namespace, settings: AppSettings) -> AppSettings:
    chain = getattr(args, "chain", None)
    if chain:
        return settings.model_copy(update={"chain": str(chain)})
    return settings


def open_context(settings: AppSettings) -> GatewayContext:
    return GatewayContext.from_settings(settings)


def failed(command: str, exc: GatewayError) -> CommandResult:
    return CommandResult(
        command=command,
        status=CommandStatus.FAILED,
        details={"error_kind": exc.kind, "error": exc.message},
    )


def run_with_context(
    command: str,
    args: Namespace,
    settings: AppSettings,
    operation: GatewayOperation,
) -> CommandResult:
    async def _run() -> JsonDict:
        context = open_context(settings_for(args, settings))
        try:
            return await operation(context)
        finally:
            await context.aclose()

    try:
        details = asyncio.run(_run())
    except GatewayError as exc:
        return failed(command, exc)
    return CommandResult(command=command, status=CommandStatus.OK, details=details)
