from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI

from diamond_gateway.config import AppSettings, get_settings
from diamond_gateway.context import GatewayContext
from diamond_gateway.errors import GatewayError
from diamond_gateway.evm.contexts import ChainProbe
from diamond_gateway.types import JsonDict


@dataclass(slots=True, frozen=True)
class GatewayHealth:
    chain: str
    rpc_status: str
    chain_id_status: str
    diamond_status: str

    @property
    def ready(self) -> bool:
        return self.rpc_status == "ok" and self.chain_id_status == "ok"

    def as_dict(self) -> JsonDict:
        return {
            "chain": self.chain,
            "status": "ready" if self.ready else "degraded",
            "rpc_status": self.rpc_status,
            "chain_id_status": self.chain_id_status,
            "diamond_status": self.diamond_status,
        }


async def probe_gateway(context: GatewayContext) -> GatewayHealth:
    profile = context.profile
    diamond_status = "deployed" if profile.addresses.diamond else "not_deployed"
    reader = context.reader
    if not isinstance(reader, ChainProbe):
        return GatewayHealth(profile.chain, "unknown", "unknown", diamond_status)

    if not await reader.is_connected():
        return GatewayHealth(profile.chain, "unreachable", "unknown", diamond_status)

    try:
        chain_id = await reader.chain_id()
    except GatewayError:
        return GatewayHealth(profile.chain, "error", "unknown", diamond_status)

    chain_id_status = "ok" if chain_id == profile.chain_id else f"mismatch:{chain_id}"
    return GatewayHealth(profile.chain, "ok", chain_id_status, diamond_status)


def build_health_app(settings: AppSettings, context: GatewayContext) -> FastAPI:
    """The app owns ``context`` and closes it on shutdown."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await context.aclose()

    app = FastAPI(
        title=f"diamond-gateway-{context.profile.chain}",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/livez")
    async def livez() -> dict[str, str]:
        return {"status": "ok", "chain": context.profile.chain, "app_env": settings.app_env}

    @app.get("/readyz")
    async def readyz() -> JsonDict:
        return (await probe_gateway(context)).as_dict()

    @app.get("/chain")
    async def chain() -> JsonDict:
        return {
            **context.profile.as_dict(),
            "wallet": context.profile.wallet_add_chain_params(),
        }

    return app


def default_health_app() -> FastAPI:
    settings = get_settings()
    return build_health_app(settings, GatewayContext.from_settings(settings))
