from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from diamond_gateway.clients.governance import GovernanceClient
from diamond_gateway.config import get_settings
from diamond_gateway.context import GatewayContext
from diamond_gateway.domain.proposal import Proposal
from diamond_gateway.errors import ContractRevertError, TransportError
from diamond_gateway.observability.logging import configure_logging, get_logger

ProposalCallback = Callable[[Proposal], Awaitable[None]]


@dataclass(slots=True)
class ProposalWatcher:
    """Polls the governance facet and reports proposals created since the last poll."""

    client: GovernanceClient
    chain: str
    poll_interval_seconds: float = 15.0
    last_seen: int = 0
    on_proposal: ProposalCallback | None = None

    async def run_once(self) -> list[Proposal]:
        logger = get_logger("proposal_watcher")
        count = await self.client.get_proposal_count()
        discovered: list[Proposal] = []
        for proposal_id in range(self.last_seen + 1, count + 1):
            proposal = await self.client.get_proposal(proposal_id)
            discovered.append(proposal)
            logger.info(
                "proposal_discovered",
                chain=self.chain,
                proposal_id=proposal.id,
                metadata_uri=proposal.metadata_uri,
                instructions=len(proposal.calldatas),
            )
            if self.on_proposal is not None:
                await self.on_proposal(proposal)
            self.last_seen = proposal_id
        return discovered

    async def run_forever(self) -> None:
        logger = get_logger("proposal_watcher")
        while True:
            try:
                await self.run_once()
            except (TransportError, ContractRevertError) as exc:
                logger.warning("proposal_watch_failed", chain=self.chain, error=exc.message)
            await asyncio.sleep(self.poll_interval_seconds)


async def run_worker() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    context = GatewayContext.from_settings(settings)
    watcher = ProposalWatcher(
        client=GovernanceClient(context),
        chain=context.profile.chain,
        poll_interval_seconds=settings.watch_poll_interval_seconds,
    )
    try:
        await watcher.run_forever()
    finally:
        await context.aclose()


if __name__ == "__main__":
    asyncio.run(run_worker())
