from __future__ import annotations

from argparse import Namespace

from diamond_gateway.clients.governance import GovernanceClient
from diamond_gateway.commands.common import run_with_context
from diamond_gateway.config import AppSettings
from diamond_gateway.context import GatewayContext
from diamond_gateway.errors import EncodingError
from diamond_gateway.types import CommandResult, CommandStatus, JsonDict


def _positive_int(raw_value: object) -> int | None:
    if isinstance(raw_value, bool):
        return None
    try:
        value = int(raw_value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


def run_list_proposals(args: Namespace, settings: AppSettings) -> CommandResult:
    raw_limit = getattr(args, "limit", None)
    limit = None if raw_limit is None else _positive_int(raw_limit)
    if raw_limit is not None and limit is None:
        return CommandResult(
            command="list-proposals",
            status=CommandStatus.FAILED,
            details={"error_kind": EncodingError.kind, "error": "limit must be a positive integer"},
        )

    async def _list(context: GatewayContext) -> JsonDict:
        client = GovernanceClient(context)
        count = await client.get_proposal_count()
        proposals = await client.get_proposals(count if limit is None else min(count, limit))
        return {
            "chain": context.profile.chain,
            "proposal_count": count,
            "proposals": [proposal.as_dict() for proposal in proposals],
        }

    return run_with_context("list-proposals", args, settings, _list)


def run_show_proposal(args: Namespace, settings: AppSettings) -> CommandResult:
    proposal_id = _positive_int(getattr(args, "proposal_id", None))
    if proposal_id is None:
        return CommandResult(
            command="show-proposal",
            status=CommandStatus.FAILED,
            details={"error_kind": EncodingError.kind, "error": "proposal_id must be a positive integer"},
        )
    with_metadata = bool(getattr(args, "with_metadata", False))

    async def _show(context: GatewayContext) -> JsonDict:
        client = GovernanceClient(context)
        proposal = await client.get_proposal(proposal_id)
        details: JsonDict = {
            "chain": context.profile.chain,
            "proposal": proposal.as_dict(),
            "vote_count": await client.get_vote_count(proposal_id),
            "vote_support": (await client.get_vote_support(proposal_id)).as_dict(),
            "finalized": await client.is_finalized(proposal_id),
            "instructions": [item.as_dict() for item in client.describe_instructions(proposal)],
        }
        if with_metadata:
            details["metadata"] = await client.get_proposal_metadata(proposal)
        return details

    return run_with_context("show-proposal", args, settings, _show)
