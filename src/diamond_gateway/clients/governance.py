"""Proposal lifecycle against the governance facet.

Proposals move Open -> Finalized -> Executed on chain. This client only
issues the triggering calls and reads state; transition legality is the
facet's concern.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from eth_utils import is_hex, to_bytes

from diamond_gateway.clients.base import require_signer
from diamond_gateway.context import GatewayContext
from diamond_gateway.domain.changes import FacetCall, MembershipParameterChange, ParameterChange
from diamond_gateway.domain.metadata import MetadataContent, as_record
from diamond_gateway.domain.proposal import DecodedInstruction, Proposal, Vote, VoteSupportTally
from diamond_gateway.errors import AddressNotDeployedError, EncodingError
from diamond_gateway.evm.abi_codec import decode_function_call
from diamond_gateway.evm.contexts import SigningContext
from diamond_gateway.evm.gateway import FacetHandle
from diamond_gateway.observability.logging import get_logger
from diamond_gateway.types import FacetKind, JsonDict

# Facets tried, in order, when decoding proposal instructions for display.
_INSTRUCTION_FACETS: tuple[FacetKind, ...] = (
    FacetKind.MEMBERSHIP_GOVERNANCE,
    FacetKind.BRAND,
    FacetKind.GOVERNANCE,
    FacetKind.OWNERSHIP,
    FacetKind.DIAMOND_CUT,
)


def _coerce_calldata(raw: object, index: int) -> bytes:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)
    if isinstance(raw, str) and raw.startswith("0x") and is_hex(raw):
        return to_bytes(hexstr=raw)
    raise EncodingError(f"calldata[{index}] must be bytes or a 0x-prefixed hex string")


def _require_proposal_id(proposal_id: int) -> int:
    if isinstance(proposal_id, bool) or not isinstance(proposal_id, int) or proposal_id < 1:
        raise EncodingError("proposal_id must be a positive integer")
    return proposal_id


class GovernanceClient:
    def __init__(self, context: GatewayContext) -> None:
        self._ctx = context
        self._logger = get_logger("governance_client")

    def _governance(self, signer: SigningContext | None = None) -> FacetHandle:
        return self._ctx.facet(FacetKind.GOVERNANCE, signer)

    @property
    def governed_address(self) -> str:
        address = self._ctx.profile.addresses.diamond
        if not address:
            raise AddressNotDeployedError(self._ctx.profile.chain, FacetKind.GOVERNANCE.value)
        return address

    def build_parameter_change_calldata(self, changes: Sequence[ParameterChange]) -> list[bytes]:
        """Encode ``changes`` into calldata, preserving the order supplied.

        Pure: no network access, identical input gives identical bytes.
        """
        calldatas: list[bytes] = []
        for change in changes:
            if isinstance(change, MembershipParameterChange):
                membership = self._ctx.profile.addresses.membership
                if not membership:
                    raise AddressNotDeployedError(
                        self._ctx.profile.chain, FacetKind.MEMBERSHIP_TOKEN.value
                    )
                calls = change.facet_calls(membership)
            elif isinstance(change, FacetCall):
                calls = [change]
            else:
                raise EncodingError(f"unsupported parameter change: {type(change).__name__}")

            for call in calls:
                facet = self._ctx.facet(call.facet)
                calldatas.append(facet.encode(call.function, *call.args))
        return calldatas

    async def create_proposal(
        self,
        signer: SigningContext,
        content: MetadataContent | Mapping[str, Any],
    ) -> str:
        """Submit a discussion-only proposal carrying no on-chain action."""
        require_signer(signer)
        governance = self._governance(signer)
        metadata_uri = await self._ctx.content.publish(as_record(content))
        tx_hash = await governance.transact("propose", [], [], [], [], metadata_uri)
        self._logger.info(
            "proposal_submitted",
            chain=self._ctx.profile.chain,
            metadata_uri=metadata_uri,
            instructions=0,
            tx_hash=tx_hash,
        )
        return tx_hash

    async def create_proposal_with_instructions(
        self,
        signer: SigningContext,
        content: MetadataContent | Mapping[str, Any],
        calldatas: Sequence[bytes | str],
    ) -> str:
        require_signer(signer)
        if isinstance(calldatas, (str, bytes)) or not isinstance(calldatas, Sequence):
            raise EncodingError("calldatas must be a sequence of encoded calls")
        if len(calldatas) == 0:
            raise EncodingError(
                "instruction proposals need at least one calldata entry; "
                "use create_proposal for discussion-only proposals"
            )

        encoded = [_coerce_calldata(raw, index) for index, raw in enumerate(calldatas)]
        targets = [self.governed_address] * len(encoded)
        values = [0] * len(encoded)
        signatures = [""] * len(encoded)

        governance = self._governance(signer)
        metadata_uri = await self._ctx.content.publish(as_record(content))
        tx_hash = await governance.transact(
            "propose", targets, values, signatures, encoded, metadata_uri
        )
        self._logger.info(
            "proposal_submitted",
            chain=self._ctx.profile.chain,
            metadata_uri=metadata_uri,
            instructions=len(encoded),
            tx_hash=tx_hash,
        )
        return tx_hash

    async def cast_vote(self, signer: SigningContext, proposal_id: int, support: int) -> str:
        require_signer(signer)
        vote = Vote(proposal_id=proposal_id, voter=signer.address, support=support).ensure_valid()
        tx_hash = await self._governance(signer).transact("castVote", vote.proposal_id, int(vote.support))
        self._logger.info(
            "vote_cast",
            chain=self._ctx.profile.chain,
            proposal_id=vote.proposal_id,
            support=int(vote.support),
            voter=vote.voter,
        )
        return tx_hash

    async def get_proposal(self, proposal_id: int) -> Proposal:
        raw = await self._governance().call("getProposal", _require_proposal_id(proposal_id))
        return Proposal.from_chain(raw)

    async def get_proposal_count(self) -> int:
        return int(await self._governance().call("getProposalCount"))

    async def get_proposals(self, count: int) -> list[Proposal]:
        """Fetch proposals ``1..count`` inclusive, matching on-chain numbering."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise EncodingError("count must be a non-negative integer")
        proposals: list[Proposal] = []
        for proposal_id in range(1, count + 1):
            proposals.append(await self.get_proposal(proposal_id))
        return proposals

    async def get_vote_count(self, proposal_id: int) -> int:
        return int(await self._governance().call("getTotalVotes", _require_proposal_id(proposal_id)))

    async def get_vote_support(self, proposal_id: int) -> VoteSupportTally:
        against, for_, abstain = await self._governance().call(
            "getVoteSupport", _require_proposal_id(proposal_id)
        )
        return VoteSupportTally(against=int(against), for_=int(for_), abstain=int(abstain))

    async def is_finalized(self, proposal_id: int) -> bool:
        return bool(
            await self._governance().call("isVotingFinalized", _require_proposal_id(proposal_id))
        )

    async def finalize(self, signer: SigningContext, proposal_id: int) -> str:
        require_signer(signer)
        tx_hash = await self._governance(signer).transact("endVotingTest", _require_proposal_id(proposal_id))
        self._logger.info("proposal_finalized", chain=self._ctx.profile.chain, proposal_id=proposal_id)
        return tx_hash

    async def execute(self, signer: SigningContext, proposal_id: int) -> str:
        require_signer(signer)
        tx_hash = await self._governance(signer).transact("execute", _require_proposal_id(proposal_id))
        self._logger.info("proposal_executed", chain=self._ctx.profile.chain, proposal_id=proposal_id)
        return tx_hash

    async def get_quorum(self) -> int:
        return int(await self._governance().call("getQuorum"))

    async def get_proposal_duration(self) -> int:
        return int(await self._governance().call("getProposalDuration"))

    async def get_voting_streak(self, voter: str) -> int:
        return int(await self._governance().call("getVotingStreak", voter))

    async def get_voting_streak_multiplier(self, voter: str) -> int:
        return int(await self._governance().call("getVotingStreakMultiplier", voter))

    async def get_proposal_metadata(self, proposal: Proposal | int) -> JsonDict:
        if not isinstance(proposal, Proposal):
            proposal = await self.get_proposal(proposal)
        return await self._ctx.content.fetch_json(proposal.metadata_uri)

    def describe_instructions(self, proposal: Proposal) -> list[DecodedInstruction]:
        described: list[DecodedInstruction] = []
        for target, calldata in zip(proposal.targets, proposal.calldatas):
            described.append(self._describe(target, calldata))
        return described

    def _describe(self, target: str, calldata: bytes) -> DecodedInstruction:
        for kind in _INSTRUCTION_FACETS:
            try:
                function, args = decode_function_call(self._ctx.profile.abi_for(kind), calldata)
            except EncodingError:
                continue
            return DecodedInstruction(target=target, facet=kind.value, function=function, args=args)
        return DecodedInstruction(
            target=target,
            facet="unknown",
            function="0x" + bytes(calldata[:4]).hex(),
            args=(),
        )
