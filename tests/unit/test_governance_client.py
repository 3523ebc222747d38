from __future__ import annotations

import asyncio

import pytest
from helpers.content_store import InMemoryContentStore
from helpers.fake_diamond import ALICE, BOB, CAROL, DIAMOND_ADDRESS, MEMBERSHIP_ADDRESS, FakeDiamond, build_context

from diamond_gateway.clients.governance import GovernanceClient
from diamond_gateway.domain.changes import FacetCall, MembershipParameterChange
from diamond_gateway.domain.metadata import MetadataContent
from diamond_gateway.domain.proposal import Vote
from diamond_gateway.errors import ContractRevertError, EncodingError, ExecutionContextError
from diamond_gateway.evm.abi_codec import decode_function_call
from diamond_gateway.types import FacetKind, VoteSupport

CONTENT = MetadataContent(name="Raise mint price", description="Membership is underpriced")


def _client(diamond: FakeDiamond, store: InMemoryContentStore | None = None) -> GovernanceClient:
    return GovernanceClient(build_context(diamond, (store or InMemoryContentStore()).resolver()))


class TestBuildParameterChangeCalldata:
    def test_membership_change_encodes_facet_calls_in_order(self) -> None:
        client = _client(FakeDiamond())
        calldatas = client.build_parameter_change_calldata(
            [MembershipParameterChange(max_supply=250, mint_price="0.2")]
        )

        abi = FakeDiamond().profile.abis.membership_facet
        decoded = [decode_function_call(abi, calldata) for calldata in calldatas]
        assert decoded == [
            ("setMaxSupply", (MEMBERSHIP_ADDRESS, 250)),
            ("setMintPrice", (MEMBERSHIP_ADDRESS, 2 * 10**17)),
        ]

    def test_encoding_is_pure_and_deterministic(self) -> None:
        diamond = FakeDiamond()
        client = _client(diamond)
        changes = [
            MembershipParameterChange(max_supply=10),
            FacetCall(FacetKind.BRAND, "setBrandURI", ("https://acme.example",)),
        ]

        assert client.build_parameter_change_calldata(changes) == client.build_parameter_change_calldata(changes)
        assert diamond.reads == []
        assert diamond.transactions == []

    def test_unsupported_change_is_rejected(self) -> None:
        with pytest.raises(EncodingError, match="unsupported"):
            _client(FakeDiamond()).build_parameter_change_calldata(["setMintPrice"])  # type: ignore[list-item]


def test_create_proposal_publishes_metadata_and_proposes_without_actions() -> None:
    diamond = FakeDiamond()
    store = InMemoryContentStore()
    client = _client(diamond, store)

    asyncio.run(client.create_proposal(diamond.signer(ALICE), CONTENT))

    proposal = diamond.proposals[0]
    assert proposal.proposer == ALICE
    assert proposal.calldatas == ()
    assert store.get(proposal.metadata_uri)["name"] == "Raise mint price"


def test_create_proposal_requires_a_signer() -> None:
    diamond = FakeDiamond()
    store = InMemoryContentStore()

    with pytest.raises(ExecutionContextError):
        asyncio.run(_client(diamond, store).create_proposal(diamond, CONTENT))  # type: ignore[arg-type]
    assert store.requests == []


def test_instruction_proposal_builds_parallel_arrays() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    calldatas = client.build_parameter_change_calldata([MembershipParameterChange(max_supply=5, mint_price=1)])

    asyncio.run(client.create_proposal_with_instructions(diamond.signer(), CONTENT, calldatas))

    proposal = diamond.proposals[0]
    assert proposal.targets == (DIAMOND_ADDRESS, DIAMOND_ADDRESS)
    assert proposal.values == (0, 0)
    assert proposal.signatures == ("", "")
    assert proposal.calldatas == tuple(calldatas)


def test_instruction_proposal_accepts_hex_calldata() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    [calldata] = client.build_parameter_change_calldata([MembershipParameterChange(max_supply=5)])

    asyncio.run(client.create_proposal_with_instructions(diamond.signer(), CONTENT, ["0x" + calldata.hex()]))

    assert diamond.proposals[0].calldatas == (calldata,)


def test_empty_instruction_list_is_rejected_before_publishing() -> None:
    diamond = FakeDiamond()
    store = InMemoryContentStore()

    with pytest.raises(EncodingError, match="at least one"):
        asyncio.run(_client(diamond, store).create_proposal_with_instructions(diamond.signer(), CONTENT, []))

    assert store.requests == []
    assert diamond.proposals == []


def test_non_bytes_instruction_is_rejected() -> None:
    diamond = FakeDiamond()

    with pytest.raises(EncodingError, match="calldata\\[1\\]"):
        asyncio.run(
            _client(diamond).create_proposal_with_instructions(
                diamond.signer(), CONTENT, [b"\x01\x02\x03\x04", 42]  # type: ignore[list-item]
            )
        )


def test_cast_vote_increments_vote_count() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    for _ in range(3):
        asyncio.run(client.create_proposal(diamond.signer(), CONTENT))

    before = asyncio.run(client.get_vote_count(3))
    asyncio.run(client.cast_vote(diamond.signer(BOB), 3, VoteSupport.FOR))

    assert asyncio.run(client.get_vote_count(3)) == before + 1
    tally = asyncio.run(client.get_vote_support(3))
    assert tally.count(VoteSupport.FOR) == 1


def test_cast_vote_rejects_out_of_range_support() -> None:
    diamond = FakeDiamond()

    with pytest.raises(EncodingError, match="support"):
        asyncio.run(_client(diamond).cast_vote(diamond.signer(), 1, 256))
    assert diamond.transactions == []


def test_revert_reason_is_surfaced_verbatim() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    asyncio.run(client.create_proposal(diamond.signer(), CONTENT))
    asyncio.run(client.cast_vote(diamond.signer(BOB), 1, VoteSupport.AGAINST))

    with pytest.raises(ContractRevertError) as excinfo:
        asyncio.run(client.cast_vote(diamond.signer(BOB), 1, VoteSupport.FOR))

    assert excinfo.value.reason == "Already voted"


def test_get_proposals_returns_ids_one_through_count() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    for _ in range(3):
        asyncio.run(client.create_proposal(diamond.signer(), CONTENT))

    proposals = asyncio.run(client.get_proposals(asyncio.run(client.get_proposal_count())))

    assert [proposal.id for proposal in proposals] == [1, 2, 3]


def test_get_proposals_with_zero_count_makes_no_calls() -> None:
    diamond = FakeDiamond()

    assert asyncio.run(_client(diamond).get_proposals(0)) == []
    assert diamond.reads == []


def test_get_proposals_rejects_negative_count() -> None:
    with pytest.raises(EncodingError):
        asyncio.run(_client(FakeDiamond()).get_proposals(-1))


def test_finalize_and_execute_lifecycle() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    asyncio.run(client.create_proposal(diamond.signer(), CONTENT))

    assert asyncio.run(client.is_finalized(1)) is False
    asyncio.run(client.finalize(diamond.signer(), 1))
    assert asyncio.run(client.is_finalized(1)) is True

    asyncio.run(client.execute(diamond.signer(), 1))
    assert asyncio.run(client.get_proposal(1)).executed is True


def test_execute_before_finalize_reverts() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    asyncio.run(client.create_proposal(diamond.signer(), CONTENT))

    with pytest.raises(ContractRevertError, match="not finalized"):
        asyncio.run(client.execute(diamond.signer(), 1))


def test_governance_parameters_are_read_from_the_facet() -> None:
    diamond = FakeDiamond(quorum=5, proposal_duration=3600)
    client = _client(diamond)
    asyncio.run(client.create_proposal(diamond.signer(), CONTENT))
    asyncio.run(client.cast_vote(diamond.signer(CAROL), 1, VoteSupport.ABSTAIN))

    assert asyncio.run(client.get_quorum()) == 5
    assert asyncio.run(client.get_proposal_duration()) == 3600
    assert asyncio.run(client.get_voting_streak(CAROL)) == 1
    assert asyncio.run(client.get_voting_streak_multiplier(CAROL)) == 110


def test_proposal_metadata_and_instruction_description() -> None:
    diamond = FakeDiamond()
    store = InMemoryContentStore()
    client = _client(diamond, store)
    calldatas = client.build_parameter_change_calldata([MembershipParameterChange(mint_price="0.5")])
    asyncio.run(client.create_proposal_with_instructions(diamond.signer(), CONTENT, calldatas))

    proposal = asyncio.run(client.get_proposal(1))
    metadata = asyncio.run(client.get_proposal_metadata(1))
    [instruction] = client.describe_instructions(proposal)

    assert metadata["description"] == "Membership is underpriced"
    assert instruction.facet == "membership-governance"
    assert instruction.function == "setMintPrice"
    assert instruction.args == (MEMBERSHIP_ADDRESS, 5 * 10**17)


def test_unknown_instruction_is_described_by_selector() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    asyncio.run(client.create_proposal_with_instructions(diamond.signer(), CONTENT, [b"\xaa\xbb\xcc\xdd"]))

    [instruction] = client.describe_instructions(asyncio.run(client.get_proposal(1)))

    assert instruction.facet == "unknown"
    assert instruction.function == "0xaabbccdd"


def test_finalize_sends_end_voting_test_selector() -> None:
    diamond = FakeDiamond()
    client = _client(diamond)
    asyncio.run(client.create_proposal(diamond.signer(), CONTENT))

    asyncio.run(client.finalize(diamond.signer(BOB), 1))

    assert diamond.transactions[-1] == (BOB, "endVotingTest", 0)
    assert diamond.sent_calldata[-1][:4].hex() == "7cfad230"
    assert int.from_bytes(diamond.sent_calldata[-1][4:], "big") == 1


def test_cast_vote_rejects_non_positive_proposal_id_before_sending() -> None:
    diamond = FakeDiamond()

    with pytest.raises(EncodingError, match="proposal_id"):
        asyncio.run(_client(diamond).cast_vote(diamond.signer(), 0, VoteSupport.FOR))
    assert diamond.transactions == []


@pytest.mark.parametrize("support", [-1, 256, True, "1"])
def test_vote_validation_raises_encoding_error(support: object) -> None:
    with pytest.raises(EncodingError, match="support"):
        Vote(proposal_id=1, voter=ALICE, support=support).ensure_valid()  # type: ignore[arg-type]


def test_valid_vote_is_returned_unchanged() -> None:
    vote = Vote(proposal_id=2, voter=ALICE, support=VoteSupport.ABSTAIN)

    assert vote.ensure_valid() is vote
