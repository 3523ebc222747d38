from __future__ import annotations

from decimal import Decimal

import pytest

from diamond_gateway.domain.changes import (
    BrandParameterChange,
    MembershipParameterChange,
    ether_to_wei,
)
from diamond_gateway.domain.metadata import MetadataContent, as_record
from diamond_gateway.domain.proposal import Proposal, VoteSupportTally
from diamond_gateway.errors import EncodingError
from diamond_gateway.types import FacetKind, VoteSupport

MEMBERSHIP = "0x" + "e2" * 20


class TestEtherToWei:
    def test_decimal_string_converts_exactly(self) -> None:
        assert ether_to_wei("0.05") == 50_000_000_000_000_000

    def test_integer_amount(self) -> None:
        assert ether_to_wei(2) == 2 * 10**18

    def test_more_than_eighteen_decimals_is_rejected(self) -> None:
        with pytest.raises(EncodingError, match="decimal places"):
            ether_to_wei(Decimal("0.0000000000000000001"))

    @pytest.mark.parametrize("value", ["-1", "abc", True, "NaN"])
    def test_invalid_amounts_are_rejected(self, value: object) -> None:
        with pytest.raises(EncodingError):
            ether_to_wei(value)  # type: ignore[arg-type]


class TestMembershipParameterChange:
    def test_max_supply_is_ordered_before_mint_price(self) -> None:
        calls = MembershipParameterChange(max_supply=500, mint_price="0.1").facet_calls(MEMBERSHIP)

        assert [call.function for call in calls] == ["setMaxSupply", "setMintPrice"]
        assert calls[0].args == (MEMBERSHIP, 500)
        assert calls[1].args == (MEMBERSHIP, 10**17)
        assert all(call.facet is FacetKind.MEMBERSHIP_GOVERNANCE for call in calls)

    def test_only_given_fields_are_encoded(self) -> None:
        calls = MembershipParameterChange(mint_price=1).facet_calls(MEMBERSHIP)

        assert [call.function for call in calls] == ["setMintPrice"]

    def test_empty_change_is_rejected(self) -> None:
        with pytest.raises(EncodingError, match="max_supply or mint_price"):
            MembershipParameterChange().facet_calls(MEMBERSHIP)

    def test_negative_max_supply_is_rejected(self) -> None:
        with pytest.raises(EncodingError):
            MembershipParameterChange(max_supply=-1).ensure_valid()


def test_brand_change_requires_a_field() -> None:
    with pytest.raises(EncodingError):
        BrandParameterChange().ensure_valid()


def test_brand_change_touches_metadata_for_name_or_description() -> None:
    assert BrandParameterChange(name="New").touches_metadata
    assert BrandParameterChange(description="About").touches_metadata
    assert not BrandParameterChange(uri="https://new.example").touches_metadata


def test_metadata_content_keeps_extra_fields() -> None:
    content = MetadataContent.from_dict({"name": "P", "description": "D", "image": "", "kind": "membership"})

    assert as_record(content) == {"name": "P", "description": "D", "image": "", "kind": "membership"}


def test_proposal_from_chain_struct() -> None:
    proposal = Proposal.from_chain(
        (2, "0x" + "a1" * 20, ("0x" + "d1" * 20,), (0,), ("",), (b"\x01\x02",), "ipfs://cid", False)
    )

    assert proposal.id == 2
    assert proposal.has_instructions
    assert proposal.as_dict()["calldatas"] == ["0x0102"]


def test_vote_support_tally_counts() -> None:
    tally = VoteSupportTally(against=1, for_=4, abstain=2)

    assert tally.total == 7
    assert tally.count(VoteSupport.FOR) == 4
    assert tally.as_dict() == {"against": 1, "for": 4, "abstain": 2}
