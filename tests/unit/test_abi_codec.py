from __future__ import annotations

import pytest
from eth_utils import abi_to_signature, function_abi_to_4byte_selector, to_checksum_address

from diamond_gateway.chains import resolve_profile
from diamond_gateway.errors import EncodingError
from diamond_gateway.evm.abi_codec import (
    decode_function_call,
    decode_function_result,
    encode_function_call,
    encode_function_result,
    find_function,
)
from diamond_gateway.types import FacetKind

MUMBAI = resolve_profile("mumbai")
GOVERNANCE_ABI = MUMBAI.abi_for(FacetKind.GOVERNANCE)
MEMBERSHIP_ABI = MUMBAI.abi_for(FacetKind.MEMBERSHIP_GOVERNANCE)
LOUPE_ABI = MUMBAI.abi_for(FacetKind.DIAMOND_LOUPE)


def test_selector_matches_known_erc165_selector() -> None:
    entry = find_function(LOUPE_ABI, "supportsInterface")

    assert abi_to_signature(entry) == "supportsInterface(bytes4)"
    assert function_abi_to_4byte_selector(entry).hex() == "01ffc9a7"


def test_propose_signature_is_canonical() -> None:
    entry = find_function(GOVERNANCE_ABI, "propose")

    assert abi_to_signature(entry) == "propose(address[],uint256[],string[],bytes[],string)"


def test_finalize_entry_is_end_voting_test() -> None:
    entry = find_function(GOVERNANCE_ABI, "endVotingTest")

    assert abi_to_signature(entry) == "endVotingTest(uint256)"
    assert function_abi_to_4byte_selector(entry).hex() == "7cfad230"


def test_tuple_outputs_use_component_types() -> None:
    cut_abi = MUMBAI.abi_for(FacetKind.DIAMOND_CUT)

    assert abi_to_signature(find_function(cut_abi, "diamondCut")) == (
        "diamondCut((address,uint8,bytes4[])[],address,bytes)"
    )


def test_encoded_call_starts_with_selector_and_decodes_back() -> None:
    membership = to_checksum_address(MUMBAI.addresses.membership)
    calldata = encode_function_call(MEMBERSHIP_ABI, "setMaxSupply", [membership.lower(), 500])

    assert calldata[:4] == function_abi_to_4byte_selector(find_function(MEMBERSHIP_ABI, "setMaxSupply"))
    assert decode_function_call(MEMBERSHIP_ABI, calldata) == ("setMaxSupply", (membership, 500))


def test_encoding_is_deterministic() -> None:
    first = encode_function_call(GOVERNANCE_ABI, "castVote", [3, 1])
    second = encode_function_call(GOVERNANCE_ABI, "castVote", [3, 1])

    assert first == second


def test_unknown_function_raises_encoding_error() -> None:
    with pytest.raises(EncodingError, match="not found"):
        encode_function_call(GOVERNANCE_ABI, "selfDestruct", [])


def test_wrong_argument_count_raises_encoding_error() -> None:
    with pytest.raises(EncodingError):
        encode_function_call(GOVERNANCE_ABI, "castVote", [1])


def test_invalid_address_raises_encoding_error() -> None:
    with pytest.raises(EncodingError, match="invalid address"):
        encode_function_call(MEMBERSHIP_ABI, "getMintPrice", ["0x1234"])


def test_out_of_range_value_raises_encoding_error() -> None:
    with pytest.raises(EncodingError):
        encode_function_call(GOVERNANCE_ABI, "castVote", [1, 256])


def test_hex_strings_are_accepted_for_bytes_arguments() -> None:
    calldata = encode_function_call(
        GOVERNANCE_ABI,
        "propose",
        [[MUMBAI.addresses.diamond], [0], [""], ["0xdeadbeef"], "ipfs://cid"],
    )
    function, args = decode_function_call(GOVERNANCE_ABI, calldata)

    assert function == "propose"
    assert args[3] == (b"\xde\xad\xbe\xef",)
    assert args[4] == "ipfs://cid"


def test_single_output_is_unwrapped() -> None:
    raw = encode_function_result(GOVERNANCE_ABI, "getProposalCount", [7])

    assert decode_function_result(GOVERNANCE_ABI, "getProposalCount", raw) == 7


def test_multiple_outputs_are_returned_as_tuple() -> None:
    raw = encode_function_result(GOVERNANCE_ABI, "getVoteSupport", [1, 2, 3])

    assert decode_function_result(GOVERNANCE_ABI, "getVoteSupport", raw) == (1, 2, 3)


def test_malformed_result_raises_encoding_error() -> None:
    with pytest.raises(EncodingError):
        decode_function_result(GOVERNANCE_ABI, "getProposalCount", b"\x01")


def test_unknown_selector_cannot_be_decoded() -> None:
    with pytest.raises(EncodingError, match="selector"):
        decode_function_call(GOVERNANCE_ABI, b"\x00\x00\x00\x00")


def test_sequence_argument_rejects_scalar() -> None:
    with pytest.raises(EncodingError, match="expected a sequence"):
        encode_function_call(GOVERNANCE_ABI, "propose", ["0x" + "d1" * 20, [0], [""], [b""], "ipfs://cid"])


def test_event_entries_are_not_callable_functions() -> None:
    events = [entry["name"] for entry in GOVERNANCE_ABI if entry["type"] == "event"]
    for name in events:
        with pytest.raises(EncodingError, match="not found"):
            find_function(GOVERNANCE_ABI, name)
