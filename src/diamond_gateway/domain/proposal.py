from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from diamond_gateway.errors import EncodingError
from diamond_gateway.types import JsonDict, VoteSupport


@dataclass(slots=True, frozen=True)
class Proposal:
    id: int
    proposer: str
    targets: tuple[str, ...]
    values: tuple[int, ...]
    signatures: tuple[str, ...]
    calldatas: tuple[bytes, ...]
    metadata_uri: str
    executed: bool = False

    @classmethod
    def from_chain(cls, raw: Sequence[Any]) -> Proposal:
        """Build from the decoded ``getProposal`` struct, in ABI field order."""
        (proposal_id, proposer, targets, values, signatures, calldatas, metadata_uri, executed) = raw
        return cls(
            id=int(proposal_id),
            proposer=str(proposer),
            targets=tuple(str(target) for target in targets),
            values=tuple(int(value) for value in values),
            signatures=tuple(str(signature) for signature in signatures),
            calldatas=tuple(bytes(calldata) for calldata in calldatas),
            metadata_uri=str(metadata_uri),
            executed=bool(executed),
        )

    @property
    def has_instructions(self) -> bool:
        return bool(self.calldatas)

    def as_dict(self) -> JsonDict:
        return {
            "id": self.id,
            "proposer": self.proposer,
            "targets": list(self.targets),
            "values": list(self.values),
            "signatures": list(self.signatures),
            "calldatas": ["0x" + calldata.hex() for calldata in self.calldatas],
            "metadata_uri": self.metadata_uri,
            "executed": self.executed,
        }


@dataclass(slots=True, frozen=True)
class Vote:
    proposal_id: int
    voter: str
    support: int

    def ensure_valid(self) -> Vote:
        if isinstance(self.proposal_id, bool) or not isinstance(self.proposal_id, int) or self.proposal_id < 1:
            raise EncodingError("proposal_id must be a positive integer")
        if isinstance(self.support, bool) or not isinstance(self.support, int) or not 0 <= self.support <= 255:
            raise EncodingError("support must be an integer between 0 and 255")
        return self


@dataclass(slots=True, frozen=True)
class VoteSupportTally:
    against: int
    for_: int
    abstain: int

    @property
    def total(self) -> int:
        return self.against + self.for_ + self.abstain

    def count(self, support: VoteSupport) -> int:
        return {
            VoteSupport.AGAINST: self.against,
            VoteSupport.FOR: self.for_,
            VoteSupport.ABSTAIN: self.abstain,
        }[support]

    def as_dict(self) -> JsonDict:
        return {"against": self.against, "for": self.for_, "abstain": self.abstain}


@dataclass(slots=True, frozen=True)
class DecodedInstruction:
    target: str
    facet: str
    function: str
    args: tuple[Any, ...]

    def as_dict(self) -> JsonDict:
        return {
            "target": self.target,
            "facet": self.facet,
            "function": self.function,
            "args": [arg.hex() if isinstance(arg, bytes) else arg for arg in self.args],
        }
