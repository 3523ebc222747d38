"""Domain models for governance proposals, votes and metadata."""

from diamond_gateway.domain.changes import (
    BrandParameterChange,
    FacetCall,
    MembershipParameterChange,
    ParameterChange,
    ether_to_wei,
)
from diamond_gateway.domain.metadata import MetadataContent, as_record
from diamond_gateway.domain.proposal import DecodedInstruction, Proposal, Vote, VoteSupportTally

__all__ = [
    "BrandParameterChange",
    "DecodedInstruction",
    "FacetCall",
    "MembershipParameterChange",
    "MetadataContent",
    "ParameterChange",
    "Proposal",
    "Vote",
    "VoteSupportTally",
    "as_record",
    "ether_to_wei",
]
