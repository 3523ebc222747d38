"""Command handlers for the diamond-gateway CLI."""

from diamond_gateway.commands.brand import run_brand_info
from diamond_gateway.commands.membership import run_encode_membership_change, run_membership_info
from diamond_gateway.commands.metadata import run_fetch_metadata, run_resolve_uri
from diamond_gateway.commands.proposals import run_list_proposals, run_show_proposal
from diamond_gateway.commands.show_chain import run_list_chains, run_show_chain

__all__ = [
    "run_brand_info",
    "run_encode_membership_change",
    "run_fetch_metadata",
    "run_list_chains",
    "run_list_proposals",
    "run_membership_info",
    "run_resolve_uri",
    "run_show_chain",
    "run_show_proposal",
]
