"""Read/write facades over the diamond's facets."""

from diamond_gateway.clients.brand import BrandClient
from diamond_gateway.clients.governance import GovernanceClient
from diamond_gateway.clients.membership import MembershipClient

__all__ = ["BrandClient", "GovernanceClient", "MembershipClient"]
