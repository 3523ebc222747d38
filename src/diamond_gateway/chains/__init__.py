"""Network profiles and ABI bundles for the supported chains."""

from diamond_gateway.chains.registry import (
    FALLBACK_CHAIN,
    PROFILES,
    AbiBundle,
    ContractAddresses,
    NativeCurrency,
    NetworkProfile,
    WalletConfig,
    known_chains,
    profile_for_chain_id,
    resolve_profile,
)

__all__ = [
    "FALLBACK_CHAIN",
    "PROFILES",
    "AbiBundle",
    "ContractAddresses",
    "NativeCurrency",
    "NetworkProfile",
    "WalletConfig",
    "known_chains",
    "profile_for_chain_id",
    "resolve_profile",
]
