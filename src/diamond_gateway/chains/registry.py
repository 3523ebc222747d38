"""Static table of supported network profiles.

Profiles are built once at import time and never mutated. Every profile
carries the full ABI bundle, even where a contract is not deployed yet; an
empty address string is the "not deployed" marker.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from diamond_gateway.chains.abis.brand import BRAND_FACET_ABI
from diamond_gateway.chains.abis.diamond import (
    DIAMOND_CUT_FACET_ABI,
    DIAMOND_LOUPE_FACET_ABI,
    OWNERSHIP_FACET_ABI,
)
from diamond_gateway.chains.abis.governance import GOVERNANCE_A_FACET_ABI
from diamond_gateway.chains.abis.membership import MEMBERSHIP_CONTRACT_ABI, MEMBERSHIP_FACET_ABI
from diamond_gateway.errors import UnknownFacetError
from diamond_gateway.observability.logging import get_logger
from diamond_gateway.types import FacetKind, JsonDict

Abi = tuple[Mapping[str, Any], ...]

FALLBACK_CHAIN = "local"


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(_freeze(item) for item in value)
    return value


def load_abi(raw_abi: Sequence[Mapping[str, Any]]) -> Abi:
    return tuple(_freeze(entry) for entry in raw_abi)


@dataclass(slots=True, frozen=True)
class AbiBundle:
    diamond_cut: Abi
    diamond_loupe: Abi
    brand: Abi
    ownership: Abi
    membership_facet: Abi
    membership_contract: Abi
    governance_a: Abi


@dataclass(slots=True, frozen=True)
class ContractAddresses:
    diamond: str = ""
    membership: str = ""
    diamond_cut_facet: str = ""
    governance_a_facet: str = ""
    governance_b_facet: str = ""


@dataclass(slots=True, frozen=True)
class NativeCurrency:
    name: str
    symbol: str
    decimals: int = 18


@dataclass(slots=True, frozen=True)
class WalletConfig:
    chain_name: str
    rpc_urls: tuple[str, ...]
    native_currency: NativeCurrency
    block_explorer_urls: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class NetworkProfile:
    chain: str
    chain_id: int
    chain_name: str
    rpc_url: str
    explorer_url: str
    wallet: WalletConfig
    addresses: ContractAddresses
    abis: AbiBundle = field(repr=False)

    @property
    def chain_id_hex(self) -> str:
        return hex(self.chain_id)

    @property
    def gas_token_symbol(self) -> str:
        return self.wallet.native_currency.symbol

    def address_for(self, facet_kind: FacetKind | str) -> str:
        address_field, _ = _binding(facet_kind)
        return str(getattr(self.addresses, address_field))

    def abi_for(self, facet_kind: FacetKind | str) -> Abi:
        _, abi_field = _binding(facet_kind)
        return getattr(self.abis, abi_field)

    def with_rpc_url(self, rpc_url: str) -> NetworkProfile:
        return replace(self, rpc_url=rpc_url)

    def wallet_add_chain_params(self) -> JsonDict:
        currency = self.wallet.native_currency
        return {
            "chainId": self.chain_id_hex,
            "chainName": self.wallet.chain_name,
            "rpcUrls": list(self.wallet.rpc_urls),
            "nativeCurrency": {
                "name": currency.name,
                "symbol": currency.symbol,
                "decimals": currency.decimals,
            },
            "blockExplorerUrls": list(self.wallet.block_explorer_urls),
        }

    def as_dict(self) -> JsonDict:
        return {
            "chain": self.chain,
            "chain_id": self.chain_id,
            "chain_id_hex": self.chain_id_hex,
            "chain_name": self.chain_name,
            "rpc_url": self.rpc_url,
            "explorer_url": self.explorer_url,
            "gas_token_symbol": self.gas_token_symbol,
            "addresses": {
                "diamond": self.addresses.diamond,
                "membership": self.addresses.membership,
                "diamond_cut_facet": self.addresses.diamond_cut_facet,
                "governance_a_facet": self.addresses.governance_a_facet,
                "governance_b_facet": self.addresses.governance_b_facet,
            },
        }


# Facets mounted on the diamond are reached through the diamond address.
_FACET_BINDINGS: Mapping[FacetKind, tuple[str, str]] = MappingProxyType(
    {
        FacetKind.BRAND: ("diamond", "brand"),
        FacetKind.MEMBERSHIP_GOVERNANCE: ("diamond", "membership_facet"),
        FacetKind.MEMBERSHIP_TOKEN: ("membership", "membership_contract"),
        FacetKind.GOVERNANCE: ("diamond", "governance_a"),
        FacetKind.OWNERSHIP: ("diamond", "ownership"),
        FacetKind.DIAMOND_CUT: ("diamond_cut_facet", "diamond_cut"),
        FacetKind.DIAMOND_LOUPE: ("diamond", "diamond_loupe"),
    }
)


def coerce_facet_kind(facet_kind: FacetKind | str) -> FacetKind:
    try:
        return FacetKind(facet_kind)
    except ValueError as exc:
        raise UnknownFacetError(facet_kind) from exc


def _binding(facet_kind: FacetKind | str) -> tuple[str, str]:
    return _FACET_BINDINGS[coerce_facet_kind(facet_kind)]


SHARED_ABIS = AbiBundle(
    diamond_cut=load_abi(DIAMOND_CUT_FACET_ABI),
    diamond_loupe=load_abi(DIAMOND_LOUPE_FACET_ABI),
    brand=load_abi(BRAND_FACET_ABI),
    ownership=load_abi(OWNERSHIP_FACET_ABI),
    membership_facet=load_abi(MEMBERSHIP_FACET_ABI),
    membership_contract=load_abi(MEMBERSHIP_CONTRACT_ABI),
    governance_a=load_abi(GOVERNANCE_A_FACET_ABI),
)

_ETHER = NativeCurrency(name="Ethereum", symbol="ETH")

GOERLI = NetworkProfile(
    chain="goerli",
    chain_id=5,
    chain_name="Goerli Testnet",
    rpc_url="https://rpc.ankr.com/eth_goerli",
    explorer_url="https://goerli.etherscan.io/",
    wallet=WalletConfig(
        chain_name="Goerli",
        rpc_urls=("https://goerli.infura.io/v3/",),
        native_currency=_ETHER,
        block_explorer_urls=("https://goerli.etherscan.io",),
    ),
    addresses=ContractAddresses(),
    abis=SHARED_ABIS,
)

MUMBAI = NetworkProfile(
    chain="mumbai",
    chain_id=80001,
    chain_name="Polygon Mumbai Testnet",
    rpc_url="https://rpc-mumbai.maticvigil.com",
    explorer_url="https://mumbai.polygonscan.com/",
    wallet=WalletConfig(
        chain_name="Polygon Mumbai",
        rpc_urls=("https://rpc-mumbai.maticvigil.com",),
        native_currency=NativeCurrency(name="Matic", symbol="MATIC"),
        block_explorer_urls=("https://mumbai.polygonscan.com",),
    ),
    addresses=ContractAddresses(
        diamond="0xEf0035F4e9892DB46472BF840BA4B87227D050D8",
        membership="0x3C5bdE2d82B2A652D6E800015BFffF5f9f74b284",
        diamond_cut_facet="0xa7597f4BFfDB74EB4D2eBed09356E846e33ABBa3",
        governance_a_facet="0xa60ae68Fa93C43f26e9E7Ec0E4E9FbFB15c078c2",
        governance_b_facet="0x6fE8B2A0BdDa97E5618c203F466EFcC211076E1b",
    ),
    abis=SHARED_ABIS,
)

BASE_GOERLI = NetworkProfile(
    chain="baseGoerli",
    chain_id=84531,
    chain_name="Base Goerli Testnet",
    rpc_url="https://goerli.base.org",
    explorer_url="https://goerli.basescan.org/",
    wallet=WalletConfig(
        chain_name="Base Goerli",
        rpc_urls=("https://goerli.base.org",),
        native_currency=_ETHER,
        block_explorer_urls=("https://goerli.basescan.org",),
    ),
    addresses=ContractAddresses(),
    abis=SHARED_ABIS,
)

BSC_TESTNET = NetworkProfile(
    chain="bsc",
    chain_id=97,
    chain_name="Binance Smartchain testnet",
    rpc_url="https://data-seed-prebsc-1-s1.binance.org:8545/",
    explorer_url="https://testnet.bscscan.com/",
    wallet=WalletConfig(
        chain_name="Binance Smartchain testnet",
        rpc_urls=("https://data-seed-prebsc-1-s1.binance.org:8545/",),
        native_currency=NativeCurrency(name="tBNB", symbol="tBNB"),
        block_explorer_urls=("https://testnet.bscscan.com",),
    ),
    addresses=ContractAddresses(
        diamond="0xe514086c7eA295FDa634B10661A7F6ceCEFD0947",
        membership="0xad25740d6D4Bd503cEa9926a88C2f96Bd5532332",
    ),
    abis=SHARED_ABIS,
)

LOCAL = NetworkProfile(
    chain="local",
    chain_id=31337,
    chain_name="Local",
    rpc_url="http://localhost:8545",
    explorer_url="",
    wallet=WalletConfig(
        chain_name="Local",
        rpc_urls=("http://localhost:8545",),
        native_currency=_ETHER,
    ),
    addresses=ContractAddresses(),
    abis=SHARED_ABIS,
)

PROFILES: Mapping[str, NetworkProfile] = MappingProxyType(
    {profile.chain: profile for profile in (GOERLI, MUMBAI, BASE_GOERLI, BSC_TESTNET, LOCAL)}
)


def known_chains() -> tuple[str, ...]:
    return tuple(PROFILES)


def resolve_profile(name: str) -> NetworkProfile:
    """Return the profile registered under ``name``.

    Lookup is case-sensitive. Unknown names resolve to the local development
    profile instead of failing; the substitution is logged so a mistyped
    chain name stays visible.
    """
    profile = PROFILES.get(name)
    if profile is not None:
        return profile

    get_logger("chain_registry").warning(
        "chain_profile_fallback",
        requested_chain=name,
        chain=FALLBACK_CHAIN,
        known_chains=list(PROFILES),
    )
    return PROFILES[FALLBACK_CHAIN]


def profile_for_chain_id(chain_id: int) -> NetworkProfile | None:
    for profile in PROFILES.values():
        if profile.chain_id == chain_id:
            return profile
    return None
