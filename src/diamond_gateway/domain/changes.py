from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from eth_utils import to_wei

from diamond_gateway.errors import EncodingError
from diamond_gateway.types import FacetKind

Amount = Decimal | float | int | str


def to_decimal(value: Amount, *, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise EncodingError(f"{field_name} must be numeric")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise EncodingError(f"{field_name} must be numeric") from exc
    if not amount.is_finite() or amount < 0:
        raise EncodingError(f"{field_name} must be a non-negative number")
    return amount


def ether_to_wei(value: Amount, *, field_name: str = "amount") -> int:
    amount = to_decimal(value, field_name=field_name)
    if amount.scaleb(18) != amount.scaleb(18).to_integral_value():
        raise EncodingError(f"{field_name} has more than 18 decimal places")
    return int(to_wei(amount, "ether"))


@dataclass(slots=True, frozen=True)
class FacetCall:
    """A single facet function call to embed in a proposal."""

    facet: FacetKind
    function: str
    args: tuple[Any, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class MembershipParameterChange:
    max_supply: int | None = None
    mint_price: Amount | None = None

    def ensure_valid(self) -> None:
        if self.max_supply is None and self.mint_price is None:
            raise EncodingError("membership change must set max_supply or mint_price")
        if self.max_supply is not None:
            if isinstance(self.max_supply, bool) or not isinstance(self.max_supply, int):
                raise EncodingError("max_supply must be an integer")
            if self.max_supply < 0:
                raise EncodingError("max_supply must be non-negative")
        if self.mint_price is not None:
            ether_to_wei(self.mint_price, field_name="mint_price")

    def facet_calls(self, membership_address: str) -> list[FacetCall]:
        self.ensure_valid()
        calls: list[FacetCall] = []
        if self.max_supply is not None:
            calls.append(
                FacetCall(
                    FacetKind.MEMBERSHIP_GOVERNANCE,
                    "setMaxSupply",
                    (membership_address, self.max_supply),
                )
            )
        if self.mint_price is not None:
            calls.append(
                FacetCall(
                    FacetKind.MEMBERSHIP_GOVERNANCE,
                    "setMintPrice",
                    (membership_address, ether_to_wei(self.mint_price, field_name="mint_price")),
                )
            )
        return calls


@dataclass(slots=True, frozen=True)
class BrandParameterChange:
    name: str | None = None
    description: str | None = None
    uri: str | None = None

    @property
    def touches_metadata(self) -> bool:
        return self.name is not None or self.description is not None

    def ensure_valid(self) -> None:
        if self.name is None and self.description is None and self.uri is None:
            raise EncodingError("brand change must set name, description or uri")
        for field_name in ("name", "description", "uri"):
            value = getattr(self, field_name)
            if value is not None and not isinstance(value, str):
                raise EncodingError(f"{field_name} must be a string")


ParameterChange = MembershipParameterChange | FacetCall
