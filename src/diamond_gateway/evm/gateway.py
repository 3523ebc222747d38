from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from diamond_gateway.chains.registry import Abi, NetworkProfile, coerce_facet_kind
from diamond_gateway.errors import AddressNotDeployedError, ExecutionContextError
from diamond_gateway.evm.abi_codec import (
    decode_function_call,
    decode_function_result,
    encode_function_call,
)
from diamond_gateway.evm.contexts import ReadContext, SigningContext
from diamond_gateway.observability.logging import get_logger
from diamond_gateway.types import FacetKind


@dataclass(slots=True, frozen=True)
class FacetHandle:
    facet_kind: FacetKind
    address: str
    abi: Abi = field(repr=False)
    context: ReadContext = field(repr=False)

    def encode(self, function: str, *args: Any) -> bytes:
        return encode_function_call(self.abi, function, args)

    def decode_call(self, calldata: bytes) -> tuple[str, tuple[Any, ...]]:
        return decode_function_call(self.abi, calldata)

    async def call(self, function: str, *args: Any) -> Any:
        data = self.encode(function, *args)
        raw = await self.context.call_read(self.address, data)
        return decode_function_result(self.abi, function, raw)

    async def transact(self, function: str, *args: Any, value: int = 0) -> str:
        if not isinstance(self.context, SigningContext):
            raise ExecutionContextError(
                f"{self.facet_kind.value}.{function} needs a signing context"
            )
        data = self.encode(function, *args)
        get_logger("contract_gateway").info(
            "facet_transaction",
            facet=self.facet_kind.value,
            function=function,
            address=self.address,
            value=value,
        )
        return await self.context.call_write(self.address, data, value)


def _context_slot(context: ReadContext) -> str:
    if isinstance(context, SigningContext):
        return f"signer:{context.address.lower()}"
    return "read"


class ContractGateway:
    """Binds facet handles for a profile to an execution context.

    With ``cache=True`` each (chain, facet) keeps one slot for reads and one per
    signer address. A request with a different context object for an occupied
    slot replaces the entry.
    """

    def __init__(self, *, cache: bool = False) -> None:
        self._cache_enabled = cache
        self._handles: dict[tuple[str, FacetKind, str], FacetHandle] = {}

    def get_facet(
        self,
        profile: NetworkProfile,
        facet_kind: FacetKind | str,
        context: ReadContext,
    ) -> FacetHandle:
        kind = coerce_facet_kind(facet_kind)
        address = profile.address_for(kind)
        if not address:
            raise AddressNotDeployedError(profile.chain, kind.value)

        key = (profile.chain, kind, _context_slot(context))
        cached = self._handles.get(key)
        if cached is not None and cached.context is context:
            return cached

        handle = FacetHandle(
            facet_kind=kind,
            address=address,
            abi=profile.abi_for(kind),
            context=context,
        )
        if self._cache_enabled:
            self._handles[key] = handle
        return handle

    def invalidate(self, context: ReadContext | None = None) -> None:
        if context is None:
            self._handles.clear()
            return
        for key in [key for key, handle in self._handles.items() if handle.context is context]:
            del self._handles[key]

    def cached_handles(self) -> Sequence[FacetHandle]:
        return tuple(self._handles.values())
