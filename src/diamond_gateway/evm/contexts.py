"""Execution contexts for facet handles.

A read context can only perform ``eth_call``; a signing context can also
authorize state-changing transactions. Handles check the capability before
encoding a write, so a read-only context never reaches the network with a
transaction.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol, runtime_checkable

import aiohttp
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError, ProviderConnectionError, TimeExhausted, Web3RPCError

from diamond_gateway.chains.registry import NetworkProfile
from diamond_gateway.config import AppSettings
from diamond_gateway.errors import ContractRevertError, TransportError
from diamond_gateway.observability.logging import get_logger


@runtime_checkable
class ReadContext(Protocol):
    async def call_read(self, to: str, data: bytes) -> bytes:
        ...


@runtime_checkable
class SigningContext(ReadContext, Protocol):
    @property
    def address(self) -> str:
        ...

    async def call_write(self, to: str, data: bytes, value: int = 0) -> str:
        ...


def _reason(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    return str(message) if message else str(exc)


@asynccontextmanager
async def translate_rpc_errors(operation: str) -> AsyncIterator[None]:
    try:
        yield
    except ContractLogicError as exc:
        raise ContractRevertError(_reason(exc)) from exc
    except Web3RPCError as exc:
        raise ContractRevertError(_reason(exc)) from exc
    except (ProviderConnectionError, TimeExhausted, aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
        raise TransportError(f"{operation} failed: {exc}") from exc


class Web3ProviderFactory:
    """Builds one ``AsyncWeb3`` per profile from application settings."""

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings

    def create(self, profile: NetworkProfile) -> AsyncWeb3:
        timeout = aiohttp.ClientTimeout(total=self._settings.http_timeout_seconds)
        provider = AsyncHTTPProvider(profile.rpc_url, request_kwargs={"timeout": timeout})
        return AsyncWeb3(provider)


class Web3ReadContext:
    def __init__(self, w3: AsyncWeb3) -> None:
        self._w3 = w3

    @property
    def w3(self) -> AsyncWeb3:
        return self._w3

    async def call_read(self, to: str, data: bytes) -> bytes:
        async with translate_rpc_errors("eth_call"):
            result = await self._w3.eth.call(
                {"to": to_checksum_address(to), "data": Web3.to_hex(data)}
            )
        return bytes(result)

    async def is_connected(self) -> bool:
        try:
            return bool(await self._w3.is_connected())
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError):
            return False

    async def chain_id(self) -> int:
        async with translate_rpc_errors("eth_chainId"):
            return int(await self._w3.eth.chain_id)


class Web3SigningContext(Web3ReadContext):
    """Signs and submits transactions for a local account.

    Gas is the node's estimate at the node's current gas price. Nonces are
    read per call, so overlapping writes from one account must be sequenced by
    the caller.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        account: LocalAccount,
        *,
        wait_for_receipt: bool = True,
        receipt_timeout_seconds: float = 120.0,
    ) -> None:
        super().__init__(w3)
        self._account = account
        self._wait_for_receipt = wait_for_receipt
        self._receipt_timeout_seconds = receipt_timeout_seconds

    @property
    def address(self) -> str:
        return str(self._account.address)

    async def call_write(self, to: str, data: bytes, value: int = 0) -> str:
        logger = get_logger("signing_context")
        async with translate_rpc_errors("transaction"):
            tx = {
                "from": self.address,
                "to": to_checksum_address(to),
                "data": Web3.to_hex(data),
                "value": int(value),
                "nonce": await self._w3.eth.get_transaction_count(self.address, "pending"),
                "chainId": await self._w3.eth.chain_id,
            }
            tx["gas"] = await self._w3.eth.estimate_gas(tx)
            tx["gasPrice"] = await self._w3.eth.gas_price
            signed = self._account.sign_transaction(tx)
            tx_hash = Web3.to_hex(await self._w3.eth.send_raw_transaction(signed.raw_transaction))
            logger.info("transaction_submitted", tx_hash=tx_hash, to=tx["to"], value=tx["value"])

            if self._wait_for_receipt:
                receipt = await self._w3.eth.wait_for_transaction_receipt(
                    tx_hash, timeout=self._receipt_timeout_seconds
                )
                if receipt["status"] == 0:
                    raise ContractRevertError(f"transaction {tx_hash} reverted")
        return tx_hash


@runtime_checkable
class ChainProbe(Protocol):
    async def is_connected(self) -> bool:
        ...

    async def chain_id(self) -> int:
        ...
