"""
Typed handle over the deployed Counter contract.
"""

from __future__ import annotations

from typing import Any

from ..pneuma.abi import counter_abi, decode_function_result, encode_function_call
from ..pneuma.rpc import ChainProvider
from ..pneuma.tx import PendingTransaction
from ..sigil.eth import JsonRpcSigner, LocalAccountSigner, to_checksum_address


class CounterContract:
    """Reads go through the provider, writes through the signer."""

    def __init__(
        self,
        address: str,
        provider: ChainProvider,
        signer: JsonRpcSigner | LocalAccountSigner,
        poll_interval: float = 2.0,
    ) -> None:
        self.address = address
        self.provider = provider
        self.signer = signer
        self.abi = counter_abi()
        self.poll_interval = poll_interval

    async def _call(self, function_name: str, args: list | None = None) -> Any:
        calldata = encode_function_call(self.abi, function_name, args or [])
        result = await self.provider.call(
            {"from": self.signer.address, "to": self.address, "data": calldata}
        )
        return decode_function_result(self.abi, function_name, result or "0x")

    async def _transact(self, function_name: str, args: list | None = None) -> PendingTransaction:
        calldata = encode_function_call(self.abi, function_name, args or [])
        tx_hash = await self.signer.send_transaction({"to": self.address, "data": calldata})
        return PendingTransaction(tx_hash, self.provider, poll_interval=self.poll_interval)

    async def get_counter(self) -> int:
        return await self._call("getCounter")

    async def owner(self) -> str:
        return to_checksum_address(await self._call("owner"))

    async def increment_counter(self) -> PendingTransaction:
        return await self._transact("incrementCounter")

    async def decrement_counter(self) -> PendingTransaction:
        return await self._transact("decrementCounter")

    async def reset_counter(self) -> PendingTransaction:
        return await self._transact("resetCounter")
