"""
ContractGateway - the only path for Counter reads and writes.

Every failure leaving the gateway is one of the ``abacus.errors`` kinds.
Writes resolve only after on-chain confirmation and are serialized per
gateway, so a second write is not submitted until the first is mined.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from ..errors import (
    NotConnectedError,
    ReadFailedError,
    StaleDeploymentError,
    TransactionFailedError,
    TransactionFailureReason,
    WalletEnvironmentError,
)
from ..pneuma.abi import AbiDecodeError
from ..pneuma.rpc import NetworkInfo, ProviderErrorKind, ProviderRpcError, TransactionReceipt
from ..pneuma.tx import PendingTransaction, TransactionReverted
from .contract import CounterContract
from .session import SessionManager, is_empty_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractDebugInfo:
    contract_address: str
    network_info: NetworkInfo
    raw_bytecode_hex: str
    is_deployed: bool


def _is_bad_data(exc: BaseException) -> bool:
    return isinstance(exc, AbiDecodeError) or "BAD_DATA" in str(exc)


def _failure_reason(exc: BaseException) -> TransactionFailureReason:
    if isinstance(exc, TransactionReverted):
        return TransactionFailureReason.REVERTED
    if isinstance(exc, ProviderRpcError):
        if exc.kind is ProviderErrorKind.USER_REJECTED:
            return TransactionFailureReason.USER_REJECTED
        if exc.is_revert:
            return TransactionFailureReason.REVERTED
    return TransactionFailureReason.RPC_ERROR


class ContractGateway:
    def __init__(self, sessions: SessionManager, confirm_timeout: Optional[float] = None) -> None:
        self.sessions = sessions
        self.confirm_timeout = confirm_timeout
        self._write_lock = asyncio.Lock()

    # ---- reads ----

    async def _read(self, label: str, fn: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await fn()
        except Exception as exc:
            logger.error("%s failed: %s", label, exc)
            if _is_bad_data(exc):
                raise StaleDeploymentError(
                    "Contract is not deployed at the configured address or the "
                    f"wallet is on the wrong network ({exc})"
                ) from exc
            raise ReadFailedError(f"{label} failed: {exc}") from exc

    async def read_counter(self) -> int:
        contract = self.sessions.session.contract
        return await self._read("getCounter", contract.get_counter)

    async def get_owner(self) -> str:
        contract = self.sessions.session.contract
        return await self._read("owner", contract.owner)

    # ---- writes ----

    async def _write(
        self, action: str, submit: Callable[[CounterContract], Awaitable[PendingTransaction]]
    ) -> TransactionReceipt:
        async with self._write_lock:
            # Looked up under the lock: a queued write must not outlive disconnect().
            contract = self.sessions.session.contract
            pending: Optional[PendingTransaction] = None
            try:
                pending = await submit(contract)
                logger.info("%s submitted: %s", action, pending.tx_hash)
                receipt = await pending.wait(timeout=self.confirm_timeout)
            except Exception as exc:
                tx_hash = pending.tx_hash if pending is not None else None
                reason = _failure_reason(exc)
                logger.error("%s failed (%s): %s", action, reason.value, exc)
                raise TransactionFailedError(action, reason, str(exc), tx_hash=tx_hash) from exc
            logger.info("%s confirmed in block %d", action, receipt.block_number)
            return receipt

    async def increment_counter(self) -> TransactionReceipt:
        return await self._write("incrementCounter", CounterContract.increment_counter)

    async def decrement_counter(self) -> TransactionReceipt:
        return await self._write("decrementCounter", CounterContract.decrement_counter)

    async def reset_counter(self) -> TransactionReceipt:
        return await self._write("resetCounter", CounterContract.reset_counter)

    # ---- introspection ----

    async def get_wallet_address(self) -> str:
        signer = self.sessions.session.signer
        return await signer.get_address()

    async def get_network_info(self) -> NetworkInfo:
        provider = self.sessions.session.provider
        return await provider.get_network()

    async def get_contract_debug_info(self) -> ContractDebugInfo:
        """
        Snapshot of what the chain holds at the configured address.

        Works without a session as long as a wallet provider exists, so
        it can explain why ``connect()`` failed.
        """
        if self.sessions.is_connected():
            provider = self.sessions.session.provider
        else:
            try:
                provider = self.sessions.open_provider()
            except WalletEnvironmentError as exc:
                raise NotConnectedError(f"No provider available: {exc}") from exc

        address = self.sessions.contract_address
        network = await provider.get_network()
        code = await provider.get_code(address)
        return ContractDebugInfo(
            contract_address=address,
            network_info=network,
            raw_bytecode_hex=code,
            is_deployed=not is_empty_code(code),
        )
