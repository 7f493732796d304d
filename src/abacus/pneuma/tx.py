"""
Pending transactions and receipt polling.
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional

from .rpc import ChainProvider, TransactionReceipt


DEFAULT_POLL_INTERVAL = 2.0


class TransactionReverted(RuntimeError):
    def __init__(self, receipt: TransactionReceipt) -> None:
        super().__init__(
            f"Transaction {receipt.tx_hash} reverted in block {receipt.block_number}"
        )
        self.receipt = receipt


class PendingTransaction:
    """A submitted transaction that has not been confirmed yet."""

    def __init__(
        self,
        tx_hash: str,
        provider: ChainProvider,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.tx_hash = tx_hash
        self.provider = provider
        self.poll_interval = poll_interval

    def __repr__(self) -> str:
        return f"PendingTransaction({self.tx_hash!r})"

    async def wait(self, timeout: Optional[float] = None) -> TransactionReceipt:
        """
        Wait until the transaction is mined.

        Args:
            timeout: Maximum wait time in seconds (default: wait forever)

        Returns:
            The receipt of a successful transaction

        Raises:
            TransactionReverted: If the receipt status is 0
            TimeoutError: If a timeout was given and it elapsed
        """
        start = time.monotonic()
        while True:
            receipt = await self.provider.get_transaction_receipt(self.tx_hash)
            if receipt is not None:
                if not receipt.succeeded:
                    raise TransactionReverted(receipt)
                return receipt
            if timeout is not None and time.monotonic() - start >= timeout:
                raise TimeoutError(
                    f"Transaction {self.tx_hash} not confirmed within {timeout}s"
                )
            await asyncio.sleep(self.poll_interval)
