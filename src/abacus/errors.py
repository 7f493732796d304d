"""
Error taxonomy for the Counter session.

Every failure that leaves the session or the gateway is one of the
classes below.  Each carries an ``exit_code`` used by the CLI, in the
same way capsule errors map onto process exit codes.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class CounterError(RuntimeError):
    exit_code: int = 1


class WalletEnvironmentError(CounterError):
    """No wallet provider is reachable from this environment."""

    exit_code = 2


class SignerUnavailableError(CounterError):
    """The wallet is present but refused to expose an account."""

    exit_code = 3


class InvalidAddressError(CounterError):
    exit_code = 4

    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid contract address: {address!r}")
        self.address = address


class ContractNotDeployedError(CounterError):
    exit_code = 5

    def __init__(self, address: str, chain_id: int) -> None:
        super().__init__(
            f"No contract deployed at {address} on chain {chain_id}. "
            f"Switch network or fix COUNTER_ADDRESS."
        )
        self.address = address
        self.chain_id = chain_id


class NotConnectedError(CounterError):
    exit_code = 6


class StaleDeploymentError(CounterError):
    """The contract answered with undecodable data after a valid connect."""

    exit_code = 7


class ReadFailedError(CounterError):
    exit_code = 8


class TransactionFailureReason(str, Enum):
    USER_REJECTED = "user_rejected"
    REVERTED = "reverted"
    RPC_ERROR = "rpc_error"


class TransactionFailedError(CounterError):
    exit_code = 9

    def __init__(
        self,
        action: str,
        reason: TransactionFailureReason,
        detail: str,
        tx_hash: Optional[str] = None,
    ) -> None:
        super().__init__(f"{action} failed ({reason.value}): {detail}")
        self.action = action
        self.reason = reason
        self.detail = detail
        self.tx_hash = tx_hash


class NetworkSwitchError(CounterError):
    exit_code = 10

    def __init__(self, network_name: str, detail: str) -> None:
        super().__init__(f"Could not switch wallet to {network_name}: {detail}")
        self.network_name = network_name
        self.detail = detail
