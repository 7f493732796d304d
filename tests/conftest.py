"""
Shared fixtures: an in-memory wallet that simulates the Counter contract.

FakeWallet implements the provider ``request(method, params)`` surface
and records every request, so tests can assert exactly which calls hit
the "network".
"""

from __future__ import annotations

from typing import Any, Optional

import pytest
from eth_abi import encode

from abacus.counter.gateway import ContractGateway
from abacus.counter.session import SessionManager
from abacus.pneuma.abi import counter_abi, find_function, function_selector
from abacus.pneuma.rpc import ProviderRpcError

SEPOLIA = 11155111
MAINNET = 1

COUNTER_ADDRESS = "0x4195c66979168212232B2d88cb15fd48c5072c83"
OWNER = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ACCOUNT = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
DEPLOYED_CODE = "0x6080604052348015600f57600080fd5b50"


def _selector(name: str) -> str:
    func = find_function(counter_abi(), name)
    types = [inp["type"] for inp in func.get("inputs", [])]
    return "0x" + function_selector(name, types).hex()


SELECTORS = {
    _selector(name): name
    for name in ("getCounter", "owner", "incrementCounter", "decrementCounter", "resetCounter")
}


class FakeWallet:
    def __init__(
        self,
        chain_id: int = SEPOLIA,
        accounts: Optional[list[str]] = None,
        counter: int = 0,
    ) -> None:
        self.chain_id = chain_id
        self.accounts = [ACCOUNT] if accounts is None else accounts
        self.counter = counter
        self.deployed_chains = {SEPOLIA}
        self.known_chains = {MAINNET, SEPOLIA}
        self.errors: dict[str, Exception] = {}
        self.call_result: Optional[str] = None
        self.receipt_status = 1
        self.pending_polls = 0
        self.requests: list[tuple[str, list]] = []
        self.max_unconfirmed = 0
        self._unconfirmed: set[str] = set()
        self._receipts: dict[str, dict] = {}
        self._block = 100
        self._nonce = 0
        self._last_estimate: Optional[dict] = None

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.requests]

    async def request(self, method: str, params: Optional[list] = None) -> Any:
        params = params or []
        self.requests.append((method, params))
        if method in self.errors:
            raise self.errors[method]
        handler = getattr(self, "_" + method, None)
        if handler is None:
            raise ProviderRpcError(-32601, f"the method {method} does not exist")
        return handler(params)

    # ---- accounts / network ----

    def _eth_requestAccounts(self, params: list) -> list[str]:
        return list(self.accounts)

    def _eth_accounts(self, params: list) -> list[str]:
        return list(self.accounts)

    def _eth_chainId(self, params: list) -> str:
        return hex(self.chain_id)

    def _wallet_switchEthereumChain(self, params: list) -> None:
        chain_id = int(params[0]["chainId"], 16)
        if chain_id not in self.known_chains:
            raise ProviderRpcError(4902, f"Unrecognized chain ID {params[0]['chainId']}")
        self.chain_id = chain_id

    def _wallet_addEthereumChain(self, params: list) -> None:
        chain_id = int(params[0]["chainId"], 16)
        self.known_chains.add(chain_id)
        self.chain_id = chain_id

    # ---- contract ----

    def _deployed_here(self, address: str) -> bool:
        return address.lower() == COUNTER_ADDRESS.lower() and self.chain_id in self.deployed_chains

    def _eth_getCode(self, params: list) -> str:
        return DEPLOYED_CODE if self._deployed_here(params[0]) else "0x"

    def _eth_call(self, params: list) -> str:
        if self.call_result is not None:
            return self.call_result
        tx = params[0]
        if not self._deployed_here(tx["to"]):
            return "0x"
        name = SELECTORS[tx["data"][:10]]
        if name == "getCounter":
            return "0x" + encode(["uint256"], [self.counter]).hex()
        if name == "owner":
            return "0x" + encode(["address"], [OWNER]).hex()
        return "0x"

    def _apply(self, data: str) -> str:
        name = SELECTORS[data[:10]]
        if name == "decrementCounter" and self.counter == 0:
            raise ProviderRpcError(3, "execution reverted: Counter: cannot decrement below zero")
        if name == "incrementCounter":
            self.counter += 1
        elif name == "decrementCounter":
            self.counter -= 1
        elif name == "resetCounter":
            self.counter = 0

        self._nonce += 1
        tx_hash = "0x" + f"{self._nonce:064x}"
        self._block += 1
        self._receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "blockNumber": hex(self._block),
            "status": hex(self.receipt_status),
            "gasUsed": "0x6d60",
        }
        self._unconfirmed.add(tx_hash)
        self.max_unconfirmed = max(self.max_unconfirmed, len(self._unconfirmed))
        return tx_hash

    def _eth_sendTransaction(self, params: list) -> str:
        return self._apply(params[0]["data"])

    def _eth_getTransactionReceipt(self, params: list) -> Optional[dict]:
        if self.pending_polls > 0:
            self.pending_polls -= 1
            return None
        tx_hash = params[0]
        self._unconfirmed.discard(tx_hash)
        return self._receipts.get(tx_hash)

    # ---- local signing ----

    def _eth_getTransactionCount(self, params: list) -> str:
        return hex(self._nonce)

    def _eth_gasPrice(self, params: list) -> str:
        return hex(1_000_000_000)

    def _eth_estimateGas(self, params: list) -> str:
        self._last_estimate = params[0]
        return hex(30_000)

    def _eth_sendRawTransaction(self, params: list) -> str:
        assert params[0].startswith("0x")
        assert self._last_estimate is not None
        return self._apply(self._last_estimate["data"])


@pytest.fixture()
def wallet() -> FakeWallet:
    return FakeWallet()


@pytest.fixture()
def sessions(wallet: FakeWallet) -> SessionManager:
    return SessionManager(COUNTER_ADDRESS, provider_source=lambda: wallet, poll_interval=0)


@pytest.fixture()
def gateway(sessions: SessionManager) -> ContractGateway:
    return ContractGateway(sessions)
