"""
Wallet provider and chain access over JSON-RPC.

The wallet is reached through an EIP-1193 style ``request(method, params)``
surface.  ``HttpWalletProvider`` speaks it over HTTP with httpx (desktop
wallets such as Frame expose exactly this on localhost); tests plug in any
object with the same coroutine.

``ChainProvider`` wraps a wallet provider with the typed queries the
session needs: network, bytecode, eth_call, receipts.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

import httpx

from ..errors import WalletEnvironmentError

logger = logging.getLogger(__name__)


# Names for chains that are not in the network table.
WELL_KNOWN_CHAINS = {
    1: "mainnet",
    10: "optimism",
    137: "matic",
    8453: "base",
    17000: "holesky",
    84532: "base-sepolia",
    11155111: "sepolia",
}


class ProviderErrorKind(str, Enum):
    USER_REJECTED = "user_rejected"
    UNAUTHORIZED = "unauthorized"
    UNSUPPORTED_METHOD = "unsupported_method"
    DISCONNECTED = "disconnected"
    CHAIN_DISCONNECTED = "chain_disconnected"
    UNRECOGNIZED_CHAIN = "unrecognized_chain"
    RPC = "rpc"

    @classmethod
    def from_code(cls, code: Optional[int]) -> "ProviderErrorKind":
        return _KIND_BY_CODE.get(code, cls.RPC)


_KIND_BY_CODE = {
    4001: ProviderErrorKind.USER_REJECTED,
    4100: ProviderErrorKind.UNAUTHORIZED,
    4200: ProviderErrorKind.UNSUPPORTED_METHOD,
    4900: ProviderErrorKind.DISCONNECTED,
    4901: ProviderErrorKind.CHAIN_DISCONNECTED,
    4902: ProviderErrorKind.UNRECOGNIZED_CHAIN,
}


class ProviderRpcError(RuntimeError):
    """An error returned by the wallet provider or the node behind it."""

    def __init__(self, code: Optional[int], message: str, data: Any = None) -> None:
        super().__init__(f"RPC error {code}: {message}" if code is not None else message)
        self.code = code
        self.message = message
        self.data = data
        self.kind = ProviderErrorKind.from_code(code)

    @classmethod
    def from_payload(cls, error: Any) -> "ProviderRpcError":
        if isinstance(error, dict):
            return cls(error.get("code"), str(error.get("message", "")), error.get("data"))
        return cls(None, str(error))

    @property
    def is_revert(self) -> bool:
        text = self.message.lower()
        return self.code == 3 or "revert" in text


class InjectedProvider(Protocol):
    async def request(self, method: str, params: Optional[list] = None) -> Any:
        ...


class HttpWalletProvider:
    """
    EIP-1193 request surface over HTTP JSON-RPC.

    No timeout is applied by default: wallet prompts stay pending until
    the user answers them in the wallet UI.
    """

    _ids = itertools.count(1)

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def request(self, method: str, params: Optional[list] = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }
        logger.debug("wallet request: %s", method)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise ProviderRpcError(4900, f"Wallet provider unreachable: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        # A JSON-RPC error body wins over the HTTP status.
        if isinstance(data, dict) and "error" in data:
            raise ProviderRpcError.from_payload(data["error"])

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ProviderRpcError(4900, f"Wallet provider unreachable: {exc}") from exc

        if not isinstance(data, dict):
            raise ProviderRpcError(
                -32700,
                f"Invalid JSON-RPC response from wallet provider: {response.text[:80]!r}",
            )

        return data.get("result")


def discover_injected_provider(wallet_url: Optional[str]) -> InjectedProvider:
    """
    Return the wallet provider configured for this environment.

    Raises:
        WalletEnvironmentError: If no wallet endpoint is configured
    """
    if not wallet_url:
        raise WalletEnvironmentError(
            "No wallet provider found. Set ABACUS_WALLET_URL to a wallet's "
            "JSON-RPC endpoint (e.g. http://127.0.0.1:1248)."
        )
    return HttpWalletProvider(wallet_url)


@dataclass(frozen=True)
class NetworkInfo:
    chain_id: int
    name: str


@dataclass(frozen=True)
class TransactionReceipt:
    tx_hash: str
    block_number: int
    status: int
    gas_used: int
    raw: dict

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_rpc(cls, receipt: dict) -> "TransactionReceipt":
        return cls(
            tx_hash=receipt.get("transactionHash", ""),
            block_number=to_int(receipt.get("blockNumber")),
            status=to_int(receipt.get("status", "0x0")),
            gas_used=to_int(receipt.get("gasUsed")),
            raw=receipt,
        )


def to_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    return int(value, 16)


class ChainProvider:
    """Typed read access to the chain through a wallet provider."""

    def __init__(self, wallet: InjectedProvider, network_names: Optional[dict[int, str]] = None) -> None:
        self.wallet = wallet
        self._names = {**WELL_KNOWN_CHAINS, **(network_names or {})}

    async def request(self, method: str, params: Optional[list] = None) -> Any:
        return await self.wallet.request(method, params or [])

    async def get_chain_id(self) -> int:
        return to_int(await self.request("eth_chainId"))

    async def get_network(self) -> NetworkInfo:
        chain_id = await self.get_chain_id()
        return NetworkInfo(chain_id=chain_id, name=self._names.get(chain_id, "unknown"))

    async def get_code(self, address: str) -> str:
        code = await self.request("eth_getCode", [address, "latest"])
        return code or "0x"

    async def call(self, tx: dict) -> str:
        return await self.request("eth_call", [tx, "latest"])

    async def request_accounts(self) -> list[str]:
        accounts = await self.request("eth_requestAccounts")
        return list(accounts or [])

    async def get_transaction_count(self, address: str) -> int:
        return to_int(await self.request("eth_getTransactionCount", [address, "pending"]))

    async def get_gas_price(self) -> int:
        return to_int(await self.request("eth_gasPrice"))

    async def estimate_gas(self, tx: dict) -> int:
        return to_int(await self.request("eth_estimateGas", [tx]))

    async def send_raw_transaction(self, raw_tx: str) -> str:
        return await self.request("eth_sendRawTransaction", [raw_tx])

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[TransactionReceipt]:
        receipt = await self.request("eth_getTransactionReceipt", [tx_hash])
        if receipt is None:
            return None
        return TransactionReceipt.from_rpc(receipt)
