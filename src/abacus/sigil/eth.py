"""
Addresses and signers.

Two signer flavours share one interface:

- JsonRpcSigner: the wallet holds the key; transactions go out through
  ``eth_sendTransaction`` and the wallet prompts the user.
- LocalAccountSigner: a PRIVATE_KEY from the environment signs locally
  with eth-account and the raw transaction goes out through
  ``eth_sendRawTransaction``.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import SignerUnavailableError
from ..pneuma.abi import keccak256
from ..pneuma.rpc import ChainProvider, ProviderErrorKind, ProviderRpcError

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

DEFAULT_GAS_LIMIT = 100_000


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format."""
    addr = address.lower().replace("0x", "")
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def is_address(value: object) -> bool:
    """
    Check that a value is a well-formed address.

    All-lowercase and all-uppercase hex is accepted as is; mixed case
    must match the EIP-55 checksum.
    """
    if not isinstance(value, str) or not _ADDRESS_RE.match(value):
        return False
    body = value[2:]
    if body == body.lower() or body == body.upper():
        return True
    return to_checksum_address(value) == value


class JsonRpcSigner:
    """An account managed by the wallet itself."""

    def __init__(self, provider: ChainProvider, address: str) -> None:
        self.provider = provider
        self.address = to_checksum_address(address)

    async def get_address(self) -> str:
        return self.address

    async def send_transaction(self, tx: dict) -> str:
        tx = {"from": self.address, **tx}
        return await self.provider.request("eth_sendTransaction", [tx])


class LocalAccountSigner:
    """An account whose key lives in this process."""

    def __init__(self, provider: ChainProvider, account: LocalAccount) -> None:
        self.provider = provider
        self.account = account
        self.address = account.address

    async def get_address(self) -> str:
        return self.address

    async def build_transaction(self, tx: dict) -> dict:
        """Fill nonce, gas and chain id for a partial transaction."""
        full = {
            "to": to_checksum_address(tx["to"]),
            "data": tx.get("data", "0x"),
            "value": tx.get("value", 0),
        }
        full["nonce"] = await self.provider.get_transaction_count(self.address)
        full["gasPrice"] = await self.provider.get_gas_price()
        full["chainId"] = await self.provider.get_chain_id()
        try:
            full["gas"] = await self.provider.estimate_gas(
                {"from": self.address, "to": full["to"], "data": full["data"]}
            )
        except ProviderRpcError as exc:
            if exc.is_revert:
                raise
            logger.debug("Gas estimation failed, using default limit: %s", exc)
            full["gas"] = DEFAULT_GAS_LIMIT
        return full

    async def send_transaction(self, tx: dict) -> str:
        full = await self.build_transaction(tx)
        signed = self.account.sign_transaction(full)
        raw_tx = "0x" + signed.raw_transaction.hex()
        return await self.provider.send_raw_transaction(raw_tx)


async def get_signer(
    provider: ChainProvider, private_key: Optional[str] = None
) -> JsonRpcSigner | LocalAccountSigner:
    """
    Acquire the signer for the active account.

    Args:
        provider: Chain provider wrapping the wallet
        private_key: 0x-prefixed hex key; when given, sign locally

    Raises:
        SignerUnavailableError: If the wallet refuses or exposes no account
    """
    if private_key:
        try:
            return LocalAccountSigner(provider, Account.from_key(private_key))
        except Exception as exc:
            raise SignerUnavailableError(f"PRIVATE_KEY is not a valid key: {exc}") from exc

    try:
        accounts = await provider.request_accounts()
    except ProviderRpcError as exc:
        if exc.kind in (ProviderErrorKind.USER_REJECTED, ProviderErrorKind.UNAUTHORIZED):
            raise SignerUnavailableError(
                f"Wallet refused account access: {exc.message}"
            ) from exc
        raise

    if not accounts:
        raise SignerUnavailableError("Wallet has no unlocked account. Unlock it and retry.")

    return JsonRpcSigner(provider, accounts[0])
