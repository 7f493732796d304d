"""
NetworkReconciler - align the wallet's active chain with the contract's.

The wallet decides: it may prompt the user and keep the request pending
until the prompt is answered.  Nothing here times out or cancels.
"""

from __future__ import annotations

import logging

from ..catalog.models import NetworkDescriptor
from ..errors import NetworkSwitchError
from ..pneuma.rpc import InjectedProvider, ProviderErrorKind, ProviderRpcError, to_int

logger = logging.getLogger(__name__)

NATIVE_CURRENCY = {"name": "ETH", "symbol": "ETH", "decimals": 18}


class NetworkReconciler:
    def __init__(self, wallet: InjectedProvider, required: NetworkDescriptor) -> None:
        self.wallet = wallet
        self.required = required

    def add_chain_params(self) -> dict:
        return {
            "chainId": self.required.chain_id_hex,
            "chainName": self.required.name,
            "rpcUrls": [self.required.rpc_url],
            "blockExplorerUrls": [self.required.block_explorer_url],
            "nativeCurrency": dict(NATIVE_CURRENCY),
        }

    async def needs_switch(self) -> bool:
        """True when the wallet's active chain differs from the required one."""
        active = to_int(await self.wallet.request("eth_chainId", []))
        return active != self.required.chain_id

    async def reconcile(self) -> None:
        """
        Ask the wallet to switch to the required chain.

        Registers the chain first-hand when the wallet does not know it
        (provider error 4902); the wallet switches as part of registration.

        Raises:
            NetworkSwitchError: Wallet rejected or failed the switch/add
        """
        chain_id = self.required.chain_id_hex
        logger.info("Requesting switch to %s (%s)", self.required.name, chain_id)
        try:
            await self.wallet.request("wallet_switchEthereumChain", [{"chainId": chain_id}])
            return
        except ProviderRpcError as exc:
            if exc.kind is not ProviderErrorKind.UNRECOGNIZED_CHAIN:
                raise NetworkSwitchError(self.required.name, exc.message or str(exc)) from exc
            logger.info("Wallet does not know %s, registering it", self.required.name)

        try:
            await self.wallet.request("wallet_addEthereumChain", [self.add_chain_params()])
        except ProviderRpcError as exc:
            raise NetworkSwitchError(
                self.required.name, f"could not add network: {exc.message or exc}"
            ) from exc
