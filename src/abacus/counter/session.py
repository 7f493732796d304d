"""
Session lifecycle for the Counter contract.

A session is either ``Disconnected`` or ``Connected`` with all three of
provider, signer and contract handle.  ``connect()`` builds the whole
triple or nothing; there is no partially connected state.

SessionManager instances are owned by the caller.  Only one ``connect()``
should be in flight per manager at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..catalog.models import NetworkTable
from ..config import Settings
from ..errors import ContractNotDeployedError, InvalidAddressError, NotConnectedError
from ..pneuma.rpc import ChainProvider, InjectedProvider, discover_injected_provider
from ..sigil.eth import JsonRpcSigner, LocalAccountSigner, get_signer, is_address
from .contract import CounterContract

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Disconnected:
    pass


@dataclass(frozen=True)
class Connected:
    provider: ChainProvider
    signer: Union[JsonRpcSigner, LocalAccountSigner]
    contract: CounterContract
    chain_id: int


SessionState = Union[Disconnected, Connected]

DISCONNECTED = Disconnected()


def is_empty_code(code: str) -> bool:
    return code.lower() in ("", "0x", "0x0")


class SessionManager:
    def __init__(
        self,
        contract_address: str,
        networks: Optional[NetworkTable] = None,
        wallet_url: Optional[str] = None,
        private_key: Optional[str] = None,
        provider_source: Optional[Callable[[], InjectedProvider]] = None,
        poll_interval: float = 2.0,
    ) -> None:
        self.contract_address = contract_address
        self.networks = networks or NetworkTable.default()
        self.wallet_url = wallet_url
        self.private_key = private_key
        self.poll_interval = poll_interval
        self._provider_source = provider_source or (
            lambda: discover_injected_provider(self.wallet_url)
        )
        self._state: SessionState = DISCONNECTED

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider_source: Optional[Callable[[], InjectedProvider]] = None,
    ) -> "SessionManager":
        return cls(
            contract_address=settings.contract_address,
            networks=settings.networks,
            wallet_url=settings.wallet_url,
            private_key=settings.private_key,
            provider_source=provider_source,
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Connected:
        """The live session; raises NotConnectedError when there is none."""
        state = self._state
        if not isinstance(state, Connected):
            raise NotConnectedError("Not connected to the Counter contract. Call connect() first.")
        return state

    def is_connected(self) -> bool:
        return isinstance(self._state, Connected)

    def open_provider(self) -> ChainProvider:
        """Wrap the ambient wallet provider without acquiring a signer.

        Raises:
            WalletEnvironmentError: If the environment has no wallet
        """
        names = {d.chain_id: key for key, d in self.networks.networks.items()}
        return ChainProvider(self._provider_source(), network_names=names)

    async def connect(self) -> Connected:
        """
        Establish a validated session.

        Returns:
            The connected session

        Raises:
            WalletEnvironmentError: No wallet provider in this environment
            InvalidAddressError: Configured contract address is malformed
            SignerUnavailableError: Wallet refused or has no unlocked account
            ContractNotDeployedError: No bytecode at the address on this chain
            ProviderRpcError: Any other provider failure
        """
        self._state = DISCONNECTED

        provider = self.open_provider()

        if not is_address(self.contract_address):
            raise InvalidAddressError(self.contract_address)

        signer = await get_signer(provider, self.private_key)

        network = await provider.get_network()
        logger.info("Current network: %s (chain id %d)", network.name, network.chain_id)

        code = await provider.get_code(self.contract_address)
        deployed = not is_empty_code(code)
        logger.debug("Contract code at %s: %d bytes", self.contract_address, max(len(code) - 2, 0) // 2)
        logger.info("Contract deployed: %s", deployed)
        if not deployed:
            raise ContractNotDeployedError(self.contract_address, network.chain_id)

        contract = CounterContract(
            self.contract_address, provider, signer, poll_interval=self.poll_interval
        )
        self._state = Connected(
            provider=provider, signer=signer, contract=contract, chain_id=network.chain_id
        )
        return self._state

    def disconnect(self) -> None:
        self._state = DISCONNECTED
