"""
Runtime settings for Abacus.

Values come from the process environment, with ``~/.abacus/.env`` loaded
first as a fallback.  Keys:

- ABACUS_WALLET_URL: JSON-RPC endpoint of the wallet provider
- COUNTER_ADDRESS:   Counter contract address
- ABACUS_NETWORK:    logical network name from the network table
- PRIVATE_KEY:       optional local signing key (bypasses wallet accounts)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .catalog.models import NetworkDescriptor, NetworkTable


ABACUS_DIR = Path.home() / ".abacus"
ABACUS_ENV = ABACUS_DIR / ".env"

DEFAULT_CONTRACT_ADDRESS = "0x4195c66979168212232B2d88cb15fd48c5072c83"


@dataclass(frozen=True)
class Settings:
    contract_address: str
    network: NetworkDescriptor
    networks: NetworkTable
    wallet_url: Optional[str] = None
    private_key: Optional[str] = None


def load_settings(
    env_path: Optional[Path] = None,
    networks: Optional[NetworkTable] = None,
) -> Settings:
    """
    Build settings from the environment.

    Args:
        env_path: Path to .env file (default: ~/.abacus/.env)
        networks: Network table (default: the packaged table)

    Returns:
        Settings instance
    """
    env_path = env_path or ABACUS_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    networks = networks or NetworkTable.default()
    network_key = os.environ.get("ABACUS_NETWORK") or networks.current_key

    private_key = os.environ.get("PRIVATE_KEY") or None
    if private_key and not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return Settings(
        contract_address=os.environ.get("COUNTER_ADDRESS", DEFAULT_CONTRACT_ADDRESS),
        network=networks.get(network_key),
        networks=networks,
        wallet_url=os.environ.get("ABACUS_WALLET_URL") or None,
        private_key=private_key,
    )
