from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .schemas import DATA_ROOT, SchemaRegistry, load_json


@dataclass(frozen=True)
class NetworkDescriptor:
    chain_id: int
    name: str
    rpc_url: str
    block_explorer_url: str

    @property
    def chain_id_hex(self) -> str:
        """0x-prefixed chain id as wallets expect it (e.g. ``0xaa36a7``)."""
        return hex(self.chain_id)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "NetworkDescriptor":
        return cls(
            chain_id=int(payload["chainId"]),
            name=payload["name"],
            rpc_url=payload["rpcUrl"],
            block_explorer_url=payload["blockExplorer"],
        )


@dataclass(frozen=True)
class NetworkTable:
    networks: dict[str, NetworkDescriptor]
    current_key: str

    @classmethod
    def from_dict(
        cls, payload: dict[str, Any], registry: SchemaRegistry | None = None
    ) -> "NetworkTable":
        registry = registry or SchemaRegistry.default()
        registry.validate_instance(payload, "networks.schema.json")
        networks = {
            key: NetworkDescriptor.from_dict(entry)
            for key, entry in payload["networks"].items()
        }
        current = payload["current"]
        if current not in networks:
            raise KeyError(f"Current network {current!r} is not in the network table")
        return cls(networks=networks, current_key=current)

    @classmethod
    def from_path(cls, path: Path, registry: SchemaRegistry | None = None) -> "NetworkTable":
        return cls.from_dict(load_json(path), registry=registry)

    @classmethod
    def default(cls) -> "NetworkTable":
        return cls.from_path(DATA_ROOT / "networks.json")

    @property
    def current(self) -> NetworkDescriptor:
        return self.networks[self.current_key]

    def get(self, key: str) -> NetworkDescriptor:
        try:
            return self.networks[key]
        except KeyError:
            known = ", ".join(sorted(self.networks))
            raise KeyError(f"Unknown network {key!r} (known: {known})") from None

    def by_chain_id(self, chain_id: int) -> Optional[NetworkDescriptor]:
        for descriptor in self.networks.values():
            if descriptor.chain_id == chain_id:
                return descriptor
        return None


__all__ = ["NetworkDescriptor", "NetworkTable"]
