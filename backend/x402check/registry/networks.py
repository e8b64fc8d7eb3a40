"""Static registry of CAIP-2 networks, legacy aliases and address families.

The registry is built once at import time from plain tuples and exposed through
read-only mappings; rule functions receive it as an explicit argument.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from x402check.registry.assets import AssetInfo, build_asset_table

NETWORK_ID_PATTERN = re.compile(r"^(?P<namespace>[-a-z0-9]{3,16}):(?P<reference>[-_a-zA-Z0-9]{1,47})$")


class AddressFamily(Enum):
    """Account identifier scheme used by a chain."""

    EVM = "evm"  # 20-byte hex, EIP-55 mixed-case checksum
    SOLANA = "solana"  # 32-byte Ed25519 public key, Base58, no checksum


@dataclass(frozen=True)
class NetworkInfo:
    name: str
    address_family: AddressFamily
    testnet: bool


_NETWORKS: Tuple[Tuple[str, str, AddressFamily, bool], ...] = (
    ("eip155:1", "Ethereum", AddressFamily.EVM, False),
    ("eip155:11155111", "Ethereum Sepolia", AddressFamily.EVM, True),
    ("eip155:8453", "Base", AddressFamily.EVM, False),
    ("eip155:84532", "Base Sepolia", AddressFamily.EVM, True),
    ("eip155:10", "Optimism", AddressFamily.EVM, False),
    ("eip155:42161", "Arbitrum One", AddressFamily.EVM, False),
    ("eip155:137", "Polygon", AddressFamily.EVM, False),
    ("eip155:80002", "Polygon Amoy", AddressFamily.EVM, True),
    ("eip155:43114", "Avalanche C-Chain", AddressFamily.EVM, False),
    ("eip155:43113", "Avalanche Fuji", AddressFamily.EVM, True),
    ("eip155:4689", "IoTeX", AddressFamily.EVM, False),
    ("eip155:1329", "Sei", AddressFamily.EVM, False),
    ("eip155:1328", "Sei Testnet", AddressFamily.EVM, True),
    ("solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp", "Solana", AddressFamily.SOLANA, False),
    ("solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1", "Solana Devnet", AddressFamily.SOLANA, True),
    ("solana:4uhcVJyU9pJkvQyS88uRDiswHXSCkY3z", "Solana Testnet", AddressFamily.SOLANA, True),
)

# Short names used by the first protocol revision.
_ALIASES = {
    "ethereum": "eip155:1",
    "sepolia": "eip155:11155111",
    "base": "eip155:8453",
    "base-sepolia": "eip155:84532",
    "optimism": "eip155:10",
    "arbitrum": "eip155:42161",
    "polygon": "eip155:137",
    "polygon-amoy": "eip155:80002",
    "avalanche": "eip155:43114",
    "avalanche-fuji": "eip155:43113",
    "iotex": "eip155:4689",
    "sei": "eip155:1329",
    "sei-testnet": "eip155:1328",
    "solana": "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp",
    "solana-devnet": "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1",
    "solana-testnet": "solana:4uhcVJyU9pJkvQyS88uRDiswHXSCkY3z",
}

_NAMESPACE_FAMILIES = {
    "eip155": AddressFamily.EVM,
    "solana": AddressFamily.SOLANA,
}


def parse_network_id(value: Any) -> Optional[Tuple[str, str]]:
    """Split a ``namespace:reference`` identifier, or return None when malformed."""
    if not isinstance(value, str):
        return None
    match = NETWORK_ID_PATTERN.fullmatch(value)
    if match is None:
        return None
    return match.group("namespace"), match.group("reference")


@dataclass(frozen=True)
class NetworkRegistry:
    """Immutable lookup tables for networks, aliases and known assets."""

    networks: Mapping[str, NetworkInfo]
    aliases: Mapping[str, str]
    namespace_families: Mapping[str, AddressFamily]
    assets: Mapping[str, Mapping[str, AssetInfo]]

    def canonical_id(self, network: Any) -> Optional[str]:
        """Resolve an identifier or alias to a registered CAIP-2 id."""
        if not isinstance(network, str):
            return None
        if network in self.networks:
            return network
        return self.aliases.get(network)

    def resolve(self, network: Any) -> Optional[NetworkInfo]:
        canonical = self.canonical_id(network)
        return self.networks.get(canonical) if canonical else None

    def address_family(self, network: Any) -> Optional[AddressFamily]:
        """Family rules to apply for ``network``, including unregistered ids of a known namespace."""
        info = self.resolve(network)
        if info is not None:
            return info.address_family
        parsed = parse_network_id(network)
        if parsed is None:
            return None
        return self.namespace_families.get(parsed[0])

    def find_asset(self, network: Any, address: Any) -> Optional[AssetInfo]:
        """Look up a known asset by contract address (hex compared case-insensitively)."""
        canonical = self.canonical_id(network)
        if canonical is None or not isinstance(address, str):
            return None
        family = self.networks[canonical].address_family
        for asset in self.assets.get(canonical, {}).values():
            if family is AddressFamily.EVM and asset.address.lower() == address.lower():
                return asset
            if asset.address == address:
                return asset
        return None

    def asset_by_symbol(self, network: Any, symbol: Any) -> Optional[AssetInfo]:
        canonical = self.canonical_id(network)
        if canonical is None or not isinstance(symbol, str):
            return None
        return self.assets.get(canonical, {}).get(symbol.upper())


def build_registry() -> NetworkRegistry:
    networks = {
        network_id: NetworkInfo(name=name, address_family=family, testnet=testnet)
        for network_id, name, family, testnet in _NETWORKS
    }
    assets = {
        network_id: MappingProxyType(table)
        for network_id, table in build_asset_table().items()
    }
    return NetworkRegistry(
        networks=MappingProxyType(networks),
        aliases=MappingProxyType(dict(_ALIASES)),
        namespace_families=MappingProxyType(dict(_NAMESPACE_FAMILIES)),
        assets=MappingProxyType(assets),
    )


REGISTRY = build_registry()


__all__ = [
    "AddressFamily",
    "NetworkInfo",
    "NetworkRegistry",
    "NETWORK_ID_PATTERN",
    "REGISTRY",
    "build_registry",
    "parse_network_id",
]
