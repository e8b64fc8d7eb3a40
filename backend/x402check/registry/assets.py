"""Known token contracts per network, keyed by upper-case symbol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class AssetInfo:
    symbol: str
    address: str
    decimals: int


USDC_DECIMALS = 6

_USDC = {
    "eip155:1": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    "eip155:11155111": "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238",
    "eip155:8453": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
    "eip155:84532": "0x036CbD53842c5426634e7929541eC2318f3dCF7e",
    "eip155:10": "0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85",
    "eip155:42161": "0xaf88d065e77c8cC2239327C5EDb3A432268e5831",
    "eip155:137": "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359",
    "eip155:80002": "0x41E94Eb019C0762f9Bfcf9Fb1E58725BfB0e7582",
    "eip155:43114": "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E",
    "eip155:43113": "0x5425890298aed601595a70AB815c96711a31Bc65",
    "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1": "4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU",
}


def build_asset_table() -> Dict[str, Dict[str, AssetInfo]]:
    """Return a fresh ``network -> symbol -> AssetInfo`` table."""
    return {
        network: {"USDC": AssetInfo(symbol="USDC", address=address, decimals=USDC_DECIMALS)}
        for network, address in _USDC.items()
    }


__all__ = ["AssetInfo", "USDC_DECIMALS", "build_asset_table"]
