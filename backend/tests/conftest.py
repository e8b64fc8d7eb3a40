import copy
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the backend package is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from x402check.main import app  # noqa: E402  pylint: disable=wrong-import-position

BASE_USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
PAY_TO = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

SOLANA_MAINNET = "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp"
SOLANA_USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
SYSTEM_PROGRAM = "1" * 32

VALID_CONFIG = {
    "x402Version": 2,
    "accepts": [
        {
            "scheme": "exact",
            "network": "eip155:8453",
            "amount": "1000000",
            "asset": BASE_USDC,
            "payTo": PAY_TO,
            "maxTimeoutSeconds": 60,
        }
    ],
    "resource": {"url": "https://example.com"},
}


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def valid_config():
    return copy.deepcopy(VALID_CONFIG)


@pytest.fixture()
def solana_config():
    return {
        "x402Version": 2,
        "accepts": [
            {
                "scheme": "exact",
                "network": SOLANA_MAINNET,
                "amount": "2500",
                "asset": SOLANA_USDC,
                "payTo": SYSTEM_PROGRAM,
                "maxTimeoutSeconds": 30,
            }
        ],
        "resource": {"url": "https://example.com/report"},
    }
