"""Helpers for validating and checksum-encoding EVM account addresses."""

from __future__ import annotations

import re

from x402check.utils.keccak import keccak256

ADDRESS_PATTERN = re.compile(r"^(0x)?[a-fA-F0-9]{40}$")


def _hex_body(value: str) -> str:
    if value is None:
        raise ValueError("Address cannot be null")
    address = value.strip()
    if not ADDRESS_PATTERN.fullmatch(address):
        raise ValueError("Invalid EVM address format")
    return address[2:] if address.startswith("0x") else address


def to_checksum_address(value: str) -> str:
    """Return the EIP-55 mixed-case encoding of a 20-byte hex address.

    The digest is taken over the ASCII of the 40 lowercase hex characters, without
    the ``0x`` prefix. Letter *i* is uppercased when nibble *i* of the digest is 8
    or more; digits pass through unchanged.
    """
    body = _hex_body(value).lower()
    digest = keccak256(body.encode("ascii"))

    encoded = []
    for i, char in enumerate(body):
        byte = digest[i // 2]
        nibble = byte >> 4 if i % 2 == 0 else byte & 0x0F
        encoded.append(char.upper() if char.isalpha() and nibble >= 8 else char)

    return "0x" + "".join(encoded)


def is_checksum_address(value: str) -> bool:
    """True when ``value`` is exactly its own checksum encoding."""
    try:
        return value.strip() == value and value == to_checksum_address(value)
    except (ValueError, AttributeError):
        return False


def has_case_information(value: str) -> bool:
    """True when the hex body mixes upper and lower case letters."""
    body = _hex_body(value)
    return body != body.lower() and body != body.upper()


__all__ = ["ADDRESS_PATTERN", "to_checksum_address", "is_checksum_address", "has_case_information"]
