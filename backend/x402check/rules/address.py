"""Address authenticity checks, dispatched on the network's address family.

EVM addresses carry an EIP-55 case checksum, so a single mistyped character is
usually caught. Solana addresses are raw Base58 Ed25519 public keys with no
checksum at all: only the alphabet and the decoded length (32 bytes) can be
verified, and a typo that stays inside the alphabet goes undetected.
"""

from __future__ import annotations

import re
from typing import Any, List

from x402check.models import ErrorCode, PaymentRequirementEntry, ValidationIssue
from x402check.models.issues import error, warning
from x402check.registry.networks import REGISTRY, AddressFamily, NetworkRegistry
from x402check.rules.requirements import is_missing
from x402check.utils.addresses import has_case_information, to_checksum_address
from x402check.utils.base58 import InvalidCharacterError, b58decode

EVM_HEX_LENGTH = 40
SOLANA_KEY_BYTES = 32
SOLANA_MAX_CHARS = 44

# "0xabc... (USDC)", "0xabc...:usdc" and the like
_CONTRACT_SUFFIX = re.compile(r"[\s:(].*$", re.DOTALL)
_HEX_BODY = re.compile(r"^[0-9a-fA-F]*$")


def _check_evm_address(value: str, field: str, label: str) -> List[ValidationIssue]:
    candidate = _CONTRACT_SUFFIX.sub("", value)

    if not candidate.startswith("0x"):
        body = candidate[2:] if candidate[:2].lower() == "0x" else candidate
        fixable = len(body) == EVM_HEX_LENGTH and _HEX_BODY.fullmatch(body)
        return [
            error(
                ErrorCode.INVALID_EVM_ADDRESS,
                field,
                f"{label} must start with a lowercase 0x prefix",
                fix=to_checksum_address(body) if fixable else None,
            )
        ]

    body = candidate[2:]
    if not _HEX_BODY.fullmatch(body):
        return [
            error(
                ErrorCode.INVALID_EVM_ADDRESS,
                field,
                f"{label} contains non-hexadecimal characters",
            )
        ]
    if len(body) != EVM_HEX_LENGTH:
        return [
            error(
                ErrorCode.INVALID_EVM_ADDRESS,
                field,
                f"{label} must be 0x followed by {EVM_HEX_LENGTH} hex characters, got {len(body)}",
            )
        ]

    checksummed = to_checksum_address(candidate)
    if candidate == checksummed:
        return []
    if has_case_information(candidate):
        return [
            error(
                ErrorCode.BAD_EVM_CHECKSUM,
                field,
                f"{label} has an invalid EIP-55 checksum; it may contain a typo",
                fix=checksummed,
            )
        ]
    return [
        warning(
            ErrorCode.NO_EVM_CHECKSUM,
            field,
            f"{label} is single-case, so its checksum cannot be verified",
            fix=checksummed,
        )
    ]


def _check_solana_address(value: str, field: str, label: str, known: bool) -> List[ValidationIssue]:
    # 32 bytes never need more than 44 Base58 characters
    if len(value) > SOLANA_MAX_CHARS:
        return [
            error(
                ErrorCode.INVALID_SOLANA_ADDRESS,
                field,
                f"{label} is {len(value)} characters; a Solana public key is at most {SOLANA_MAX_CHARS}",
            )
        ]

    try:
        decoded = b58decode(value)
    except InvalidCharacterError as exc:
        return [
            error(
                ErrorCode.INVALID_SOLANA_ADDRESS,
                field,
                f"{label} is not valid Base58: {exc}",
                fix="Base58 excludes 0, O, I and l; re-copy the address",
            )
        ]

    if len(decoded) != SOLANA_KEY_BYTES:
        return [
            error(
                ErrorCode.INVALID_SOLANA_ADDRESS,
                field,
                f"{label} decodes to {len(decoded)} bytes; a Solana public key is {SOLANA_KEY_BYTES} bytes",
            )
        ]

    if known:
        return []
    return [
        warning(
            ErrorCode.NO_SOLANA_CHECKSUM,
            field,
            f"{label} is well-formed, but Solana addresses carry no checksum, so typos cannot be detected",
            fix="Verify the address against its source",
        )
    ]


def validate_address(
    value: Any,
    family: AddressFamily | None,
    field: str,
    label: str = "address",
    known: bool = False,
) -> List[ValidationIssue]:
    """Check one address against the rules of its family.

    ``known`` marks an address already matched against the registry, for which
    the no-checksum advisory is pointless.
    """
    if family is AddressFamily.EVM:
        if not isinstance(value, str):
            return [error(ErrorCode.INVALID_EVM_ADDRESS, field, f"{label} must be a string")]
        return _check_evm_address(value, field, label)
    if family is AddressFamily.SOLANA:
        if not isinstance(value, str):
            return [error(ErrorCode.INVALID_SOLANA_ADDRESS, field, f"{label} must be a string")]
        return _check_solana_address(value, field, label, known)
    return []


def check_pay_to(
    entry: PaymentRequirementEntry,
    path: str,
    registry: NetworkRegistry = REGISTRY,
) -> List[ValidationIssue]:
    """Validate the recipient address; skipped when the network has no known family."""
    if is_missing(entry.pay_to):
        return []
    family = registry.address_family(entry.network)
    return validate_address(entry.pay_to, family, f"{path}.payTo", label="payTo")


def check_asset(
    entry: PaymentRequirementEntry,
    path: str,
    registry: NetworkRegistry = REGISTRY,
) -> List[ValidationIssue]:
    """Validate the asset contract address or mint."""
    if is_missing(entry.asset):
        return []

    field = f"{path}.asset"
    by_symbol = registry.asset_by_symbol(entry.network, entry.asset)
    if by_symbol is not None and by_symbol.address != entry.asset:
        return [
            error(
                ErrorCode.ASSET_IS_SYMBOL,
                field,
                f"asset must be a token address, not the symbol '{entry.asset}'",
                fix=by_symbol.address,
            )
        ]

    family = registry.address_family(entry.network)
    known = registry.find_asset(entry.network, entry.asset) is not None
    return validate_address(entry.asset, family, field, label="asset", known=known)


__all__ = ["check_pay_to", "check_asset", "validate_address", "EVM_HEX_LENGTH", "SOLANA_KEY_BYTES"]
