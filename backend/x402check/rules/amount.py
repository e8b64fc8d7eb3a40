"""Checks for the payment amount of an entry."""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from x402check.models import ErrorCode, PaymentRequirementEntry, ValidationIssue
from x402check.models.issues import error, warning
from x402check.registry.networks import REGISTRY, NetworkRegistry
from x402check.rules.requirements import is_missing

DECIMAL_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")
EXPONENT_PATTERN = re.compile(r"^-?(\d+\.?\d*|\.\d+)[eE][-+]?\d+$")

# Beyond this exponent the plain-decimal suggestion would be unreasonably long.
_MAX_FIX_EXPONENT = 64

EXAMPLE_AMOUNT = '"1000000"'


def _amount_text(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value) if math.isfinite(value) else None
    if isinstance(value, str):
        return value
    return None


def _to_decimal(text: str) -> Optional[Decimal]:
    try:
        return Decimal(text)
    except InvalidOperation:
        # exponent outside the range the decimal module can hold
        return None


def _plain_decimal(text: str) -> Optional[str]:
    number = _to_decimal(text)
    if number is None or abs(number.as_tuple().exponent) > _MAX_FIX_EXPONENT:
        return None
    return format(number, "f")


def check_amount(
    entry: PaymentRequirementEntry,
    path: str,
    registry: NetworkRegistry = REGISTRY,
) -> List[ValidationIssue]:
    """Validate ``entry.amount`` as a positive plain decimal in the asset's atomic units."""
    value = entry.amount
    if is_missing(value):
        return []

    field = f"{path}.amount"
    text = _amount_text(value)
    if text is None:
        return [
            error(
                ErrorCode.INVALID_AMOUNT,
                field,
                f"amount must be a decimal string, got {type(value).__name__}",
                fix=f"Use a string of digits, e.g. {EXAMPLE_AMOUNT}",
            )
        ]

    if EXPONENT_PATTERN.fullmatch(text):
        plain = _plain_decimal(text)
        return [
            error(
                ErrorCode.AMOUNT_EXPONENT,
                field,
                f"amount {text!r} uses exponential notation",
                fix=f'Write it out in full: "{plain}"' if plain else f"Use plain digits, e.g. {EXAMPLE_AMOUNT}",
            )
        ]

    if not DECIMAL_PATTERN.fullmatch(text):
        return [
            error(
                ErrorCode.INVALID_AMOUNT,
                field,
                f"amount {text!r} is not a plain decimal number",
                fix=f"Use a string of digits, e.g. {EXAMPLE_AMOUNT}",
            )
        ]

    number = _to_decimal(text)
    if number is None:
        return [
            error(
                ErrorCode.INVALID_AMOUNT,
                field,
                f"amount {text!r} cannot be represented as a decimal number",
                fix=f"Use a string of digits, e.g. {EXAMPLE_AMOUNT}",
            )
        ]
    if number < 0:
        return [
            error(
                ErrorCode.NEGATIVE_AMOUNT,
                field,
                f"amount {text!r} is negative",
                fix=f'Use a positive amount, e.g. "{text.lstrip("-")}"',
            )
        ]
    if number == 0:
        return [
            error(
                ErrorCode.ZERO_AMOUNT,
                field,
                "amount must be greater than zero",
                fix=f"Set a positive amount in atomic units, e.g. {EXAMPLE_AMOUNT} for 1 USDC",
            )
        ]

    fraction = text.partition(".")[2].rstrip("0")
    asset = registry.find_asset(entry.network, entry.asset)
    if asset is not None and len(fraction) > asset.decimals:
        return [
            warning(
                ErrorCode.AMOUNT_PRECISION,
                field,
                f"amount has {len(fraction)} decimal places but {asset.symbol} supports {asset.decimals}",
                fix=f"Round the amount to at most {asset.decimals} decimal places",
            )
        ]

    return []


__all__ = ["check_amount", "DECIMAL_PATTERN", "EXPONENT_PATTERN"]
