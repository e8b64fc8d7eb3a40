"""Presence and shape checks for the mandatory fields of a payment entry."""

from __future__ import annotations

from typing import Any, List

from x402check.models import ErrorCode, PaymentRequirementEntry, ValidationIssue
from x402check.models.issues import error, warning

KNOWN_SCHEMES = ("exact", "upto")

# (wire name, attribute, code, expected shape)
_REQUIRED_FIELDS = (
    ("scheme", "scheme", ErrorCode.MISSING_SCHEME, 'a payment scheme string such as "exact"'),
    ("network", "network", ErrorCode.MISSING_NETWORK, 'a CAIP-2 network identifier such as "eip155:8453"'),
    ("amount", "amount", ErrorCode.MISSING_AMOUNT, 'an amount in atomic units as a decimal string such as "1000000"'),
    ("asset", "asset", ErrorCode.MISSING_ASSET, "the token contract address or mint on the chosen network"),
    ("payTo", "pay_to", ErrorCode.MISSING_PAY_TO, "the recipient address on the chosen network"),
)


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_scheme(scheme: Any, field: str) -> List[ValidationIssue]:
    if not isinstance(scheme, str):
        return [error(ErrorCode.INVALID_SCHEME, field, "scheme must be a string", fix='Use "exact"')]
    if scheme not in KNOWN_SCHEMES:
        return [
            warning(
                ErrorCode.UNKNOWN_SCHEME,
                field,
                f"Unrecognized payment scheme {scheme!r}; clients may not support it",
                fix='Use "exact" unless your facilitator supports this scheme',
            )
        ]
    return []


def _check_timeout(timeout: Any, field: str) -> List[ValidationIssue]:
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        return [
            error(
                ErrorCode.INVALID_TIMEOUT,
                field,
                f"maxTimeoutSeconds must be a positive integer number of seconds, got {timeout!r}",
                fix="Set maxTimeoutSeconds to e.g. 60",
            )
        ]
    return []


def check_requirements(entry: PaymentRequirementEntry, path: str) -> List[ValidationIssue]:
    """Report every missing mandatory field of ``entry`` plus a malformed timeout."""
    issues: List[ValidationIssue] = []

    for wire_name, attribute, code, shape in _REQUIRED_FIELDS:
        if is_missing(getattr(entry, attribute)):
            issues.append(
                error(
                    code,
                    f"{path}.{wire_name}",
                    f"{wire_name} is required: expected {shape}",
                    fix=f"Add {wire_name} with {shape}",
                )
            )

    if not is_missing(entry.scheme):
        issues.extend(_check_scheme(entry.scheme, f"{path}.scheme"))

    if entry.timeout_seconds is not None:
        issues.extend(_check_timeout(entry.timeout_seconds, f"{path}.maxTimeoutSeconds"))

    return issues


__all__ = ["check_requirements", "is_missing", "KNOWN_SCHEMES"]
