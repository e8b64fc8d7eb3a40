"""Pydantic schemas describing validation issues and results."""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import ConfigFormat, NormalizedConfig

Severity = Literal["error", "warning"]


class ErrorCode(str, Enum):
    """Stable machine-readable identifiers for every issue the validator reports."""

    # input
    INVALID_JSON = "INVALID_JSON"
    NOT_OBJECT = "NOT_OBJECT"
    UNKNOWN_FORMAT = "UNKNOWN_FORMAT"
    INVALID_ACCEPTS = "INVALID_ACCEPTS"

    # structure
    MISSING_VERSION = "MISSING_VERSION"
    INVALID_VERSION = "INVALID_VERSION"
    EMPTY_ACCEPTS = "EMPTY_ACCEPTS"
    INVALID_RESOURCE = "INVALID_RESOURCE"

    # legacy translation
    LEGACY_FORMAT = "LEGACY_FORMAT"
    LEGACY_FIELD = "LEGACY_FIELD"

    # requirements
    MISSING_SCHEME = "MISSING_SCHEME"
    INVALID_SCHEME = "INVALID_SCHEME"
    UNKNOWN_SCHEME = "UNKNOWN_SCHEME"
    MISSING_NETWORK = "MISSING_NETWORK"
    MISSING_AMOUNT = "MISSING_AMOUNT"
    MISSING_ASSET = "MISSING_ASSET"
    MISSING_PAY_TO = "MISSING_PAY_TO"
    INVALID_TIMEOUT = "INVALID_TIMEOUT"

    # amount
    INVALID_AMOUNT = "INVALID_AMOUNT"
    ZERO_AMOUNT = "ZERO_AMOUNT"
    NEGATIVE_AMOUNT = "NEGATIVE_AMOUNT"
    AMOUNT_EXPONENT = "AMOUNT_EXPONENT"
    AMOUNT_PRECISION = "AMOUNT_PRECISION"

    # network
    INVALID_NETWORK_FORMAT = "INVALID_NETWORK_FORMAT"
    NETWORK_ALIAS = "NETWORK_ALIAS"
    UNKNOWN_NETWORK = "UNKNOWN_NETWORK"
    UNKNOWN_NAMESPACE = "UNKNOWN_NAMESPACE"

    # address
    INVALID_EVM_ADDRESS = "INVALID_EVM_ADDRESS"
    BAD_EVM_CHECKSUM = "BAD_EVM_CHECKSUM"
    NO_EVM_CHECKSUM = "NO_EVM_CHECKSUM"
    INVALID_SOLANA_ADDRESS = "INVALID_SOLANA_ADDRESS"
    NO_SOLANA_CHECKSUM = "NO_SOLANA_CHECKSUM"
    ASSET_IS_SYMBOL = "ASSET_IS_SYMBOL"


class ValidationIssue(BaseModel):
    """A single finding produced by one rule."""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    field: str = Field(..., description="Dot/bracket path, e.g. entries[0].payTo")
    message: str
    fix: Optional[str] = None
    severity: Severity = "error"


class ValidationResult(BaseModel):
    """Aggregated outcome of validating one configuration document."""

    valid: bool
    format: ConfigFormat
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
    normalized: Optional[NormalizedConfig] = None


def error(code: ErrorCode, field: str, message: str, fix: Optional[str] = None) -> ValidationIssue:
    return ValidationIssue(code=code, field=field, message=message, fix=fix, severity="error")


def warning(code: ErrorCode, field: str, message: str, fix: Optional[str] = None) -> ValidationIssue:
    return ValidationIssue(code=code, field=field, message=message, fix=fix, severity="warning")


__all__ = [
    "ErrorCode",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "error",
    "warning",
]
