"""Offline validator for x402 payment-required configuration documents."""

from x402check.models import (
    ConfigFormat,
    ErrorCode,
    NormalizedConfig,
    PaymentRequirementEntry,
    ValidationIssue,
    ValidationResult,
)
from x402check.validation import ValidationOptions, apply_strict, detect, normalize, validate

__version__ = "0.1.0"

__all__ = [
    "validate",
    "detect",
    "normalize",
    "apply_strict",
    "ValidationOptions",
    "ConfigFormat",
    "ErrorCode",
    "NormalizedConfig",
    "PaymentRequirementEntry",
    "ValidationIssue",
    "ValidationResult",
    "__version__",
]
