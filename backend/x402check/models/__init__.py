"""Pydantic data models exposed by the x402check package."""

from .config import ConfigFormat, NormalizedConfig, PaymentRequirementEntry, entry_path
from .issues import ErrorCode, Severity, ValidationIssue, ValidationResult

__all__ = [
	"ConfigFormat",
	"NormalizedConfig",
	"PaymentRequirementEntry",
	"entry_path",
	"ErrorCode",
	"Severity",
	"ValidationIssue",
	"ValidationResult",
]
