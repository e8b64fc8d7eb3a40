"""Pydantic models for the canonical (normalized) payment configuration."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConfigFormat(str, Enum):
    """Structural shape a raw configuration document was recognized as."""

    CURRENT = "current"
    PREVIOUS = "previous"
    FLAT_LEGACY = "flat-legacy"
    UNRECOGNIZED = "unrecognized"


class PaymentRequirementEntry(BaseModel):
    """One accepted payment option.

    Values are typed ``Any`` on purpose: the rule modules report on whatever the
    document contained, so nothing is coerced here.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    scheme: Any = None
    network: Any = None
    amount: Any = None
    asset: Any = None
    pay_to: Any = Field(None, alias="payTo")
    timeout_seconds: Any = Field(None, alias="maxTimeoutSeconds")


class NormalizedConfig(BaseModel):
    """Canonical configuration shape produced by the normalizer."""

    model_config = ConfigDict(extra="allow", frozen=True)

    x402_version: Any = Field(None, alias="x402Version")
    resource: Any = None
    accepts: List[PaymentRequirementEntry] = Field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        """Render back to the wire shape, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


def entry_path(index: int, field: Optional[str] = None) -> str:
    """Build the stable issue path for an entry, e.g. ``entries[2].payTo``."""
    base = f"entries[{index}]"
    return f"{base}.{field}" if field else base


__all__ = ["ConfigFormat", "PaymentRequirementEntry", "NormalizedConfig", "entry_path"]
