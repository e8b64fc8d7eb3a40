"""Structural classification of raw configuration documents."""

from __future__ import annotations

from typing import Any, Mapping

from x402check.models import ConfigFormat

ENTRIES_KEY = "accepts"
VERSION_KEY = "x402Version"
RESOURCE_KEY = "resource"

# Any of these at the root, without an entry list, marks the flat shape.
FLAT_MARKERS = ("payTo", "amount", "maxAmountRequired")


def detect_format(document: Any) -> ConfigFormat:
    """Classify a parsed document by which top-level keys it carries.

    Only key presence (and whether the entry list is a list) is inspected, never
    field values, and this never raises.
    """
    if not isinstance(document, Mapping):
        return ConfigFormat.UNRECOGNIZED

    if ENTRIES_KEY in document:
        if not isinstance(document[ENTRIES_KEY], list):
            return ConfigFormat.UNRECOGNIZED
        if VERSION_KEY in document and RESOURCE_KEY in document:
            return ConfigFormat.CURRENT
        return ConfigFormat.PREVIOUS

    if any(marker in document for marker in FLAT_MARKERS):
        return ConfigFormat.FLAT_LEGACY

    return ConfigFormat.UNRECOGNIZED


__all__ = ["detect_format", "ENTRIES_KEY", "VERSION_KEY", "RESOURCE_KEY", "FLAT_MARKERS"]
