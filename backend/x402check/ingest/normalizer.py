"""Translate any recognized configuration shape into the canonical one."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Tuple

from x402check.ingest.detector import ENTRIES_KEY, RESOURCE_KEY, VERSION_KEY
from x402check.models import ConfigFormat, ErrorCode, NormalizedConfig, PaymentRequirementEntry, ValidationIssue, entry_path
from x402check.models.issues import warning

LOGGER = logging.getLogger(__name__)

CURRENT_VERSION = 2
LEGACY_AMOUNT_KEY = "maxAmountRequired"

ENTRY_KEYS = (
    "scheme",
    "network",
    "amount",
    LEGACY_AMOUNT_KEY,
    "asset",
    "payTo",
    "maxTimeoutSeconds",
    "extra",
)

# Per-entry resource fields of the previous revision, lifted to the top level.
_ENTRY_RESOURCE_FIELDS = (("resource", "url"), ("description", "description"), ("mimeType", "mimeType"))


def _string_keys(raw: Mapping[Any, Any]) -> Dict[str, Any]:
    return {key: value for key, value in raw.items() if isinstance(key, str)}


def _rename_legacy_amount(raw: Mapping[str, Any], legacy_path: str) -> Tuple[Dict[str, Any], List[ValidationIssue]]:
    data = _string_keys(raw)
    if LEGACY_AMOUNT_KEY not in data:
        return data, []

    legacy_value = data.pop(LEGACY_AMOUNT_KEY)
    if "amount" in data:
        # both present: the current field wins, the legacy one is carried untouched
        data[LEGACY_AMOUNT_KEY] = legacy_value
        return data, []

    data["amount"] = legacy_value
    return data, [
        warning(
            ErrorCode.LEGACY_FIELD,
            legacy_path,
            f"'{LEGACY_AMOUNT_KEY}' is the previous name of 'amount'",
            fix=f"Rename '{LEGACY_AMOUNT_KEY}' to 'amount'",
        )
    ]


def _build_entry(raw: Any, legacy_path: str) -> Tuple[PaymentRequirementEntry, List[ValidationIssue]]:
    if not isinstance(raw, Mapping):
        return PaymentRequirementEntry(), []
    data, issues = _rename_legacy_amount(raw, legacy_path)
    return PaymentRequirementEntry.model_validate(data), issues


def _build_entries(raw_entries: List[Any]) -> Tuple[List[PaymentRequirementEntry], List[ValidationIssue]]:
    entries: List[PaymentRequirementEntry] = []
    issues: List[ValidationIssue] = []
    for index, raw in enumerate(raw_entries):
        entry, entry_issues = _build_entry(raw, entry_path(index, LEGACY_AMOUNT_KEY))
        entries.append(entry)
        issues.extend(entry_issues)
    return entries, issues


def _lift_entry_resource(raw_entries: List[Any]) -> Any:
    for raw in raw_entries:
        if isinstance(raw, Mapping) and isinstance(raw.get("resource"), str):
            return {
                target: raw[source]
                for source, target in _ENTRY_RESOURCE_FIELDS
                if raw.get(source) is not None
            }
    return None


def _build_config(
    document: Mapping[str, Any],
    consumed: Tuple[str, ...],
    version: Any,
    resource: Any,
    entries: List[PaymentRequirementEntry],
) -> NormalizedConfig:
    # unknown top-level keys ride along as extras
    data = {key: value for key, value in _string_keys(document).items() if key not in consumed}
    data.update({VERSION_KEY: version, RESOURCE_KEY: resource, ENTRIES_KEY: entries})
    return NormalizedConfig.model_validate(data)


def _normalize_current(document: Mapping[str, Any]) -> Tuple[NormalizedConfig, List[ValidationIssue]]:
    entries, issues = _build_entries(document[ENTRIES_KEY])
    config = _build_config(
        document,
        (VERSION_KEY, RESOURCE_KEY, ENTRIES_KEY),
        document.get(VERSION_KEY),
        document.get(RESOURCE_KEY),
        entries,
    )
    return config, issues


def _normalize_previous(document: Mapping[str, Any]) -> Tuple[NormalizedConfig, List[ValidationIssue]]:
    raw_entries = document[ENTRIES_KEY]
    entries, issues = _build_entries(raw_entries)

    version = document.get(VERSION_KEY)
    resource = document.get(RESOURCE_KEY)
    lifted = False
    if resource is None:
        resource = _lift_entry_resource(raw_entries)
        lifted = resource is not None

    config = _build_config(
        document,
        (VERSION_KEY, RESOURCE_KEY, ENTRIES_KEY),
        version,
        resource,
        entries,
    )
    # a current-version list that only omits the optional resource needs no translation
    if version == CURRENT_VERSION and not lifted and not issues:
        return config, []

    notice = warning(
        ErrorCode.LEGACY_FORMAT,
        "$",
        "Configuration uses the previous x402 shape (entry list without x402Version and a top-level resource)",
        fix=(
            f"Upgrade to x402Version {CURRENT_VERSION}: use amount instead of maxAmountRequired, "
            "CAIP-2 network identifiers, and a top-level resource object"
        ),
    )
    return config, [notice] + issues


def _normalize_flat(document: Mapping[str, Any]) -> Tuple[NormalizedConfig, List[ValidationIssue]]:
    raw_entry = {key: document[key] for key in ENTRY_KEYS if key in document}
    entry, issues = _build_entry(raw_entry, LEGACY_AMOUNT_KEY)

    resource = document.get(RESOURCE_KEY)
    if isinstance(resource, str):
        resource = {"url": resource}

    version = document.get(VERSION_KEY)
    notice = warning(
        ErrorCode.LEGACY_FORMAT,
        "$",
        "Payment fields sit at the document root instead of inside an entry list",
        fix=(
            "Move scheme, network, amount, asset, payTo and maxTimeoutSeconds into an "
            f"accepts[] array and add x402Version: {CURRENT_VERSION}"
        ),
    )
    config = _build_config(
        document,
        ENTRY_KEYS + (VERSION_KEY, RESOURCE_KEY),
        CURRENT_VERSION if version is None else version,
        resource,
        [entry],
    )
    return config, [notice] + issues


def normalize_document(document: Mapping[str, Any], fmt: ConfigFormat) -> Tuple[NormalizedConfig, List[ValidationIssue]]:
    """Map a document of a recognized format to the canonical shape.

    Returns the normalized configuration and warnings describing each translation.
    The input mapping is never modified and amount, address and network values are
    copied verbatim.
    """
    LOGGER.debug("Normalizing %s document with %d top-level keys", fmt.value, len(document))
    if fmt is ConfigFormat.CURRENT:
        return _normalize_current(document)
    if fmt is ConfigFormat.PREVIOUS:
        return _normalize_previous(document)
    if fmt is ConfigFormat.FLAT_LEGACY:
        return _normalize_flat(document)
    raise ValueError(f"Cannot normalize a document of format {fmt.value!r}")


__all__ = ["normalize_document", "CURRENT_VERSION", "ENTRY_KEYS"]
