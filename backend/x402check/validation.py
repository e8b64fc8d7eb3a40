"""Validation pipeline: parse, detect, normalize, run rules, aggregate."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel

from x402check.ingest.detector import ENTRIES_KEY, detect_format
from x402check.ingest.normalizer import normalize_document
from x402check.models import (
    ConfigFormat,
    ErrorCode,
    NormalizedConfig,
    PaymentRequirementEntry,
    ValidationIssue,
    ValidationResult,
    entry_path,
)
from x402check.models.issues import error
from x402check.registry.networks import REGISTRY, NetworkRegistry
from x402check.rules.address import check_asset, check_pay_to
from x402check.rules.amount import check_amount
from x402check.rules.network import check_network
from x402check.rules.requirements import check_requirements
from x402check.rules.structure import check_structure

LOGGER = logging.getLogger(__name__)

ConfigInput = Union[str, bytes, Mapping[str, Any], list]


class ValidationOptions(BaseModel):
    """Caller options for :func:`validate`."""

    strict: bool = False


def _fatal(issue: ValidationIssue) -> ValidationResult:
    return ValidationResult(valid=False, format=ConfigFormat.UNRECOGNIZED, errors=[issue])


def _parse(config: Any) -> Tuple[Any, Optional[ValidationIssue]]:
    """Turn the caller's input into a document, or a single fatal issue."""
    if isinstance(config, bytes):
        try:
            config = config.decode("utf-8")
        except UnicodeDecodeError as exc:
            return None, error(ErrorCode.INVALID_JSON, "$", f"Input is not UTF-8 text: {exc}")

    if isinstance(config, str):
        try:
            config = json.loads(config)
        except RecursionError:
            return None, error(ErrorCode.INVALID_JSON, "$", "JSON is nested too deeply to parse")
        except ValueError as exc:
            return None, error(
                ErrorCode.INVALID_JSON,
                "$",
                f"Input is not valid JSON: {exc}",
                fix="Check for trailing commas, unquoted keys and mismatched brackets",
            )
    elif not isinstance(config, (Mapping, list)):
        raise TypeError(f"validate() expects a JSON string or a mapping, got {type(config).__name__}")

    if not isinstance(config, Mapping):
        return None, error(
            ErrorCode.NOT_OBJECT,
            "$",
            f"Configuration must be a JSON object, got {type(config).__name__}",
            fix='Wrap the configuration in an object: {"x402Version": 2, "accepts": [...]}',
        )
    return config, None


def _unrecognized(document: Mapping[str, Any]) -> ValidationIssue:
    if ENTRIES_KEY in document:
        return error(
            ErrorCode.INVALID_ACCEPTS,
            ENTRIES_KEY,
            "accepts must be an array of payment requirements",
            fix='Use "accepts": [{...}]',
        )
    return error(
        ErrorCode.UNKNOWN_FORMAT,
        "$",
        "Not a recognizable x402 payment configuration",
        fix='Expected {"x402Version": 2, "accepts": [...], "resource": {...}}',
    )


def _invalid_entry(index: int, raw: Any) -> ValidationIssue:
    return error(
        ErrorCode.INVALID_ACCEPTS,
        entry_path(index),
        f"Each payment requirement must be an object, got {type(raw).__name__}",
        fix='Use an object such as {"scheme": "exact", "network": "eip155:8453", ...}',
    )


def check_entry(entry: PaymentRequirementEntry, index: int, registry: NetworkRegistry = REGISTRY) -> List[ValidationIssue]:
    """Run the per-entry rules in their fixed order."""
    path = entry_path(index)
    return (
        check_requirements(entry, path)
        + check_amount(entry, path, registry)
        + check_network(entry, path, registry)
        + check_pay_to(entry, path, registry)
        + check_asset(entry, path, registry)
    )


def apply_strict(result: ValidationResult) -> ValidationResult:
    """Reclassify every warning as an error; detections are left untouched."""
    promoted = [issue.model_copy(update={"severity": "error"}) for issue in result.warnings]
    errors = list(result.errors) + promoted
    return result.model_copy(update={"errors": errors, "warnings": [], "valid": not errors})


def _resolve_strict(options: Any, strict: Optional[bool]) -> bool:
    if strict is not None:
        return strict
    if options is None:
        return False
    if isinstance(options, ValidationOptions):
        return options.strict
    if isinstance(options, Mapping):
        return bool(options.get("strict", False))
    raise TypeError(f"options must be a ValidationOptions or a mapping, got {type(options).__name__}")


def validate(
    config: ConfigInput,
    options: Union[ValidationOptions, Mapping[str, Any], None] = None,
    *,
    strict: Optional[bool] = None,
    registry: NetworkRegistry = REGISTRY,
) -> ValidationResult:
    """Validate an x402 payment configuration.

    Data problems never raise; they come back as issues on the result. Only an
    input of an unsupported Python type raises ``TypeError``.
    """
    use_strict = _resolve_strict(options, strict)

    document, fatal = _parse(config)
    if fatal is not None:
        result = _fatal(fatal)
        return apply_strict(result) if use_strict else result

    fmt = detect_format(document)
    LOGGER.debug("Detected %s configuration format", fmt.value)
    if fmt is ConfigFormat.UNRECOGNIZED:
        result = _fatal(_unrecognized(document))
        return apply_strict(result) if use_strict else result

    normalized, issues = normalize_document(document, fmt)
    issues = issues + check_structure(normalized)
    # flat documents have no entry list; their single entry is always an object
    raw_entries = document.get(ENTRIES_KEY) or []
    for index, entry in enumerate(normalized.accepts):
        if index < len(raw_entries) and not isinstance(raw_entries[index], Mapping):
            issues.append(_invalid_entry(index, raw_entries[index]))
            continue
        issues.extend(check_entry(entry, index, registry))

    errors = [issue for issue in issues if issue.severity == "error"]
    warnings = [issue for issue in issues if issue.severity == "warning"]
    result = ValidationResult(
        valid=not errors,
        format=fmt,
        errors=errors,
        warnings=warnings,
        normalized=normalized,
    )
    LOGGER.debug(
        "Validated %s configuration: %d entries, %d errors, %d warnings",
        fmt.value,
        len(normalized.accepts),
        len(errors),
        len(warnings),
    )
    return apply_strict(result) if use_strict else result


def detect(config: Any) -> ConfigFormat:
    """Classify ``config`` without validating it; unparseable input is unrecognized."""
    if isinstance(config, NormalizedConfig):
        config = config.to_document()
    try:
        document, fatal = _parse(config)
    except TypeError:
        return ConfigFormat.UNRECOGNIZED
    if fatal is not None:
        return ConfigFormat.UNRECOGNIZED
    return detect_format(document)


def normalize_with_warnings(config: Any) -> Tuple[Optional[NormalizedConfig], List[ValidationIssue]]:
    """Like :func:`normalize`, also returning the translation warnings."""
    if isinstance(config, NormalizedConfig):
        config = config.to_document()
    try:
        document, fatal = _parse(config)
    except TypeError:
        return None, []
    if fatal is not None:
        return None, []
    fmt = detect_format(document)
    if fmt is ConfigFormat.UNRECOGNIZED:
        return None, []
    return normalize_document(document, fmt)


def normalize(config: Any) -> Optional[NormalizedConfig]:
    """Return the canonical form of ``config``, or None when it is not recognized."""
    normalized, _ = normalize_with_warnings(config)
    return normalized


__all__ = [
    "validate",
    "detect",
    "normalize",
    "normalize_with_warnings",
    "apply_strict",
    "check_entry",
    "ValidationOptions",
]
