"""Endpoints exposing validation, format detection and normalization."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, Query

from x402check.config import get_settings
from x402check.models import ValidationResult
from x402check.validation import detect, normalize_with_warnings, validate

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["validation"])


@router.post("/validate", response_model=ValidationResult)
def validate_config(
    payload: Any = Body(...),
    strict: Optional[bool] = Query(default=None, description="Promote warnings to errors"),
) -> ValidationResult:
    """Validate a configuration submitted as a JSON object (or a string holding JSON)."""
    use_strict = get_settings().strict_default if strict is None else strict
    try:
        result = validate(payload, strict=use_strict)
    except TypeError as exc:
        LOGGER.warning("Rejected validation body of type %s", type(payload).__name__)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    LOGGER.info(
        "Validated %s configuration (strict=%s): %d errors, %d warnings",
        result.format.value,
        use_strict,
        len(result.errors),
        len(result.warnings),
    )
    return result


@router.post("/detect")
def detect_config(payload: Any = Body(...)) -> Dict[str, str]:
    """Report which configuration shape the body has."""
    return {"format": detect(payload).value}


@router.post("/normalize")
def normalize_config(payload: Any = Body(...)) -> Dict[str, Any]:
    """Return the canonical form of the body together with the translation warnings."""
    normalized, warnings = normalize_with_warnings(payload)
    return {
        "format": detect(payload).value,
        "normalized": normalized.to_document() if normalized is not None else None,
        "warnings": [issue.model_dump(mode="json") for issue in warnings],
    }


__all__ = ["router"]
