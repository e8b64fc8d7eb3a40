"""Document-level checks: version tag, entry list and resource descriptor."""

from __future__ import annotations

from typing import List, Mapping

from x402check.models import ErrorCode, NormalizedConfig, ValidationIssue
from x402check.models.issues import error, warning

SUPPORTED_VERSIONS = (1, 2)


def check_version(config: NormalizedConfig) -> List[ValidationIssue]:
    version = config.x402_version
    if version is None:
        return [
            error(
                ErrorCode.MISSING_VERSION,
                "x402Version",
                "x402Version is required (an integer protocol version)",
                fix="Add x402Version: 2",
            )
        ]
    if isinstance(version, bool) or not isinstance(version, int) or version not in SUPPORTED_VERSIONS:
        return [
            error(
                ErrorCode.INVALID_VERSION,
                "x402Version",
                f"Unsupported x402Version {version!r}; expected one of {', '.join(map(str, SUPPORTED_VERSIONS))}",
                fix="Set x402Version to 2",
            )
        ]
    return []


def check_entries(config: NormalizedConfig) -> List[ValidationIssue]:
    if not config.accepts:
        return [
            error(
                ErrorCode.EMPTY_ACCEPTS,
                "entries",
                "accepts must list at least one payment requirement",
                fix='Add an entry such as {"scheme": "exact", "network": "eip155:8453", ...}',
            )
        ]
    return []


def check_resource(config: NormalizedConfig) -> List[ValidationIssue]:
    """Malformed resource descriptors only warn; the resource is optional."""
    resource = config.resource
    if resource is None:
        return []
    if not isinstance(resource, Mapping):
        return [
            warning(
                ErrorCode.INVALID_RESOURCE,
                "resource",
                "resource should be an object with a url",
                fix='Use {"url": "https://example.com/paid-endpoint"}',
            )
        ]
    url = resource.get("url")
    if not isinstance(url, str) or not url.startswith(("http://", "https://")):
        return [
            warning(
                ErrorCode.INVALID_RESOURCE,
                "resource.url",
                "resource.url should be an absolute http(s) URL",
                fix='Set resource.url, e.g. "https://example.com/paid-endpoint"',
            )
        ]
    return []


def check_structure(config: NormalizedConfig) -> List[ValidationIssue]:
    """Run the document-level checks in their fixed order."""
    return check_version(config) + check_entries(config) + check_resource(config)


__all__ = ["check_structure", "check_version", "check_entries", "check_resource", "SUPPORTED_VERSIONS"]
