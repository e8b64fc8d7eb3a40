"""Checks for the namespaced network identifier of an entry."""

from __future__ import annotations

from typing import List

from x402check.models import ErrorCode, PaymentRequirementEntry, ValidationIssue
from x402check.models.issues import error, warning
from x402check.registry.networks import REGISTRY, NetworkRegistry, parse_network_id
from x402check.rules.requirements import is_missing

EXAMPLE_NETWORK = "eip155:8453"


def check_network(
    entry: PaymentRequirementEntry,
    path: str,
    registry: NetworkRegistry = REGISTRY,
) -> List[ValidationIssue]:
    """Check identifier syntax, then look it up in the registry."""
    network = entry.network
    if is_missing(network):
        return []

    field = f"{path}.network"
    if not isinstance(network, str):
        return [
            error(
                ErrorCode.INVALID_NETWORK_FORMAT,
                field,
                "network must be a string of the form namespace:reference",
                fix=f'Use a CAIP-2 identifier such as "{EXAMPLE_NETWORK}"',
            )
        ]

    canonical = registry.aliases.get(network)
    if canonical is not None:
        info = registry.networks[canonical]
        return [
            warning(
                ErrorCode.NETWORK_ALIAS,
                field,
                f"'{network}' is a legacy short name for {info.name}",
                fix=f'Use the CAIP-2 identifier "{canonical}"',
            )
        ]

    parsed = parse_network_id(network)
    if parsed is None:
        return [
            error(
                ErrorCode.INVALID_NETWORK_FORMAT,
                field,
                f"'{network}' is not a valid namespace:reference network identifier",
                fix=f'Use a CAIP-2 identifier such as "{EXAMPLE_NETWORK}"',
            )
        ]

    if network in registry.networks:
        return []

    namespace = parsed[0]
    if namespace in registry.namespace_families:
        return [
            warning(
                ErrorCode.UNKNOWN_NETWORK,
                field,
                f"'{network}' is not a known {namespace} network; address checks use the {namespace} rules",
                fix="Double-check the chain reference",
            )
        ]

    known = ", ".join(sorted(registry.namespace_families))
    return [
        error(
            ErrorCode.UNKNOWN_NAMESPACE,
            field,
            f"Unsupported network namespace '{namespace}'; supported namespaces: {known}",
            fix=f'Use a supported network such as "{EXAMPLE_NETWORK}"',
        )
    ]


__all__ = ["check_network", "EXAMPLE_NETWORK"]
