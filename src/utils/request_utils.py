"""Validation helpers for DNS resolve test parameters."""

import dns.rdatatype

from src.models.dns_test import SUPPORTED_QUERY_TYPES


def normalize_query_type(query_type: str) -> str:
    """Validate and upper-case a DNS query type.

    The type must be a record type dnspython knows and one the PerfOps DNS
    resolve test supports.

    Args:
        query_type: Query type as typed by the user (e.g. "aaaa").

    Returns:
        str: Canonical upper-case query type.

    Raises:
        ValueError: If the type is unknown or unsupported.

    Examples:
        >>> normalize_query_type("mx")
        'MX'
        >>> normalize_query_type("AXFR")
        Traceback (most recent call last):
        ...
        ValueError: Unsupported DNS query type: AXFR
    """
    candidate = query_type.strip().upper()
    try:
        dns.rdatatype.from_text(candidate)
    except dns.rdatatype.UnknownRdatatype:
        raise ValueError(f"Unknown DNS query type: {query_type}") from None

    if candidate not in SUPPORTED_QUERY_TYPES:
        raise ValueError(f"Unsupported DNS query type: {candidate}")
    return candidate


def parse_node_ids(value: str) -> tuple[int, ...]:
    """Parse a comma-separated list of node IDs.

    Args:
        value: e.g. "12, 34,56" (empty string for none).

    Returns:
        tuple[int, ...]: Node IDs in the given order.

    Raises:
        ValueError: If an entry is not a positive integer.

    Examples:
        >>> parse_node_ids("12, 34,56")
        (12, 34, 56)
        >>> parse_node_ids("")
        ()
    """
    node_ids = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit() or int(part) == 0:
            raise ValueError(f"Invalid node ID: {part}")
        node_ids.append(int(part))
    return tuple(node_ids)
