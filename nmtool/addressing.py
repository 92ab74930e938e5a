"""Validation and conversion helpers for IP settings."""

from __future__ import annotations

import re

__all__ = [
    "is_ipv4",
    "is_ipv6",
    "prefix_for_mask_index",
    "mask_index_for_prefix",
    "split_dns",
    "join_dns",
]

_IPV4_RE = re.compile(
    r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b"
)

_V4 = r"((25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)(\.(25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)){3})"
_H = r"[0-9A-Fa-f]{1,4}"

_IPV6_RE = re.compile(
    r"^\s*("
    rf"(({_H}:){{7}}({_H}|:))"
    rf"|(({_H}:){{6}}(:{_H}|{_V4}|:))"
    rf"|(({_H}:){{5}}(((:{_H}){{1,2}})|:{_V4}|:))"
    rf"|(({_H}:){{4}}(((:{_H}){{1,3}})|((:{_H})?:{_V4})|:))"
    rf"|(({_H}:){{3}}(((:{_H}){{1,4}})|((:{_H}){{0,2}}:{_V4})|:))"
    rf"|(({_H}:){{2}}(((:{_H}){{1,5}})|((:{_H}){{0,3}}:{_V4})|:))"
    rf"|(({_H}:){{1}}(((:{_H}){{1,6}})|((:{_H}){{0,4}}:{_V4})|:))"
    rf"|(:(((:{_H}){{1,7}})|((:{_H}){{0,5}}:{_V4})|:))"
    r")(%.+)?\s*$"
)

# Prefix lengths in the order the netmask choices are offered.
_PREFIXES = ("24", "23", "22", "16", "8")


def is_ipv4(text: str) -> bool:
    """Tell whether the whole text is a dotted IPv4 address."""
    return _IPV4_RE.fullmatch(text) is not None


def is_ipv6(text: str) -> bool:
    """Tell whether the whole text is an IPv6 address, optionally scoped."""
    return _IPV6_RE.fullmatch(text) is not None


def prefix_for_mask_index(index: int) -> str:
    """Return the prefix length for a netmask choice, defaulting to 24."""
    if 0 <= index < len(_PREFIXES):
        return _PREFIXES[index]
    return _PREFIXES[0]


def mask_index_for_prefix(prefix: str | int) -> int:
    """Return the netmask choice for a prefix length, defaulting to the first."""
    try:
        return _PREFIXES.index(str(prefix))
    except ValueError:
        return 0


def split_dns(dns: str) -> tuple[str, str]:
    """Split a comma separated DNS list into its first two servers."""
    if "," in dns:
        servers = dns.split(",")
        return servers[0], servers[1]
    return dns, ""


def join_dns(primary: str, secondary: str = "") -> str:
    """Join primary and secondary DNS servers into one comma separated value."""
    if secondary:
        return f"{primary},{secondary}"
    return primary