"""Parsing of connection details and link speed reports."""

from __future__ import annotations

from dataclasses import dataclass, fields

__all__ = [
    "ConnectionProperties",
    "parse_connection_properties",
    "parse_link_speed",
]

_EMPTY_VALUES = ("--", "")


@dataclass
class ConnectionProperties:
    """Addressing settings of one saved connection.

    A field left as None was not present in the parsed text.
    """

    method: str | None = None
    v4addr: str | None = None
    mask: str | None = None
    v6method: str | None = None
    v6addr: str | None = None
    gateway: str | None = None
    dns: str | None = None

    def to_summary(self) -> str:
        """Render as ``key:value`` pairs joined by ``|``."""
        return "|".join(
            f"{f.name}:{getattr(self, f.name)}"
            for f in fields(self)
            if getattr(self, f.name) is not None
        )


def _value(line: str, key: str) -> str:
    return line[len(key):].strip()


def _or_empty(value: str) -> str:
    return "" if value in _EMPTY_VALUES else value


def parse_connection_properties(text: str) -> ConnectionProperties:
    """Parse ``nmcli connection show <name>`` output."""
    props = ConnectionProperties()
    for line in text.split("\n"):
        if line.startswith("ipv4.method:"):
            props.method = _value(line, "ipv4.method:")
        if line.startswith("ipv4.addresses:"):
            value = _or_empty(_value(line, "ipv4.addresses:"))
            if value:
                parts = value.split("/")
                props.v4addr = parts[0]
                props.mask = parts[1] if len(parts) > 1 else ""
            else:
                props.v4addr = ""
                props.mask = ""
        if line.startswith("ipv6.method:"):
            if _value(line, "ipv6.method:") == "auto":
                props.v6method = "auto"
                props.v6addr = ""
            else:
                props.v6method = "manual"
        if line.startswith("ipv6.addresses:"):
            value = _or_empty(_value(line, "ipv6.addresses:"))
            props.v6addr = value.split("/")[0] if value else ""
        if line.startswith("ipv4.gateway:"):
            props.gateway = _or_empty(_value(line, "ipv4.gateway:"))
        if line.startswith("ipv4.dns:"):
            props.dns = _or_empty(_value(line, "ipv4.dns:"))
    return props


def parse_link_speed(text: str) -> str:
    """Extract the speed value from an ethtool ``Speed:`` line."""
    first_line = text.split("\n", 1)[0]
    params = first_line.split(":")
    if len(params) < 2:
        return ""
    return params[1].strip()