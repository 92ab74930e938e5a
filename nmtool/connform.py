"""State and commands of the wired/wireless connection settings form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from nmtool.addressing import (
    is_ipv4,
    is_ipv6,
    join_dns,
    mask_index_for_prefix,
    prefix_for_mask_index,
    split_dns,
)

__all__ = ["IpMethod", "ConnectionForm"]


class IpMethod(IntEnum):
    """How the IPv4 address of a connection is obtained."""

    AUTO = 0
    MANUAL = 1


@dataclass
class ConnectionForm:
    """Values entered to create or edit a network connection."""

    name: str = ""
    method: IpMethod = IpMethod.AUTO
    address: str = ""
    mask_index: int = 0
    gateway: str = ""
    dns: str = ""
    dns2: str = ""
    ipv6_address: str = ""
    uuid: str = ""
    last_name: str = ""
    last_ipv4: str = ""
    is_active: bool = False
    is_wifi: bool = False

    def load(
        self,
        conn_name: str,
        uuid: str,
        v4method: str,
        v4addr: str,
        v6method: str,
        v6addr: str,
        mask: str,
        gateway: str,
        dns: str,
        is_active: bool,
        is_wifi: bool,
    ) -> None:
        """Fill the form from the settings of an existing connection."""
        self.is_active = is_active
        self.name = conn_name
        self.last_name = conn_name
        self.last_ipv4 = v4addr
        self.uuid = uuid
        self.is_wifi = bool(is_wifi)
        self.method = IpMethod.AUTO if v4method in ("auto", "") else IpMethod.MANUAL
        if v6method == "manual":
            self.ipv6_address = v6addr
        self.address = v4addr
        self.gateway = gateway
        self.dns, self.dns2 = split_dns(dns)
        self.mask_index = mask_index_for_prefix(mask)

    def can_submit(self) -> bool:
        """Tell whether the entered values are complete and well formed."""
        if not self.name.strip():
            return False
        if self.method != IpMethod.MANUAL:
            return True
        if not is_ipv4(self.address):
            return False
        for optional in (self.gateway, self.dns):
            if optional and not is_ipv4(optional):
                return False
        if self.ipv6_address and not is_ipv6(self.ipv6_address):
            return False
        if self.dns2 and not is_ipv4(self.dns2):
            return False
        return True

    def prefix(self) -> str:
        """Return the prefix length of the chosen netmask."""
        return prefix_for_mask_index(self.mask_index)

    def dns_list(self) -> str:
        """Return the DNS servers as one comma separated value."""
        return join_dns(self.dns, self.dns2)

    def create_command(self, ifname: str) -> list[str]:
        """Build the arguments that add this connection on a wired card.

        Raises ValueError when the form cannot be submitted.
        """
        if not self.can_submit():
            raise ValueError("connection form is incomplete")
        args = [
            "nmcli", "connection", "add",
            "con-name", self.name.strip(),
            "ifname", ifname,
            "type", "ethernet",
        ]
        if self.method == IpMethod.MANUAL:
            args += [
                "ipv4.method", "manual",
                "ipv4.address", f"{self.address}/{self.prefix()}",
            ]
            if self.gateway:
                args += ["ipv4.gateway", self.gateway]
            if self.dns:
                args += ["ipv4.dns", join_dns(self.dns, self.dns2)]
        return args

    def ipv6_command(self, target: str) -> list[str]:
        """Build the arguments that apply the IPv6 setting to a connection."""
        args = ["nmcli", "connection", "modify", target]
        if self.ipv6_address:
            return args + ["ipv6.method", "manual", "ipv6.addresses", self.ipv6_address]
        return args + ["ipv6.method", "auto"]

    def needs_conflict_check(self) -> bool:
        """Tell whether a manually set, changed IPv4 address must be checked."""
        return self.method == IpMethod.MANUAL and self.address != self.last_ipv4