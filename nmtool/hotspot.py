"""Form state and command for creating a Wi-Fi hotspot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = ["HotspotSecurity", "HotspotForm"]

MIN_PASSWORD_LENGTH = 5


class HotspotSecurity(IntEnum):
    """Security choices offered for a new hotspot."""

    NONE = 0
    WPA_PERSONAL = 1


@dataclass
class HotspotForm:
    """What the user entered to create a hotspot on a wireless card."""

    ifname: str
    name: str = ""
    password: str = ""
    security: HotspotSecurity = HotspotSecurity.WPA_PERSONAL

    def password_enabled(self) -> bool:
        """Tell whether the password field applies to the chosen security."""
        return self.security != HotspotSecurity.NONE

    def can_submit(self) -> bool:
        """Tell whether the form holds enough to create the hotspot."""
        if not self.name:
            return False
        if not self.password_enabled():
            return True
        return len(self.password) >= MIN_PASSWORD_LENGTH

    def command_args(self) -> list[str]:
        """Build the argument list that creates the hotspot.

        Raises ValueError when the form cannot be submitted.
        """
        if not self.can_submit():
            raise ValueError("hotspot form is incomplete")
        args = [
            "nmcli", "device", "wifi", "hotspot",
            "ifname", self.ifname,
            "con-name", self.name,
            "ssid", self.name,
        ]
        if self.password_enabled():
            args += ["password", self.password]
        return args