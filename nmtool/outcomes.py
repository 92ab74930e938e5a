"""Classification of connection command output into outcome codes."""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "ConnectOutcome",
    "classify_wired_output",
    "classify_wifi_output",
    "classify_password_output",
    "hidden_wifi_needs_retry",
]


class ConnectOutcome(IntEnum):
    """Result codes reported after a connection attempt.

    Wired and wireless attempts share the numeric space, so some codes carry
    a second name for the wireless meaning.
    """

    SUCCESS = 0
    FAILED = 1
    NO_CABLE = 1
    BLUETOOTH_CONNECTED = 2
    NO_PROFILE = 2
    IP_CONFIG_UNAVAILABLE = 4
    SECRETS_REQUIRED = 4
    MAC_MISMATCH = 5
    OUT_OF_RANGE = 5
    KILLED = 6
    BLUETOOTH_FAILED = 7
    CARRIER_CHANGED = 8
    WIRED_FAILED = 9


def classify_wired_output(info: str, connect_type: str = "") -> ConnectOutcome:
    """Classify the output of bringing up a wired or bluetooth connection."""
    if "successfully" in info:
        if connect_type == "bluetooth":
            return ConnectOutcome.BLUETOOTH_CONNECTED
        return ConnectOutcome.SUCCESS
    if "IP configuration could not be reserved" in info:
        return ConnectOutcome.IP_CONFIG_UNAVAILABLE
    if any(token in info for token in ("MACs", "Mac", "MAC")):
        return ConnectOutcome.MAC_MISMATCH
    if "Killed" in info or "killed" in info:
        return ConnectOutcome.KILLED
    if "The Bluetooth connection failed" in info:
        return ConnectOutcome.BLUETOOTH_FAILED
    if "Carrier/link changed" in info:
        return ConnectOutcome.CARRIER_CHANGED
    return ConnectOutcome.WIRED_FAILED


def classify_wifi_output(info: str) -> ConnectOutcome | None:
    """Classify the output of bringing up a wireless connection.

    Returns None when the output calls for no report at all.
    """
    if "successfully" in info:
        return ConnectOutcome.SUCCESS
    if "unknown" in info or "not exist" in info:
        return ConnectOutcome.NO_PROFILE
    if "The connection was not a Wi-Fi connection.." in info:
        return ConnectOutcome.NO_PROFILE
    if "not given" in info or "Secrets were required" in info:
        return None
    if "Passwords or encryption keys are required" in info:
        return ConnectOutcome.SECRETS_REQUIRED
    return ConnectOutcome.FAILED


def classify_password_output(line: str) -> ConnectOutcome:
    """Classify the first line printed by a connect-with-password command."""
    if "successfully" in line:
        return ConnectOutcome.SUCCESS
    return ConnectOutcome.FAILED


def hidden_wifi_needs_retry(text: str) -> bool:
    """Tell whether a hidden network connect attempt should be retried."""
    return (
        not text
        or "Scanning not allowed" in text
        or "No network with SSID" in text
    )