"""Device state parsing for ``nmcli -f TYPE,DEVICE,STATE device`` output."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = ["LinkState", "DeviceStates", "parse_device_states"]


class LinkState(IntEnum):
    """Connection state of a wired or wireless device."""

    CONNECTED = 0
    DISCONNECTED = 1
    OFF = 2
    CONNECTING = 3


@dataclass
class DeviceStates:
    """The first relevant wired and wireless device and their states."""

    wired_name: str = ""
    wifi_name: str = ""
    wired_state: LinkState = LinkState.OFF
    wifi_state: LinkState = LinkState.OFF


_WIRED_CONNECTED = {"connected", "connecting (getting IP configuration)"}


def _wired_state(state: str) -> LinkState:
    if state == "unmanaged":
        return LinkState.OFF
    if state in ("disconnected", "unavailable"):
        return LinkState.DISCONNECTED
    if state in _WIRED_CONNECTED:
        return LinkState.CONNECTED
    return LinkState.CONNECTING


def _wifi_state(state: str) -> LinkState:
    if state in ("unmanaged", "unavailable"):
        return LinkState.OFF
    if state == "disconnected":
        return LinkState.DISCONNECTED
    if state == "connected":
        return LinkState.CONNECTED
    return LinkState.CONNECTING


def _split_line(line: str) -> tuple[str, str, str]:
    dev_type, _, rest = line.partition(" ")
    rest = rest.strip()
    name, _, state = rest.partition(" ")
    return dev_type, name, state.strip()


def parse_device_states(text: str) -> DeviceStates:
    """Parse device listing text (header line first) into device states.

    Once a wired device is seen connected, later wired devices are ignored so
    that one disconnected card cannot mask a working one. Only the first
    wireless device is considered.
    """
    states = DeviceStates()
    for line in text.split("\n")[1:]:
        if not line:
            continue
        dev_type, name, state = _split_line(line)
        if dev_type == "ethernet" and states.wired_state != LinkState.CONNECTED:
            states.wired_name = name
            states.wired_state = _wired_state(state)
        if dev_type == "wifi" and not states.wifi_name:
            states.wifi_name = name
            states.wifi_state = _wifi_state(state)
    return states