"""Network operations carried out through the ``nmcli`` command line tool."""

from __future__ import annotations

import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from nmtool.connprop import ConnectionProperties, parse_connection_properties, parse_link_speed
from nmtool.devices import DeviceStates, LinkState, parse_device_states
from nmtool.outcomes import (
    ConnectOutcome,
    classify_password_output,
    classify_wifi_output,
    classify_wired_output,
    hidden_wifi_needs_retry,
)

__all__ = ["CommandResult", "CommandRunner", "NetworkBackend"]

_ENGLISH = {"LANG": "en_US.UTF-8", "LANGUAGE": "en_US"}
_HIDDEN_WIFI_ATTEMPTS = 3
_SCAN_COOLDOWN = 10
_TYPE_ALIASES = {"wifi": "802-11-wireless", "ethernet": "802-3-ethernet"}


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of one command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        return self.stdout + self.stderr


class CommandRunner:
    """Run commands with an English locale so their output can be parsed."""

    def __init__(self, env: dict[str, str] | None = None) -> None:
        self.env = dict(_ENGLISH if env is None else env)

    def run(self, args: Sequence[str]) -> CommandResult:
        """Run a program with arguments and capture its output.

        A program that cannot be started yields exit status 127.
        """
        try:
            proc = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                env={**os.environ, **self.env},
                check=False,
            )
        except OSError as exc:
            return CommandResult(127, "", str(exc))
        return CommandResult(proc.returncode, proc.stdout, proc.stderr)

    def shell(self, command: str) -> CommandResult:
        """Run a command line through bash."""
        return self.run(["/bin/bash", "-c", command])


def _carrier_present(ifname: str) -> bool:
    try:
        return Path("/sys/class/net", ifname, "carrier").read_text().strip() == "1"
    except OSError:
        return False


class NetworkBackend:
    """Switch networking and radios on and off and bring connections up."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        access_point_count: Callable[[], int] | None = None,
        cable_present: Callable[[str], bool] | None = None,
        max_polls: int | None = None,
    ) -> None:
        self.runner = runner if runner is not None else CommandRunner()
        self._sleep = sleep
        self._access_point_count = access_point_count or self._count_access_points
        self._cable_present = cable_present or _carrier_present
        self.max_polls = max_polls

    def _count_access_points(self) -> int:
        result = self.runner.run(["nmcli", "-f", "BSSID", "device", "wifi", "list"])
        return sum(1 for line in result.stdout.split("\n")[1:] if line.strip())

    def _wait_until(self, predicate: Callable[[], bool], interval: float) -> None:
        polls = 0
        while not predicate():
            polls += 1
            if self.max_polls is not None and polls > self.max_polls:
                raise TimeoutError("device did not reach the expected state")
            self._sleep(interval)

    def get_device_states(self) -> DeviceStates:
        """Read the state of the first wired and wireless devices."""
        result = self.runner.run(["nmcli", "-f", "TYPE,DEVICE,STATE", "device"])
        return parse_device_states(result.stdout)

    def enable_networking(self) -> None:
        """Turn networking on and wait until the wired device is managed."""
        self.runner.run(["nmcli", "networking", "on"])
        self._wait_until(lambda: self.get_device_states().wired_state != LinkState.OFF, 1)
        self._sleep(3)

    def disable_networking(self) -> None:
        """Turn the wireless radio off first, then networking as a whole."""
        if self.get_device_states().wifi_state != LinkState.OFF:
            self.disable_wifi()
        self.runner.run(["nmcli", "networking", "off"])
        self._wait_until(lambda: self.get_device_states().wired_state == LinkState.OFF, 1)

    def enable_wifi(self) -> None:
        """Turn the wireless radio on and wait until access points are seen."""
        self.runner.run(["nmcli", "radio", "wifi", "on"])
        self._wait_until(lambda: self.get_device_states().wifi_state != LinkState.OFF, 1)
        self._wait_until(lambda: self._access_point_count() > 0, 2)

    def disable_wifi(self) -> None:
        """Turn the wireless radio off and wait until the device reports it."""
        self.runner.run(["nmcli", "radio", "wifi", "off"])
        self._wait_until(lambda: self.get_device_states().wifi_state == LinkState.OFF, 1)

    def connect_wired(self, conn_name: str, ifname: str, connect_type: str = "") -> ConnectOutcome:
        """Bring up a wired or bluetooth connection and classify the result.

        A failed attempt is followed by taking the connection down again.
        """
        if connect_type == "bluetooth":
            args = ["nmcli", "connection", "up", conn_name]
        else:
            if not self._cable_present(ifname):
                return ConnectOutcome.NO_CABLE
            args = ["nmcli", "connection", "up", conn_name, "ifname", ifname]
        result = self.runner.run(args)
        info = result.output
        outcome = classify_wired_output(info, connect_type)
        if "successfully" not in info:
            self.runner.run(["nmcli", "connection", "down", conn_name])
        return outcome

    def connect_wifi_with_password(self, conn_name: str, password: str, conn_type: str = "") -> ConnectOutcome:
        """Connect to a wireless network with a password."""
        if conn_type:
            self.runner.run(
                ["nmcli", "connection", "modify", conn_name, "wifi-sec.psk-flags", "0"]
            )
        result = self.runner.run(
            ["nmcli", "device", "wifi", "connect", conn_name, "password", password]
        )
        return classify_password_output(result.stdout.split("\n", 1)[0])

    def connect_hidden_wifi(self, ssid: str, password: str) -> ConnectOutcome:
        """Connect to a hidden network, retrying while scanning is not ready."""
        for _ in range(_HIDDEN_WIFI_ATTEMPTS):
            result = self.runner.run(
                ["nmcli", "device", "wifi", "connect", ssid,
                 "password", password, "hidden", "yes"]
            )
            if not hidden_wifi_needs_retry(result.output):
                return ConnectOutcome.SUCCESS
            self._sleep(_SCAN_COOLDOWN)
        return ConnectOutcome.FAILED

    def connect_remembered_hidden_wifi(self, ssid: str) -> int | None:
        """Bring up a saved hidden network if it is currently in range.

        Returns the exit status of the connect command, OUT_OF_RANGE when the
        network is not visible, or None when scanning itself failed.
        """
        scan = self.runner.run(["nmcli", "-f", "ssid", "device", "wifi"])
        if scan.returncode != 0:
            return None
        visible = {line.strip() for line in scan.stdout.split("\n")}
        if ssid not in visible:
            return ConnectOutcome.OUT_OF_RANGE
        return self.runner.run(["nmcli", "connection", "up", ssid]).returncode

    def connect_wifi(self, conn_name: str, ifname: str, uuid: str = "") -> ConnectOutcome | None:
        """Bring up a wireless connection, by its saved profile when known."""
        if uuid:
            args = ["nmcli", "connection", "up", uuid]
        else:
            args = ["nmcli", "connection", "up", conn_name, "ifname", ifname]
        return classify_wifi_output(self.runner.run(args).output)

    def reconnect_wifi(self, uuid: str) -> None:
        """Take a wireless connection down and bring it up again."""
        self.runner.run(["nmcli", "connection", "down", uuid])
        self.runner.run(["nmcli", "connection", "up", uuid])

    def connection_properties(self, conn_name: str) -> ConnectionProperties:
        """Read the addressing settings of a saved connection."""
        result = self.runner.run(["nmcli", "connection", "show", conn_name])
        return parse_connection_properties(result.stdout)

    def link_speed(self, ifname: str) -> str:
        """Read the negotiated speed of a wired card, or '' if unknown."""
        result = self.runner.run(["ethtool", ifname])
        speed_lines = [line for line in result.stdout.split("\n") if "Speed" in line]
        return parse_link_speed("\n".join(speed_lines))

    def disconnect_type(self, net_type: str) -> list[str]:
        """Take down every active connection of a type; return their names."""
        result = self.runner.run(["nmcli", "connection", "show", "--active"])
        wanted = net_type
        names = []
        for line in result.stdout.split("\n"):
            alias = _TYPE_ALIASES.get(wanted)
            if alias is not None and alias in line:
                wanted = alias
            if not line or wanted not in line:
                continue
            parts = line.split(" ")
            if len(parts) > 1 and len(parts[1]) == 1:
                name = f"{parts[0]} {parts[1]}"
            else:
                name = parts[0]
            self.runner.run(["nmcli", "connection", "down", name])
            names.append(name)
        return names