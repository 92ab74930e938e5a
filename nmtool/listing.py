"""Retrieval of wired, wireless and saved network listings."""

from __future__ import annotations

import os
import subprocess
import threading
from typing import Callable, Mapping, Optional, Sequence

__all__ = ["NetworkLister"]

BUSY_MARKER = "Empty"

_WIRED_ENV = {"LANG": "zh_CN.UTF-8", "LANGUAGE": "zh_CN:zh"}
_WIFI_FIELDS = "in-use,signal,security,freq,bssid,ssid,dbus-path,category"

Runner = Callable[[Sequence[str], Optional[Mapping[str, str]]], str]


def _run(args: Sequence[str], env: Mapping[str, str] | None = None) -> str:
    full_env = None
    if env:
        full_env = {**os.environ, **env}
    result = subprocess.run(
        list(args), capture_output=True, text=True, env=full_env, check=False
    )
    return result.stdout


class NetworkLister:
    """Fetch network listings as lists of output lines.

    A listing requested while the same kind is still being fetched returns
    ``["Empty"]`` and marks that the previous listing should be reused.
    """

    def __init__(
        self,
        runner: Runner = _run,
        on_wifi_busy: Callable[[], None] | None = None,
    ) -> None:
        self._runner = runner
        self._on_wifi_busy = on_wifi_busy
        self._wired_lock = threading.Lock()
        self._wifi_lock = threading.Lock()
        self.use_old_wired = False
        self.use_old_wifi = False

    def list_wired(self) -> list[str]:
        """List saved connections with their type, uuid and name."""
        if not self._wired_lock.acquire(blocking=False):
            self.use_old_wired = True
            return [BUSY_MARKER]
        try:
            output = self._runner(
                ["nmcli", "-f", "type,uuid,name", "connection", "show"], _WIRED_ENV
            )
        finally:
            self._wired_lock.release()
        return output.split("\n")

    def list_wifi(self, ifname: str = "") -> list[str]:
        """List visible access points, optionally on one wireless card."""
        if not self._wifi_lock.acquire(blocking=False):
            self.use_old_wifi = True
            if self._on_wifi_busy is not None:
                self._on_wifi_busy()
            return [BUSY_MARKER]
        try:
            args = ["nmcli", "-f", _WIFI_FIELDS, "device", "wifi"]
            if ifname:
                args += ["list", "ifname", ifname]
            output = self._runner(args, None)
        finally:
            self._wifi_lock.release()
        return output.split("\n")

    def list_connections(self) -> list[str]:
        """List the names of saved connections."""
        output = self._runner(["nmcli", "-f", "name", "connection", "show"], None)
        return output.split("\n")