"""Detection of IPv4 and IPv6 address conflicts before applying settings."""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from typing import Callable, Sequence

__all__ = [
    "CHECKING_MESSAGE",
    "IPV4_CONFLICT_MESSAGE",
    "IPV6_CONFLICT_MESSAGE",
    "has_arping_responses",
    "arping_reports_conflict",
    "ping6_indicates_conflict",
    "ConflictChecker",
]

CHECKING_MESSAGE = "Will check the IP address conflict"
IPV4_CONFLICT_MESSAGE = "IPV4 address conflict, Please change IP"
IPV6_CONFLICT_MESSAGE = "IPV6 address conflict, Please change IP"

_ARPING_READ_LIMIT = 1024
_PING_TIMEOUT = 30.0

logger = logging.getLogger(__name__)


def has_arping_responses(text: str) -> bool:
    """Tell whether duplicate address detection output reports responses."""
    return "Received" in text and " response(s)" in text


def arping_reports_conflict(field: str) -> bool:
    """Tell whether the response count field of arping shows another host."""
    field = field.strip()
    return bool(field) and field != "0"


def ping6_indicates_conflict(output: str, address: str, active_address: str) -> bool:
    """Tell whether ping6 output shows the address in use by another host.

    Only the first line after the ``PING`` header counts. An answer from the
    address this machine already holds is not a conflict.
    """
    replies = [
        line for line in output.splitlines()
        if line.strip() and not line.startswith("PING")
    ]
    if not replies or "unreachable" in replies[0]:
        return False
    return address != active_address


def _run_output(args: Sequence[str]) -> str:
    result = subprocess.run(list(args), capture_output=True, text=True, check=False)
    return result.stdout[:_ARPING_READ_LIMIT]


def _ping6_first_reply(target: str) -> str:
    try:
        proc = subprocess.Popen(
            ["ping6", target],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except OSError:
        return ""
    lines = []
    with proc:
        timer = threading.Timer(_PING_TIMEOUT, proc.kill)
        timer.start()
        try:
            for line in proc.stdout:
                lines.append(line)
                if not line.startswith("PING"):
                    break
        finally:
            timer.cancel()
            proc.kill()
    return "".join(lines)


def _third_line_field(text: str) -> str:
    lines = text.split("\n")
    if len(lines) < 3:
        return ""
    fields = lines[2].split()
    return fields[1] if len(fields) > 1 else ""


class ConflictChecker:
    """Check whether an address about to be set is already used on the link.

    After a check starts, further checks within the cooldown are refused and
    reported as conflicts so that repeated clicks do not flood the network.
    """

    def __init__(
        self,
        run: Callable[[Sequence[str]], str] = _run_output,
        ping6: Callable[[str], str] = _ping6_first_reply,
        notify: Callable[[str], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
        cooldown: float = 2.0,
    ) -> None:
        self._run = run
        self._ping6 = ping6
        self._notify = notify or logger.info
        self._clock = clock
        self.cooldown = cooldown
        self._blocked_until: float | None = None

    def check(self, ifname: str, ipv4: str, ipv6: str = "", active_ipv6: str = "") -> bool:
        """Return True when the addresses conflict or a check is too soon."""
        now = self._clock()
        if self._blocked_until is not None and now < self._blocked_until:
            return True
        self._blocked_until = now + self.cooldown
        self._notify(CHECKING_MESSAGE)

        base = ["-f", "-I", ifname, "-D", ipv4]
        try:
            probe = self._run(["arping", "-c", "3", *base])
            if has_arping_responses(probe):
                detail = self._run(["arping", "-c", "1", *base])
                if arping_reports_conflict(_third_line_field(detail)):
                    self._notify(IPV4_CONFLICT_MESSAGE)
                    return True
        except OSError:
            return False

        if not ipv6:
            return False
        output = self._ping6(f"{ipv6}%{ifname}")
        if ping6_indicates_conflict(output, ipv6, active_ipv6):
            self._notify(IPV6_CONFLICT_MESSAGE)
            return True
        return False