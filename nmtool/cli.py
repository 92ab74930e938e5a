"""Command line front end for the network backend."""

from __future__ import annotations

import argparse
from typing import Sequence

from nmtool.backend import NetworkBackend
from nmtool.outcomes import ConnectOutcome

__all__ = ["main"]


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nmtool", description="Manage network connections.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="show wired and wireless device states")
    net = sub.add_parser("networking", help="switch networking on or off")
    net.add_argument("state", choices=["on", "off"])
    wifi = sub.add_parser("wifi", help="switch the wireless radio on or off")
    wifi.add_argument("state", choices=["on", "off"])

    wired = sub.add_parser("connect-wired", help="bring up a wired connection")
    wired.add_argument("name")
    wired.add_argument("ifname")
    wired.add_argument("--type", default="ethernet", dest="connect_type")

    wl = sub.add_parser("connect-wifi", help="bring up a wireless connection")
    wl.add_argument("name")
    wl.add_argument("--ifname", default="")
    wl.add_argument("--uuid", default="")

    secured = sub.add_parser("connect-password", help="connect to a network with a password")
    secured.add_argument("name")
    secured.add_argument("password")
    secured.add_argument("--conn-type", default="")

    hidden = sub.add_parser("connect-hidden", help="connect to a hidden network")
    hidden.add_argument("ssid")
    hidden.add_argument("password")

    remembered = sub.add_parser("connect-remembered", help="bring up a saved hidden network")
    remembered.add_argument("ssid")

    reconnect = sub.add_parser("reconnect", help="take a connection down and up again")
    reconnect.add_argument("uuid")

    props = sub.add_parser("props", help="show addressing settings of a connection")
    props.add_argument("name")

    speed = sub.add_parser("speed", help="show the speed of a wired card")
    speed.add_argument("ifname")

    down = sub.add_parser("disconnect", help="take down active connections of a type")
    down.add_argument("net_type", choices=["ethernet", "wifi"])
    return parser


def _report(outcome: int | None) -> int:
    if outcome is None:
        print("no result")
        return 1
    try:
        label = ConnectOutcome(outcome).name.lower()
    except ValueError:
        label = f"exit status {outcome}"
    print(label)
    return 0 if outcome == ConnectOutcome.SUCCESS else 1


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, carry out the command and return an exit status."""
    args = _parser().parse_args(argv)
    backend = NetworkBackend()
    command = args.command

    if command == "status":
        states = backend.get_device_states()
        print(f"wired {states.wired_name or '-'} {states.wired_state.name.lower()}")
        print(f"wifi {states.wifi_name or '-'} {states.wifi_state.name.lower()}")
        return 0
    if command == "networking":
        if args.state == "on":
            backend.enable_networking()
        else:
            backend.disable_networking()
        return 0
    if command == "wifi":
        if args.state == "on":
            backend.enable_wifi()
        else:
            backend.disable_wifi()
        return 0
    if command == "connect-wired":
        return _report(backend.connect_wired(args.name, args.ifname, args.connect_type))
    if command == "connect-wifi":
        return _report(backend.connect_wifi(args.name, args.ifname, args.uuid))
    if command == "connect-password":
        return _report(
            backend.connect_wifi_with_password(args.name, args.password, args.conn_type)
        )
    if command == "connect-hidden":
        return _report(backend.connect_hidden_wifi(args.ssid, args.password))
    if command == "connect-remembered":
        return _report(backend.connect_remembered_hidden_wifi(args.ssid))
    if command == "reconnect":
        backend.reconnect_wifi(args.uuid)
        return 0
    if command == "props":
        print(backend.connection_properties(args.name).to_summary())
        return 0
    if command == "speed":
        speed = backend.link_speed(args.ifname)
        print(speed or "unknown")
        return 0 if speed else 1
    for name in backend.disconnect_type(args.net_type):
        print(name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())