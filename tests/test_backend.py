import sys

import pytest

from nmtool.backend import CommandResult, CommandRunner, NetworkBackend
from nmtool.devices import LinkState
from nmtool.outcomes import ConnectOutcome

HEADER = "TYPE DEVICE STATE\n"


def devices(wired="connected", wifi="disconnected"):
    return HEADER + f"ethernet eth0 {wired}\nwifi wlan0 {wifi}\n"


class FakeRunner:
    def __init__(self, handler=None):
        self.calls = []
        self.handler = handler or (lambda args: CommandResult(0))

    def run(self, args):
        self.calls.append(list(args))
        return self.handler(list(args))

    def shell(self, command):
        return self.run(["/bin/bash", "-c", command])


def device_sequence(states, other=None):
    queue = list(states)

    def handler(args):
        if args[:3] == ["nmcli", "-f", "TYPE,DEVICE,STATE"]:
            text = queue.pop(0) if len(queue) > 1 else queue[0]
            return CommandResult(0, text)
        if other is not None:
            return other(args)
        return CommandResult(0)

    return handler


def make_backend(handler, **kwargs):
    sleeps = []
    runner = FakeRunner(handler)
    backend = NetworkBackend(runner, sleep=sleeps.append, **kwargs)
    return backend, runner, sleeps


def test_get_device_states():
    backend, _, _ = make_backend(device_sequence([devices()]))
    states = backend.get_device_states()
    assert states.wired_name == "eth0"
    assert states.wired_state == LinkState.CONNECTED
    assert states.wifi_state == LinkState.DISCONNECTED


def test_enable_networking_polls_until_wired_managed():
    seq = [devices("unmanaged"), devices("unmanaged"), devices("connected")]
    backend, runner, sleeps = make_backend(device_sequence(seq))
    backend.enable_networking()
    assert runner.calls[0] == ["nmcli", "networking", "on"]
    assert sleeps == [1, 1, 3]


def test_disable_networking_turns_wifi_off_first():
    seq = [
        devices("connected", "connected"),
        devices("connected", "unavailable"),
        devices("unmanaged", "unavailable"),
    ]
    backend, runner, _ = make_backend(device_sequence(seq))
    backend.disable_networking()
    commands = [c for c in runner.calls if c[1] != "-f"]
    assert commands == [
        ["nmcli", "radio", "wifi", "off"],
        ["nmcli", "networking", "off"],
    ]


def test_disable_networking_skips_radio_when_already_off():
    seq = [devices("connected", "unavailable"), devices("unmanaged", "unavailable")]
    backend, runner, _ = make_backend(device_sequence(seq))
    backend.disable_networking()
    assert ["nmcli", "radio", "wifi", "off"] not in runner.calls
    assert ["nmcli", "networking", "off"] in runner.calls


def test_enable_wifi_waits_for_access_points():
    counts = [0, 0, 3]
    seq = [devices(wifi="unavailable"), devices(wifi="disconnected")]
    backend, runner, sleeps = make_backend(
        device_sequence(seq), access_point_count=lambda: counts.pop(0)
    )
    backend.enable_wifi()
    assert runner.calls[0] == ["nmcli", "radio", "wifi", "on"]
    assert sleeps == [1, 2, 2]
    assert counts == []


def test_disable_wifi_times_out_when_limit_reached():
    backend, _, sleeps = make_backend(
        device_sequence([devices(wifi="connected")]), max_polls=2
    )
    with pytest.raises(TimeoutError):
        backend.disable_wifi()
    assert sleeps == [1, 1]


def test_connect_wired_without_cable():
    backend, runner, _ = make_backend(None, cable_present=lambda ifname: False)
    outcome = backend.connect_wired("Office", "eth0", "ethernet")
    assert outcome == ConnectOutcome.NO_CABLE
    assert runner.calls == []


def test_connect_wired_bluetooth_ignores_cable():
    def handler(args):
        return CommandResult(0, "Connection successfully activated\n")

    backend, runner, _ = make_backend(handler, cable_present=lambda ifname: False)
    outcome = backend.connect_wired("Phone", "bt0", "bluetooth")
    assert outcome == ConnectOutcome.BLUETOOTH_CONNECTED
    assert runner.calls == [["nmcli", "connection", "up", "Phone"]]


def test_connect_wired_failure_takes_connection_down():
    def handler(args):
        if args[2] == "up":
            return CommandResult(4, "", "Error: device MACs do not match\n")
        return CommandResult(0)

    backend, runner, _ = make_backend(handler, cable_present=lambda ifname: True)
    outcome = backend.connect_wired("Office", "eth0", "ethernet")
    assert outcome == ConnectOutcome.MAC_MISMATCH
    assert runner.calls == [
        ["nmcli", "connection", "up", "Office", "ifname", "eth0"],
        ["nmcli", "connection", "down", "Office"],
    ]


def test_connect_wifi_with_password_sets_psk_flags():
    def handler(args):
        if args[1] == "device":
            return CommandResult(0, "Device 'wlan0' successfully activated\nmore\n")
        return CommandResult(0)

    backend, runner, _ = make_backend(handler)
    password = "password"
    outcome = backend.connect_wifi_with_password("home", password, "wifi")
    assert outcome == ConnectOutcome.SUCCESS
    assert runner.calls[0] == [
        "nmcli", "connection", "modify", "home", "wifi-sec.psk-flags", "0"
    ]


def test_connect_wifi_with_password_failure():
    backend, runner, _ = make_backend(lambda args: CommandResult(10, "Error\n"))
    password = "password"
    assert backend.connect_wifi_with_password("home", password, "") == ConnectOutcome.FAILED
    assert len(runner.calls) == 1


def test_connect_hidden_wifi_gives_up_after_three_attempts():
    backend, runner, sleeps = make_backend(
        lambda args: CommandResult(10, "Error: No network with SSID 'x' found.\n")
    )
    password = "password"
    assert backend.connect_hidden_wifi("x", password) == ConnectOutcome.FAILED
    assert len(runner.calls) == 3
    assert sleeps == [10, 10, 10]


def test_connect_hidden_wifi_success():
    backend, runner, sleeps = make_backend(
        lambda args: CommandResult(0, "Device 'wlan0' successfully activated\n")
    )
    password = "password"
    assert backend.connect_hidden_wifi("x", password) == ConnectOutcome.SUCCESS
    assert runner.calls[0][-2:] == ["hidden", "yes"]
    assert sleeps == []


@pytest.mark.parametrize(
    "scan, expected",
    [
        (CommandResult(0, "SSID\nhome  \nhidden\n"), 0),
        (CommandResult(0, "SSID\nother\n"), ConnectOutcome.OUT_OF_RANGE),
        (CommandResult(1, ""), None),
    ],
)
def test_connect_remembered_hidden_wifi(scan, expected):
    def handler(args):
        if args[1] == "-f":
            return scan
        return CommandResult(0)

    backend, _, _ = make_backend(handler)
    assert backend.connect_remembered_hidden_wifi("hidden") == expected


def test_connect_wifi_by_uuid_and_by_name():
    backend, runner, _ = make_backend(
        lambda args: CommandResult(0, "Connection successfully activated\n")
    )
    assert backend.connect_wifi("home", "wlan0", "uuid-1") == ConnectOutcome.SUCCESS
    assert backend.connect_wifi("home", "wlan0") == ConnectOutcome.SUCCESS
    assert runner.calls == [
        ["nmcli", "connection", "up", "uuid-1"],
        ["nmcli", "connection", "up", "home", "ifname", "wlan0"],
    ]


def test_connect_wifi_secrets_needed_reports_nothing():
    backend, _, _ = make_backend(
        lambda args: CommandResult(4, "", "Secrets were required, but not provided\n")
    )
    assert backend.connect_wifi("home", "wlan0") is None


def test_reconnect_wifi():
    backend, runner, _ = make_backend(None)
    backend.reconnect_wifi("uuid-1")
    assert runner.calls == [
        ["nmcli", "connection", "down", "uuid-1"],
        ["nmcli", "connection", "up", "uuid-1"],
    ]


def test_connection_properties():
    text = (
        "ipv4.method:                            manual\n"
        "ipv4.addresses:                         192.168.1.10/24\n"
        "ipv4.gateway:                           192.168.1.1\n"
    )
    backend, _, _ = make_backend(lambda args: CommandResult(0, text))
    props = backend.connection_properties("Office")
    assert props.v4addr == "192.168.1.10"
    assert props.mask == "24"
    assert props.gateway == "192.168.1.1"


def test_link_speed():
    text = "Settings for eth0:\n\tSupported ports: [ TP ]\n\tSpeed: 1000Mb/s\n\tDuplex: Full\n"
    backend, _, _ = make_backend(lambda args: CommandResult(0, text))
    assert backend.link_speed("eth0") == "1000Mb/s"


def test_link_speed_unknown():
    backend, _, _ = make_backend(lambda args: CommandResult(1, ""))
    assert backend.link_speed("eth0") == ""


def test_disconnect_type_brings_down_matching_connections():
    listing = (
        "NAME      UUID    TYPE             DEVICE\n"
        "Office 1  uuid-a  802-3-ethernet   eth0\n"
        "home  uuid-b  802-11-wireless  wlan0\n"
    )

    def handler(args):
        if args[2] == "show":
            return CommandResult(0, listing)
        return CommandResult(0)

    backend, runner, _ = make_backend(handler)
    assert backend.disconnect_type("ethernet") == ["Office 1"]
    assert runner.calls[-1] == ["nmcli", "connection", "down", "Office 1"]
    assert backend.disconnect_type("wifi") == ["home"]


def test_command_runner_captures_output():
    result = CommandRunner().run([sys.executable, "-c", "print('hi')"])
    assert result.returncode == 0
    assert result.stdout.strip() == "hi"


def test_command_runner_uses_english_locale():
    result = CommandRunner().shell("echo $LANG")
    assert result.stdout.strip() == "en_US.UTF-8"


def test_command_runner_missing_program():
    result = CommandRunner().run(["no-such-program-for-nmtool"])
    assert result.returncode == 127
    assert "no-such-program-for-nmtool" in result.stderr