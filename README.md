# nmtool

A toolkit for driving NetworkManager through `nmcli`: reading device states,
switching networking and the wireless radio, bringing wired and wireless
connections up and down, and preparing hotspot and IPv4/IPv6 settings.

## Installation

```
pip install .
```

`nmcli` must be installed and on `PATH`. `ethtool` is used for link speed,
and `arping` and `ping6` for address conflict checks. Commands are run with
an English locale (`LANG=en_US.UTF-8`) so their output can be parsed.

## Command line

```
nmtool --help
```

Subcommands:

| Command | What it does |
| --- | --- |
| `nmtool status` | print the first wired and first wireless device with their states |
| `nmtool networking on\|off` | switch networking, waiting until the wired device follows |
| `nmtool wifi on\|off` | switch the wireless radio; `on` waits until access points are seen |
| `nmtool connect-wired NAME IFNAME [--type TYPE]` | bring up a wired (or `bluetooth`) connection |
| `nmtool connect-wifi NAME [--ifname IF] [--uuid UUID]` | bring up a wireless connection, by its saved profile when `--uuid` is given |
| `nmtool connect-password NAME PASSWORD [--conn-type T]` | connect to a network with a password |
| `nmtool connect-hidden SSID PASSWORD` | connect to a hidden network, up to three attempts |
| `nmtool connect-remembered SSID` | bring up a saved hidden network if it is in range |
| `nmtool reconnect UUID` | take a connection down and up again |
| `nmtool props NAME` | print the addressing settings of a saved connection |
| `nmtool speed IFNAME` | print the negotiated speed of a wired card |
| `nmtool disconnect ethernet\|wifi` | take down every active connection of that type |

Connect commands print the outcome name (for example `success`, `failed`,
`no_profile`) and exit with 0 only on success.

## Library use

Parse the output of `nmcli -f TYPE,DEVICE,STATE device`:

```python
from nmtool.devices import LinkState, parse_device_states

states = parse_device_states(text)
if states.wifi_state == LinkState.CONNECTED:
    print(states.wifi_name)
```

Classify what `nmcli` printed after a connection attempt:

```python
from nmtool.outcomes import ConnectOutcome, classify_wifi_output

outcome = classify_wifi_output("Connection successfully activated")
assert outcome == ConnectOutcome.SUCCESS
```

`classify_wifi_output` returns `None` when the output calls for no report.

Read the properties of a saved connection:

```python
from nmtool.connprop import parse_connection_properties

props = parse_connection_properties(nmcli_show_output)
print(props.to_summary())   # e.g. "method:manual|v4addr:192.0.2.10|mask:24|..."
```

Drive NetworkManager directly:

```python
from nmtool.backend import NetworkBackend

password = "password"
backend = NetworkBackend()
backend.enable_wifi()
outcome = backend.connect_wifi_with_password("HomeNet", password)
```

`NetworkBackend` accepts a `CommandRunner`, a `sleep` function, callables for
counting access points and detecting a cable (by default
`/sys/class/net/<ifname>/carrier`), and `max_polls`; when `max_polls` is set,
waiting for a device state that never arrives raises `TimeoutError`.

Other modules:

- `nmtool.hotspot` — `HotspotForm` checks hotspot settings (a name, and a
  password of at least five characters unless `HotspotSecurity.NONE`) and
  builds the `nmcli device wifi hotspot` arguments with `command_args()`.
- `nmtool.connform` — `ConnectionForm` holds the settings of a connection,
  validates them with `can_submit()`, and builds `nmcli connection add` and
  `nmcli connection modify` (IPv6) arguments.
- `nmtool.addressing` — `is_ipv4`, `is_ipv6`, netmask choice ↔ prefix
  conversion (24, 23, 22, 16, 8), `split_dns` and `join_dns`.
- `nmtool.ipconflict` — `ConflictChecker.check()` looks for IPv4 conflicts
  with `arping` and IPv6 conflicts with `ping6`; repeated checks within the
  cooldown (two seconds by default) are refused and reported as conflicts.
- `nmtool.listing` — `NetworkLister` fetches wired, wireless and saved
  connection listings as lists of lines, returning `["Empty"]` when the same
  kind of listing is already in progress.

## What it does not do

There is no tray icon, window or other graphical interface, and no D-Bus
service. Messages from `ConflictChecker` go to a `notify` callable, logged by
default, rather than to desktop notifications. `HotspotForm`,
`ConnectionForm` and `NetworkLister` prepare arguments or fetch listings but
are not reachable from the `nmtool` command; running the commands built by the
forms is left to the caller.