# nlwifi

Command-line tools and a small library for talking to the Linux kernel over
netlink. Use them to list network devices, bring links up or down, remove
devices, and inspect or configure wireless interfaces through nl80211. The
package uses only the Python standard library.

It runs on Linux only. Any command that changes device state needs root or
`CAP_NET_ADMIN`.

## Installation

```
pip install .
```

## Commands

List every network device as `index: name, mac address`. If a device has no
hardware address, the command prints `none` in its place:

```
netdev-list
```

Show wireless interfaces, similar to `iw dev`. You can give an interface name
to restrict the output to that interface:

```
nl80211-show
nl80211-show wlan0
```

Sample output:

```
Interface wlan0
	ifindex 3
	wdev 0x1
	addr 02:00:00:00:00:01
	ssid example
	type managed BSS member
	wiphy 0
	channel 6 (2437 Mhz)
```

Switch a wireless interface between monitor and managed mode:

```
monitor-mode wlan0 monitor
monitor-mode wlan0 managed
```

Tune a wireless interface to a channel number. The command converts the
channel to its frequency before it sends the request:

```
set-channel wlan0 11
```

Bring a link up or down. If the link already reports the requested state, the
command prints `Link <name> already <up|down>` and changes nothing:

```
put-link-updown eth0 up
put-link-updown eth0 down
```

Delete a network device. If you give no name, or more than one argument, it
uses `enp0s31f6`:

```
remove-netdev veth0
```

If `monitor-mode`, `set-channel` or `put-link-updown` gets the wrong arguments,
it prints its usage and exits with status 0. Errors such as an unknown
interface, a channel that is not a number, or a failure reported by the kernel
go to standard error, and the exit status is then 1.

## Library use

```python
from nlwifi.ieee80211 import channel_to_frequency, frequency_to_channel, escape_ssid
from nlwifi.rtnl import RouteSocket
from nlwifi.nl80211 import Nl80211, format_interface

channel_to_frequency(6)         # 2437
frequency_to_channel(5180)      # 36
escape_ssid(b" my net ")        # '\\x20my net\\x20'

with RouteSocket() as route:
    for link in route.links():
        print(link.index, link.name, link.is_up())

with Nl80211() as nl:
    for iface in nl.interfaces():
        print(format_interface(iface))
```

The modules:

- `nlwifi.ieee80211`: the `IfType` enum, `iftype_name`,
  `channel_to_frequency`, `frequency_to_channel`, `format_mac` and
  `escape_ssid`.
- `nlwifi.netlink`: attribute and message packing (`pack_attribute`,
  `pack_u32`, `pack_string`, `pack_message`), parsing (`parse_attributes`,
  `parse_messages`), and the socket classes `NetlinkSocket` and
  `GenericNetlinkSocket`. Errors that the kernel reports are raised as
  `NetlinkError`, a subclass of `OSError`.
- `nlwifi.rtnl`: `RouteSocket` with `links()`, `link_by_name()` (raises
  `LookupError` for an unknown name), `change_link()` and `delete_link()`;
  the `Link` dataclass and `parse_link`.
- `nlwifi.nl80211`: `Nl80211` with `interfaces()`, `set_interface_type()`
  and `set_frequency()`; the `Interface` dataclass, `parse_interface` and
  `format_interface`.

## Running the tests

```
pip install .[test]
pytest
```