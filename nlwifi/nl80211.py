"""nl80211 access: listing wireless interfaces, changing their type and channel."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from nlwifi.ieee80211 import (
    escape_ssid,
    format_mac,
    frequency_to_channel,
    iftype_name,
)
from nlwifi.netlink import NLM_F_DUMP, GenericNetlinkSocket, pack_u32

NL80211_GENL_NAME = "nl80211"

NL80211_CMD_GET_WIPHY = 1
NL80211_CMD_SET_WIPHY = 2
NL80211_CMD_GET_INTERFACE = 5
NL80211_CMD_SET_INTERFACE = 6

NL80211_ATTR_WIPHY = 1
NL80211_ATTR_WIPHY_NAME = 2
NL80211_ATTR_IFINDEX = 3
NL80211_ATTR_IFNAME = 4
NL80211_ATTR_IFTYPE = 5
NL80211_ATTR_MAC = 6
NL80211_ATTR_WIPHY_FREQ = 38
NL80211_ATTR_SSID = 52
NL80211_ATTR_WDEV = 153


@dataclass(frozen=True)
class Interface:
    """A wireless interface as described by nl80211."""

    ifindex: int
    name: str
    wdev: int | None = None
    mac: bytes | None = None
    ssid: bytes | None = None
    iftype: int | None = None
    wiphy: int | None = None
    frequency: int | None = None


def _u32(attributes: dict[int, bytes], key: int) -> int | None:
    raw = attributes.get(key)
    if raw is None:
        return None
    if len(raw) < 4:
        raise ValueError(f"attribute {key} is too short for a u32")
    return struct.unpack_from("=I", raw)[0]


def _u64(attributes: dict[int, bytes], key: int) -> int | None:
    raw = attributes.get(key)
    if raw is None:
        return None
    if len(raw) < 8:
        raise ValueError(f"attribute {key} is too short for a u64")
    return struct.unpack_from("=Q", raw)[0]


def parse_interface(attributes: dict[int, bytes]) -> Interface | None:
    """Build an Interface from reply attributes; None when no index is present."""
    ifindex = _u32(attributes, NL80211_ATTR_IFINDEX)
    if ifindex is None:
        return None
    raw_name = attributes.get(NL80211_ATTR_IFNAME, b"").split(b"\x00", 1)[0]
    return Interface(
        ifindex=ifindex,
        name=raw_name.decode(errors="replace"),
        wdev=_u64(attributes, NL80211_ATTR_WDEV),
        mac=attributes.get(NL80211_ATTR_MAC),
        ssid=attributes.get(NL80211_ATTR_SSID),
        iftype=_u32(attributes, NL80211_ATTR_IFTYPE),
        wiphy=_u32(attributes, NL80211_ATTR_WIPHY),
        frequency=_u32(attributes, NL80211_ATTR_WIPHY_FREQ),
    )


def format_interface(iface: Interface) -> str:
    """Render an interface in the style of ``iw dev``."""
    lines = [f"Interface {iface.name}", f"\tifindex {iface.ifindex}"]
    if iface.wdev is not None:
        lines.append(f"\twdev 0x{iface.wdev:x}")
    if iface.mac is not None:
        lines.append(f"\taddr {format_mac(iface.mac)}")
    if iface.ssid is not None:
        lines.append(f"\tssid {escape_ssid(iface.ssid)}")
    if iface.iftype is not None:
        lines.append(f"\ttype {iftype_name(iface.iftype)}")
    if iface.wiphy is not None:
        lines.append(f"\twiphy {iface.wiphy}")
    if iface.frequency is not None:
        channel = frequency_to_channel(iface.frequency)
        lines.append(f"\tchannel {channel} ({iface.frequency} Mhz)")
    return "\n".join(lines)


class Nl80211:
    """A connection to the nl80211 generic netlink family."""

    def __init__(self) -> None:
        self._sock = GenericNetlinkSocket()
        try:
            self.family_id = self._sock.resolve_family(NL80211_GENL_NAME)
        except BaseException:
            self._sock.close()
            raise

    def close(self) -> None:
        """Close the underlying socket."""
        self._sock.close()

    def __enter__(self) -> Nl80211:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def interfaces(self, ifindex: int | None = None) -> list[Interface]:
        """Return every wireless interface, or only the one with ``ifindex``."""
        if ifindex is None:
            replies = self._sock.command(
                self.family_id, NL80211_CMD_GET_INTERFACE, flags=NLM_F_DUMP
            )
        else:
            replies = self._sock.command(
                self.family_id,
                NL80211_CMD_GET_INTERFACE,
                pack_u32(NL80211_ATTR_IFINDEX, ifindex),
            )
        parsed = (parse_interface(attributes) for attributes in replies)
        return [iface for iface in parsed if iface is not None]

    def set_interface_type(self, ifindex: int, iftype: int) -> None:
        """Change the type (monitor, managed, ...) of an interface."""
        self._sock.command(
            self.family_id,
            NL80211_CMD_SET_INTERFACE,
            [
                pack_u32(NL80211_ATTR_IFINDEX, ifindex),
                pack_u32(NL80211_ATTR_IFTYPE, int(iftype)),
            ],
        )

    def set_frequency(self, ifindex: int, freq: int) -> None:
        """Tune the interface's radio to ``freq`` MHz."""
        self._sock.command(
            self.family_id,
            NL80211_CMD_SET_WIPHY,
            [
                pack_u32(NL80211_ATTR_IFINDEX, ifindex),
                pack_u32(NL80211_ATTR_WIPHY_FREQ, freq),
            ],
        )