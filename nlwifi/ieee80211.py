"""IEEE 802.11 helpers: interface types, channel numbering and text formatting."""

from __future__ import annotations

from enum import IntEnum

ETH_ALEN = 6


class IfType(IntEnum):
    """Virtual interface types known to nl80211."""

    UNSPECIFIED = 0
    ADHOC = 1
    STATION = 2
    AP = 3
    AP_VLAN = 4
    WDS = 5
    MONITOR = 6
    MESH_POINT = 7
    P2P_CLIENT = 8
    P2P_GO = 9
    P2P_DEVICE = 10
    OCB = 11
    NAN = 12


_IFTYPE_NAMES = {
    IfType.UNSPECIFIED: "unspecified",
    IfType.ADHOC: "independent BSS member",
    IfType.STATION: "managed BSS member",
    IfType.AP: "access point",
    IfType.AP_VLAN: "VLAN",
    IfType.WDS: "wireless distribution",
    IfType.MONITOR: "monitor",
    IfType.MESH_POINT: "mesh point",
    IfType.P2P_CLIENT: "P2P client",
    IfType.P2P_GO: "P2P group owner",
    IfType.P2P_DEVICE: "P2P device",
    IfType.OCB: "Outside Context of a BSS",
    IfType.NAN: "NAN",
}


def iftype_name(value: int) -> str:
    """Return the human readable description of an interface type."""
    try:
        return _IFTYPE_NAMES[IfType(value)]
    except ValueError:
        raise ValueError(f"unknown interface type {value}") from None


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def channel_to_frequency(chan: int) -> int:
    """Return the centre frequency in MHz of a channel number."""
    if chan < 14:
        return 2407 + chan * 5
    if chan == 14:
        return 2484
    return (chan + 1000) * 5


def frequency_to_channel(freq: int) -> int:
    """Return the channel number of a frequency in MHz, or 0 if unknown."""
    if freq == 2484:
        return 14
    if freq < 2484:
        return _trunc_div(freq - 2407, 5)
    if freq < 45000:
        return _trunc_div(freq, 5) - 1000
    if 58320 <= freq <= 64800:
        return (freq - 56160) // 2160
    return 0


def format_mac(data: bytes) -> str:
    """Format the first six bytes of ``data`` as a colon separated MAC address."""
    if len(data) < ETH_ALEN:
        raise ValueError(f"MAC address needs {ETH_ALEN} bytes, got {len(data)}")
    return ":".join(f"{octet:02x}" for octet in data[:ETH_ALEN])


def _is_print(octet: int) -> bool:
    return 0x20 <= octet <= 0x7E


def escape_ssid(data: bytes) -> str:
    """Render an SSID, escaping unprintable bytes, backslashes and edge spaces."""
    last = len(data) - 1
    parts = []
    for position, octet in enumerate(data):
        if _is_print(octet) and octet not in (0x20, 0x5C):
            parts.append(chr(octet))
        elif octet == 0x20 and position not in (0, last):
            parts.append(" ")
        else:
            parts.append(f"\\x{octet:02x}")
    return "".join(parts)