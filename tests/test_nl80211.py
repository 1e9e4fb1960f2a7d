import errno
import socket
import struct
import sys
from collections import deque

import pytest

from nlwifi.ieee80211 import IfType
from nlwifi.netlink import (
    CTRL_ATTR_FAMILY_ID,
    CTRL_ATTR_FAMILY_NAME,
    GENL_ID_CTRL,
    NLM_F_DUMP,
    NLM_F_MULTI,
    NLMSG_ERROR,
    NetlinkError,
    pack_attribute,
    pack_message,
    pack_string,
    pack_u32,
    parse_attributes,
    parse_messages,
)
from nlwifi.nl80211 import (
    NL80211_ATTR_IFINDEX,
    NL80211_ATTR_IFNAME,
    NL80211_ATTR_IFTYPE,
    NL80211_ATTR_MAC,
    NL80211_ATTR_SSID,
    NL80211_ATTR_WDEV,
    NL80211_ATTR_WIPHY,
    NL80211_ATTR_WIPHY_FREQ,
    NL80211_CMD_GET_INTERFACE,
    NL80211_CMD_SET_INTERFACE,
    NL80211_CMD_SET_WIPHY,
    Interface,
    Nl80211,
    format_interface,
    parse_interface,
)

FAMILY_ID = 0x1C
MAC = bytes.fromhex("020000000001")


def genl_body(cmd, attrs=b""):
    return struct.pack("=BBH", cmd, 1, 0) + attrs


def status(seq, errnum=0):
    code = (-errnum).to_bytes(4, sys.byteorder, signed=True)
    return pack_message(NLMSG_ERROR, 0, seq, code + bytes(16))


class FakeNl80211:
    """Socket constructor and socket in one, answering control and nl80211 requests."""

    def __init__(self, interfaces=(), family="nl80211", error=0):
        self.interfaces = list(interfaces)
        self.family = family
        self.error = error
        self.requests = []
        self.outbox = deque()

    def __call__(self, family, kind, protocol):
        return self

    def bind(self, address):
        self.address = address

    def close(self):
        self.outbox.clear()

    def send(self, data):
        self.outbox.extend(self._answer(*message) for message in parse_messages(data))
        return len(data)

    def recv(self, size):
        return self.outbox.popleft()

    def _answer(self, msg_type, flags, seq, _pid, payload):
        attributes = parse_attributes(payload[4:])
        if msg_type == GENL_ID_CTRL:
            name = attributes.get(CTRL_ATTR_FAMILY_NAME, b"").rstrip(b"\0").decode()
            if name != self.family:
                return status(seq, errno.ENOENT)
            family = pack_attribute(CTRL_ATTR_FAMILY_ID, struct.pack("=H", FAMILY_ID))
            return pack_message(GENL_ID_CTRL, 0, seq, genl_body(1, family)) + status(seq)
        cmd = payload[0]
        self.requests.append((msg_type, cmd, flags, attributes))
        if self.error:
            return status(seq, self.error)
        if cmd != NL80211_CMD_GET_INTERFACE:
            return status(seq)
        wanted = attributes.get(NL80211_ATTR_IFINDEX)
        matching = [
            attrs
            for attrs in self.interfaces
            if wanted in (None, parse_attributes(attrs).get(NL80211_ATTR_IFINDEX))
        ]
        replies = (pack_message(FAMILY_ID, NLM_F_MULTI, seq, genl_body(cmd, a)) for a in matching)
        return b"".join(replies) + status(seq)


def wlan_attrs(index=3, name="wlan0"):
    return b"".join(
        [
            pack_u32(NL80211_ATTR_IFINDEX, index),
            pack_string(NL80211_ATTR_IFNAME, name),
            pack_attribute(NL80211_ATTR_WDEV, struct.pack("=Q", 1)),
            pack_attribute(NL80211_ATTR_MAC, MAC),
            pack_attribute(NL80211_ATTR_SSID, b"home net"),
            pack_u32(NL80211_ATTR_IFTYPE, IfType.STATION),
            pack_u32(NL80211_ATTR_WIPHY, 0),
            pack_u32(NL80211_ATTR_WIPHY_FREQ, 2437),
        ]
    )


def install(monkeypatch, **kwargs):
    fake = FakeNl80211(**kwargs)
    monkeypatch.setattr(socket, "socket", fake)
    return fake


@pytest.fixture
def kernel(monkeypatch):
    return install(monkeypatch, interfaces=[wlan_attrs(3, "wlan0"), wlan_attrs(7, "wlan1")])


def u32(value):
    return struct.unpack("=I", value)[0]


def test_parse_interface_reads_all_fields():
    iface = parse_interface(parse_attributes(wlan_attrs()))
    assert iface == Interface(
        ifindex=3,
        name="wlan0",
        wdev=1,
        mac=MAC,
        ssid=b"home net",
        iftype=IfType.STATION,
        wiphy=0,
        frequency=2437,
    )


def test_parse_interface_without_index_is_none():
    attributes = parse_attributes(pack_string(NL80211_ATTR_IFNAME, "wlan0"))
    assert parse_interface(attributes) is None


def test_format_interface_full():
    lines = format_interface(parse_interface(parse_attributes(wlan_attrs()))).split("\n")
    assert lines[:2] == ["Interface wlan0", "\tifindex 3"]
    assert {"\ttype managed BSS member", "\tchannel 6 (2437 Mhz)", "\tssid home net"} <= set(lines)
    assert len(lines) == 8


def test_format_interface_minimal():
    assert format_interface(Interface(ifindex=4, name="wlx")) == "Interface wlx\n\tifindex 4"


def test_format_interface_wdev_is_hex():
    text = format_interface(Interface(ifindex=1, name="w", wdev=255))
    assert text.split("\n")[-1] == "\twdev 0xff"


def test_format_interface_unknown_type():
    with pytest.raises(ValueError):
        format_interface(Interface(ifindex=1, name="w", iftype=99))


def test_interfaces_dump(kernel):
    with Nl80211() as nl:
        assert nl.family_id == FAMILY_ID
        interfaces = nl.interfaces()
    assert [iface.name for iface in interfaces] == ["wlan0", "wlan1"]
    _type, cmd, flags, _attrs = kernel.requests[-1]
    assert cmd == NL80211_CMD_GET_INTERFACE
    assert flags & NLM_F_DUMP == NLM_F_DUMP


def test_interfaces_single(kernel):
    with Nl80211() as nl:
        interfaces = nl.interfaces(7)
    assert [iface.ifindex for iface in interfaces] == [7]
    _type, _cmd, flags, attrs = kernel.requests[-1]
    assert u32(attrs[NL80211_ATTR_IFINDEX]) == 7
    assert flags & NLM_F_DUMP != NLM_F_DUMP


def test_set_interface_type(kernel):
    with Nl80211() as nl:
        nl.set_interface_type(3, IfType.MONITOR)
    msg_type, cmd, _flags, attrs = kernel.requests[-1]
    assert (msg_type, cmd) == (FAMILY_ID, NL80211_CMD_SET_INTERFACE)
    assert u32(attrs[NL80211_ATTR_IFTYPE]) == IfType.MONITOR
    assert u32(attrs[NL80211_ATTR_IFINDEX]) == 3


def test_set_frequency(kernel):
    with Nl80211() as nl:
        nl.set_frequency(3, 5180)
    _type, cmd, _flags, attrs = kernel.requests[-1]
    assert cmd == NL80211_CMD_SET_WIPHY
    assert u32(attrs[NL80211_ATTR_WIPHY_FREQ]) == 5180


def test_missing_family(monkeypatch):
    install(monkeypatch, family="other")
    with pytest.raises(NetlinkError) as info:
        Nl80211()
    assert info.value.errno == errno.ENOENT


def test_kernel_error_is_raised(monkeypatch):
    install(monkeypatch, error=errno.EBUSY)
    with Nl80211() as nl:
        with pytest.raises(NetlinkError) as info:
            nl.set_interface_type(3, IfType.MONITOR)
    assert info.value.errno == errno.EBUSY