"""Route netlink access to network links: listing, state changes and removal."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from nlwifi.netlink import (
    NETLINK_ROUTE,
    NLM_F_DUMP,
    NetlinkSocket,
    parse_attributes,
)

RTM_NEWLINK = 16
RTM_DELLINK = 17
RTM_GETLINK = 18

IFLA_ADDRESS = 1
IFLA_IFNAME = 3
IFLA_OPERSTATE = 16

IFF_UP = 0x1
IF_OPER_UNKNOWN = 0
IF_OPER_UP = 6

AF_UNSPEC = 0

_IFINFOMSG = struct.Struct("=BxHiII")


@dataclass(frozen=True)
class Link:
    """A network link as reported by the kernel."""

    index: int
    name: str
    address: bytes = b""
    flags: int = 0
    operstate: int = IF_OPER_UNKNOWN

    def is_up(self) -> bool:
        """Tell whether the operational state carries the ``IF_OPER_UP`` bits."""
        return bool(self.operstate & IF_OPER_UP)


def _ifinfomsg(index: int = 0, flags: int = 0, change: int = 0) -> bytes:
    return _IFINFOMSG.pack(AF_UNSPEC, 0, index, flags, change)


def parse_link(payload: bytes) -> Link:
    """Decode the body of an ``RTM_NEWLINK`` message."""
    if len(payload) < _IFINFOMSG.size:
        raise ValueError("truncated link message")
    _family, _type, index, flags, _change = _IFINFOMSG.unpack_from(payload)
    attributes = parse_attributes(payload[_IFINFOMSG.size :])
    raw_name = attributes.get(IFLA_IFNAME, b"").split(b"\x00", 1)[0]
    state = attributes.get(IFLA_OPERSTATE, b"")
    return Link(
        index=index,
        name=raw_name.decode(errors="replace"),
        address=attributes.get(IFLA_ADDRESS, b""),
        flags=flags,
        operstate=state[0] if state else IF_OPER_UNKNOWN,
    )


class RouteSocket(NetlinkSocket):
    """A route netlink socket for querying and changing links."""

    def __init__(self) -> None:
        super().__init__(NETLINK_ROUTE)

    def links(self) -> list[Link]:
        """Return every link on the system."""
        replies = self.request(RTM_GETLINK, _ifinfomsg(), NLM_F_DUMP)
        return [parse_link(body) for msg_type, body in replies if msg_type == RTM_NEWLINK]

    def link_by_name(self, name: str) -> Link:
        """Return the link called ``name``; raise LookupError if there is none."""
        for link in self.links():
            if link.name == name:
                return link
        raise LookupError(f"link {name} not found")

    def change_link(self, index: int, up: bool) -> None:
        """Bring the link with ``index`` administratively up or down."""
        flags = IFF_UP if up else 0
        self.request(RTM_NEWLINK, _ifinfomsg(index, flags, IFF_UP))

    def delete_link(self, index: int) -> None:
        """Remove the link with ``index``."""
        self.request(RTM_DELLINK, _ifinfomsg(index))