"""Netlink and generic netlink messaging over raw sockets."""

from __future__ import annotations

import errno
import os
import socket
import struct
from collections.abc import Iterable, Iterator

NETLINK_ROUTE = 0
NETLINK_GENERIC = 16

NLM_F_REQUEST = 0x01
NLM_F_MULTI = 0x02
NLM_F_ACK = 0x04
NLM_F_ROOT = 0x100
NLM_F_MATCH = 0x200
NLM_F_DUMP = NLM_F_ROOT | NLM_F_MATCH

NLMSG_NOOP = 1
NLMSG_ERROR = 2
NLMSG_DONE = 3

GENL_ID_CTRL = 0x10
CTRL_CMD_GETFAMILY = 3
CTRL_ATTR_FAMILY_ID = 1
CTRL_ATTR_FAMILY_NAME = 2

NLA_TYPE_MASK = 0x3FFF

_NLMSG_HEADER = struct.Struct("=IHHII")
_NLA_HEADER = struct.Struct("=HH")
_GENL_HEADER = struct.Struct("=BBH")
_AF_NETLINK = getattr(socket, "AF_NETLINK", 16)
_RECV_SIZE = 1 << 16


class NetlinkError(OSError):
    """A netlink request failed; ``errno`` holds the error code."""


def _error(code: int) -> NetlinkError:
    return NetlinkError(code, os.strerror(code))


def _align(length: int) -> int:
    return (length + 3) & ~3


def _padding(length: int) -> bytes:
    return bytes(_align(length) - length)


def pack_attribute(attr_type: int, payload: bytes) -> bytes:
    """Encode one attribute, padded to a four byte boundary."""
    length = _NLA_HEADER.size + len(payload)
    return _NLA_HEADER.pack(length, attr_type) + payload + _padding(length)


def pack_u32(attr_type: int, value: int) -> bytes:
    """Encode an unsigned 32 bit attribute."""
    return pack_attribute(attr_type, struct.pack("=I", value))


def pack_string(attr_type: int, value: str) -> bytes:
    """Encode a NUL terminated string attribute."""
    return pack_attribute(attr_type, value.encode() + b"\x00")


def parse_attributes(data: bytes) -> dict[int, bytes]:
    """Decode a stream of attributes into a mapping of type to payload."""
    attributes: dict[int, bytes] = {}
    offset = 0
    while offset < len(data):
        if len(data) - offset < _NLA_HEADER.size:
            raise ValueError("truncated attribute header")
        length, attr_type = _NLA_HEADER.unpack_from(data, offset)
        if length < _NLA_HEADER.size or offset + length > len(data):
            raise ValueError(f"invalid attribute length {length}")
        attributes[attr_type & NLA_TYPE_MASK] = bytes(
            data[offset + _NLA_HEADER.size : offset + length]
        )
        offset += _align(length)
    return attributes


def pack_message(
    msg_type: int, flags: int, seq: int, payload: bytes = b"", pid: int = 0
) -> bytes:
    """Encode one netlink message with its header."""
    length = _NLMSG_HEADER.size + len(payload)
    return (
        _NLMSG_HEADER.pack(length, msg_type, flags, seq, pid)
        + payload
        + _padding(length)
    )


def parse_messages(data: bytes) -> Iterator[tuple[int, int, int, int, bytes]]:
    """Yield ``(type, flags, seq, pid, payload)`` for each message in ``data``."""
    offset = 0
    while offset < len(data):
        if len(data) - offset < _NLMSG_HEADER.size:
            raise ValueError("truncated message header")
        length, msg_type, flags, seq, pid = _NLMSG_HEADER.unpack_from(data, offset)
        if length < _NLMSG_HEADER.size or offset + length > len(data):
            raise ValueError(f"invalid message length {length}")
        payload = bytes(data[offset + _NLMSG_HEADER.size : offset + length])
        yield msg_type, flags, seq, pid, payload
        offset += _align(length)


class NetlinkSocket:
    """A connected netlink socket that performs request/response exchanges."""

    def __init__(self, protocol: int) -> None:
        self._sock = socket.socket(_AF_NETLINK, socket.SOCK_RAW, protocol)
        try:
            self._sock.bind((0, 0))
        except OSError:
            self._sock.close()
            raise
        self._seq = 0

    def close(self) -> None:
        """Close the socket; further calls do nothing."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> NetlinkSocket:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def request(
        self, msg_type: int, payload: bytes = b"", flags: int = 0
    ) -> list[tuple[int, bytes]]:
        """Send a request and return its replies as ``(type, payload)`` pairs.

        Non-dump requests ask for an acknowledgement; an error reported by the
        kernel is raised as :class:`NetlinkError`.
        """
        if self._sock is None:
            raise ValueError("socket is closed")
        self._seq += 1
        seq = self._seq
        flags |= NLM_F_REQUEST
        if (flags & NLM_F_DUMP) != NLM_F_DUMP:
            flags |= NLM_F_ACK
        self._sock.send(pack_message(msg_type, flags, seq, payload))

        replies: list[tuple[int, bytes]] = []
        while True:
            data = self._sock.recv(_RECV_SIZE)
            if not data:
                raise _error(errno.ECONNRESET)
            for reply_type, _flags, reply_seq, _pid, body in parse_messages(data):
                if reply_seq != seq or reply_type == NLMSG_NOOP:
                    continue
                if reply_type in (NLMSG_ERROR, NLMSG_DONE):
                    code = struct.unpack_from("=i", body)[0] if len(body) >= 4 else 0
                    if code:
                        raise _error(abs(code))
                    return replies
                replies.append((reply_type, body))


class GenericNetlinkSocket(NetlinkSocket):
    """A netlink socket speaking the generic netlink protocol."""

    def __init__(self) -> None:
        super().__init__(NETLINK_GENERIC)

    def _genl(
        self,
        family_id: int,
        cmd: int,
        attributes: bytes | Iterable[bytes],
        flags: int,
        version: int,
    ) -> list[dict[int, bytes]]:
        if not isinstance(attributes, (bytes, bytearray)):
            attributes = b"".join(attributes)
        payload = _GENL_HEADER.pack(cmd, version, 0) + bytes(attributes)
        replies = self.request(family_id, payload, flags)
        return [parse_attributes(body[_GENL_HEADER.size :]) for _type, body in replies]

    def resolve_family(self, name: str) -> int:
        """Return the numeric identifier of a generic netlink family."""
        replies = self._genl(
            GENL_ID_CTRL,
            CTRL_CMD_GETFAMILY,
            pack_string(CTRL_ATTR_FAMILY_NAME, name),
            0,
            version=1,
        )
        for attributes in replies:
            family = attributes.get(CTRL_ATTR_FAMILY_ID)
            if family is not None and len(family) >= 2:
                return struct.unpack_from("=H", family)[0]
        raise NetlinkError(errno.ENOENT, f"generic netlink family {name!r} not found")

    def command(
        self,
        family_id: int,
        cmd: int,
        attributes: bytes | Iterable[bytes] = b"",
        flags: int = 0,
    ) -> list[dict[int, bytes]]:
        """Run a family command and return the attributes of each reply."""
        return self._genl(family_id, cmd, attributes, flags, version=0)