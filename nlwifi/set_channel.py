"""Tune a wireless interface to a channel."""

from __future__ import annotations

import socket
import sys

from nlwifi.ieee80211 import channel_to_frequency
from nlwifi.nl80211 import Nl80211

USAGE = "Usage: set_channel <wireless interface> <channel number>"


def main(argv: list[str] | None = None) -> int:
    """Set the channel of the named interface; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print(USAGE)
        return 0
    ifname, channel_text = args
    try:
        channel = int(channel_text)
    except ValueError:
        print(f"Error: invalid channel number {channel_text}.", file=sys.stderr)
        return 1

    try:
        with Nl80211() as nl:
            ifindex = socket.if_nametoindex(ifname)
            nl.set_frequency(ifindex, channel_to_frequency(channel))
    except OSError as exc:
        print(f"Error: {exc.strerror or exc}.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())