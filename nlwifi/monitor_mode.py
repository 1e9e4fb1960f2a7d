"""Switch a wireless interface between monitor and managed mode."""

from __future__ import annotations

import socket
import sys

from nlwifi.ieee80211 import IfType
from nlwifi.nl80211 import Nl80211

USAGE = "Usage: monitor-mode <wireless interface name> <monitor|managed>"

_MODES = {"monitor": IfType.MONITOR, "managed": IfType.STATION}


def main(argv: list[str] | None = None) -> int:
    """Set the requested interface type; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2 or args[1] not in _MODES:
        print(USAGE)
        return 0
    ifname, mode = args

    try:
        with Nl80211() as nl:
            ifindex = socket.if_nametoindex(ifname)
            nl.set_interface_type(ifindex, _MODES[mode])
    except OSError as exc:
        print(f"Error: {exc.strerror or exc}.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())