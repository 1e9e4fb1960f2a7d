"""Delete a network device."""

from __future__ import annotations

import sys
from functools import partial

from nlwifi.netdev_list import _run_on_links
from nlwifi.rtnl import RouteSocket

DEFAULT_IFNAME = "enp0s31f6"


def _delete(sock: RouteSocket, ifname: str) -> int:
    try:
        link = sock.link_by_name(ifname)
    except LookupError:
        print(f"Error: {ifname} not found", file=sys.stderr)
        return 1
    sock.delete_link(link.index)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Delete the named device, or the default one; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    ifname = args[0] if len(args) == 1 else DEFAULT_IFNAME
    return _run_on_links(partial(_delete, ifname=ifname), error_suffix="")


if __name__ == "__main__":
    sys.exit(main())