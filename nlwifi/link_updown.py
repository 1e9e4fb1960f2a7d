"""Bring a network link up or down."""

from __future__ import annotations

import sys
from functools import partial

from nlwifi.netdev_list import _run_on_links
from nlwifi.rtnl import RouteSocket

USAGE = "Usage: put-link-updown <netdev> <up|down>"

_ACTIONS = {"up": True, "down": False}


def _set_state(sock: RouteSocket, ifname: str, word: str) -> int:
    up = _ACTIONS[word]
    try:
        link = sock.link_by_name(ifname)
    except LookupError:
        print(f"Error: link {ifname} not found.", file=sys.stderr)
        return 1
    if link.is_up() != up:
        sock.change_link(link.index, up)
    else:
        print(f"Link {ifname} already {word}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Set the requested link state; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2 or args[1] not in _ACTIONS:
        print(USAGE)
        return 0
    ifname, word = args
    return _run_on_links(partial(_set_state, ifname=ifname, word=word))


if __name__ == "__main__":
    sys.exit(main())