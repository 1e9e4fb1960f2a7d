"""List the network devices of the system as ``index: name, address``."""

from __future__ import annotations

import sys
from collections.abc import Callable

from nlwifi.rtnl import Link, RouteSocket

_ADDRESS_WIDTH = 17


def _address_text(address: bytes) -> str:
    if not address:
        return "none"
    return ":".join(f"{octet:02x}" for octet in address)[:_ADDRESS_WIDTH]


def format_link(link: Link) -> str:
    """Render one link as ``index: name, address``."""
    return f"{link.index}: {link.name}, {_address_text(link.address)}"


def _run_on_links(action: Callable[[RouteSocket], int], error_suffix: str = ".") -> int:
    """Run *action* on a route socket; report socket errors and return the exit status."""
    try:
        with RouteSocket() as sock:
            return action(sock)
    except OSError as exc:
        print(f"Error: {exc.strerror or exc}{error_suffix}", file=sys.stderr)
        return 1


def _print_links(sock: RouteSocket) -> int:
    for link in sock.links():
        print(format_link(link))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Print every network device; return the exit status."""
    return _run_on_links(_print_links)


if __name__ == "__main__":
    sys.exit(main())