"""Show wireless devices in the style of ``iw dev``."""

from __future__ import annotations

import sys

from nlwifi.nl80211 import Nl80211, format_interface
from nlwifi.rtnl import RouteSocket


def main(argv: list[str] | None = None) -> int:
    """Print all wireless devices, or only the named one; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    ifname = args[0] if args else ""

    try:
        ifindex = None
        if ifname:
            with RouteSocket() as route:
                try:
                    ifindex = route.link_by_name(ifname).index
                except LookupError:
                    print(
                        f"Error: unable to get link index with name {ifname}.",
                        file=sys.stderr,
                    )
                    return 1
        with Nl80211() as nl:
            interfaces = nl.interfaces(ifindex)
    except OSError as exc:
        print(f"Error: {exc.strerror or exc}.", file=sys.stderr)
        return 1

    for iface in interfaces:
        print(format_interface(iface))
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())