"""Netlink tools and helpers for Linux network links and nl80211 wireless interfaces."""

__version__ = "0.1.0"