[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nlwifi"
version = "0.1.0"
description = "Small netlink tools for listing, configuring and inspecting Linux network and wireless devices"
requires-python = ">=3.10"
dependencies = []
keywords = ["netlink", "nl80211", "rtnetlink", "wireless", "wifi", "linux"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nl80211-show = "nlwifi.nl80211_show:main"
netdev-list = "nlwifi.netdev_list:main"
monitor-mode = "nlwifi.monitor_mode:main"
put-link-updown = "nlwifi.link_updown:main"
remove-netdev = "nlwifi.remove_netdev:main"
set-channel = "nlwifi.set_channel:main"

[tool.hatch.build.targets.wheel]
packages = ["nlwifi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
