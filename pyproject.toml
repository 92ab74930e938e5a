[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nmtool"
version = "0.1.0"
description = "Drive NetworkManager through nmcli: device states, wired and wireless connections, hotspot and IP settings"
requires-python = ">=3.10"
dependencies = []
keywords = ["networkmanager", "nmcli", "wifi", "ethernet", "hotspot", "ipv6"]
classifiers = [
    "Development Status :: 4 - Beta",
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
nmtool = "nmtool.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nmtool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
