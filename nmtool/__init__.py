"""Device states, connections, hotspot and IP settings managed through nmcli."""

__version__ = "0.1.0"