"""netwarden: built-in profiles for the network monitor."""

__version__ = "0.1.0"
