"""Ethernet beacon: link-layer presence broadcaster and listener."""

__version__ = "1.0.0"
