"""Configuration module."""

from .settings import BroadcastConfig, Config, ListenConfig, config

__all__ = ["BroadcastConfig", "Config", "ListenConfig", "config"]
