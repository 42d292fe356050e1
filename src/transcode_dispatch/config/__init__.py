"""Configuration management for transcode dispatch."""

from __future__ import annotations

from .constants import *  # noqa: F403, F401
from .settings import DispatchConfig, get_config

__all__ = [
    "DispatchConfig",
    "get_config",
]
