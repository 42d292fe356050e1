"""CLI module for transcode dispatch."""

from .main import TranscodeDispatchCLI, main

__all__ = [
    "TranscodeDispatchCLI",
    "main",
]
