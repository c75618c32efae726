"""Service package: configuration, logging setup and daemon entry point."""

from .config import DaemonConfig
from .daemon import run, main

__all__ = ["DaemonConfig", "run", "main"]
