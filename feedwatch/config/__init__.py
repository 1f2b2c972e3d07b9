"""Configuration namespace for feedwatch."""

from __future__ import annotations

from .base import BaseConfig, load_config
from .settings import LogLevelLiteral, WatchSettings

__all__ = [
    "BaseConfig",
    "LogLevelLiteral",
    "WatchSettings",
    "load_config",
]
