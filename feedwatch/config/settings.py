"""Runtime settings for a feedwatch run."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import ConfigDict, Field

from .base import BaseConfig


LogLevelLiteral = Literal["off", "error", "warn", "info", "debug", "trace"]

DEFAULT_CACHE_PATH = Path(".feedwatch/cache")
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "feedwatch/0.1 (+https://github.com/feedwatch/feedwatch)"


class WatchSettings(BaseConfig):
    """Settings resolved once at startup and passed to the pipeline."""

    model_config = ConfigDict(frozen=True)

    conf_path: Path | None = Field(None, description="Directory holding one URL file per feed")
    cache_path: Path = Field(DEFAULT_CACHE_PATH, description="Directory storing the last fetched document per feed")
    log_level: LogLevelLiteral = Field("error", description="Diagnostic verbosity written to stderr")
    max_workers: int = Field(8, ge=1, description="Maximum number of feeds processed concurrently")
    request_timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-request HTTP timeout (seconds)")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent with feed requests")

    def resolve_paths(self, base_dir: Path) -> "WatchSettings":
        """Anchor relative paths set in a settings file at ``base_dir``.

        The default cache path stays relative to the working directory.
        """

        updates: dict[str, Path] = {}
        if self.conf_path is not None and not self.conf_path.is_absolute():
            updates["conf_path"] = base_dir / self.conf_path
        if "cache_path" in self.model_fields_set and not self.cache_path.is_absolute():
            updates["cache_path"] = base_dir / self.cache_path
        return self.model_copy(update=updates) if updates else self


__all__ = [
    "DEFAULT_CACHE_PATH",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "LogLevelLiteral",
    "WatchSettings",
]
