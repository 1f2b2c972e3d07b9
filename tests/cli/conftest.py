"""Fixtures shared by command line tests."""

from __future__ import annotations

from typing import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _isolated_cli(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear feedwatch environment overrides and drop sinks bound to captured stderr."""

    for name in ("FEEDWATCH_CONFIG", "FEEDWATCH_CONF_PATH", "FEEDWATCH_CACHE_PATH", "FEEDWATCH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    logger.remove()
