"""Base model and TOML loader shared by every configuration model."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """Strict base model: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


ConfigT = TypeVar("ConfigT", bound=BaseConfig)


def load_config(model: type[ConfigT], path: Path) -> ConfigT:
    """Read ``path`` as TOML and validate it against ``model``.

    Raises :class:`FileNotFoundError` for a missing file, ``ValueError`` for
    malformed TOML and :class:`pydantic.ValidationError` for schema errors.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open("rb") as handle:
        data = tomllib.load(handle)

    return model.model_validate(data)


__all__ = ["BaseConfig", "load_config"]
