"""Validate and document settings files."""

from __future__ import annotations

from pathlib import Path
from types import UnionType
from typing import Any, Iterable, Literal, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from .base import load_config
from .settings import WatchSettings


class ConfigInspectionError(RuntimeError):
    """Raised when configuration inspection fails unexpectedly."""


def _error_result(path: Path, error_type: str, message: str, **extra: Any) -> dict[str, Any]:
    return {
        "status": "error",
        "config_path": str(path),
        "error": {"type": error_type, "message": message, **extra},
    }


def check_config(path: Path) -> tuple[dict[str, Any], int, WatchSettings | None]:
    """Validate the settings file at ``path`` and collect warnings.

    Returns a tuple of ``(result_dict, exit_code, settings_or_None)``.
    """

    try:
        settings = load_config(WatchSettings, path)
    except FileNotFoundError as exc:
        return _error_result(path, "missing_file", str(exc)), 2, None
    except ValidationError as exc:
        details = [
            {
                "loc": _format_error_location(err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return _error_result(path, "validation_error", "Configuration validation failed", details=details), 3, None
    except PermissionError as exc:
        return _error_result(path, "permission_error", str(exc)), 2, None
    except ValueError as exc:
        return _error_result(path, "invalid_format", str(exc)), 1, None
    except Exception as exc:  # pragma: no cover - unexpected failures
        raise ConfigInspectionError("Unexpected configuration inspection error") from exc

    settings = settings.resolve_paths(Path(path).parent)
    result = {
        "status": "ok",
        "config_path": str(path),
        "warnings": _collect_warnings(settings),
    }
    return result, 0, settings


def explain_config() -> list[dict[str, Any]]:
    """Describe every settings field for documentation purposes."""

    return [
        {
            "name": field_name,
            "type": _format_annotation(field.annotation),
            "required": field.is_required(),
            "default": _format_default(field),
            "description": field.description or "",
        }
        for field_name, field in WatchSettings.model_fields.items()
    ]


def _format_error_location(location: Iterable[Union[int, str]]) -> str:
    return ".".join(str(part) for part in location)


def _collect_warnings(settings: WatchSettings) -> list[str]:
    warnings: list[str] = []

    if settings.conf_path is None:
        warnings.append("'conf_path' is not set; pass --conf-path or FEEDWATCH_CONF_PATH when running checks")
    elif not settings.conf_path.is_dir():
        warnings.append(f"'conf_path' does not point at a directory: {settings.conf_path}")
    if settings.cache_path.exists() and not settings.cache_path.is_dir():
        warnings.append(f"'cache_path' exists and is not a directory: {settings.cache_path}")
    if settings.log_level == "off":
        warnings.append("'log_level' is off; per-feed failures will not be reported")

    return warnings


def _format_annotation(annotation: Any) -> str:
    origin = get_origin(annotation)
    if origin is None:
        if isinstance(annotation, type):
            return annotation.__name__
        return repr(annotation).replace("typing.", "")

    args = get_args(annotation)
    if origin is Literal:
        return " | ".join(repr(arg) for arg in args)
    if origin in {Union, UnionType}:
        non_none = [arg for arg in args if arg is not type(None)]  # noqa: E721
        if len(non_none) == 1 and len(args) == 2:
            return f"Optional[{_format_annotation(non_none[0])}]"
        joined = ", ".join(_format_annotation(arg) for arg in args)
        return f"Union[{joined}]"

    origin_name = getattr(origin, "__name__", repr(origin).replace("typing.", ""))
    if args:
        joined_args = ", ".join(_format_annotation(arg) for arg in args)
        return f"{origin_name}[{joined_args}]"
    return origin_name


def _format_default(field: FieldInfo) -> Any:
    if field.is_required():
        return None
    return _stringify_default(field.default)


def _stringify_default(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


__all__ = ["check_config", "explain_config", "ConfigInspectionError"]
