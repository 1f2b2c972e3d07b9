"""Command line interface for feedwatch."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn

import typer
from loguru import logger

from .config import WatchSettings, load_config
from .config.inspector import check_config, explain_config
from .feeds import FeedWatchPipeline, load_feed_definitions
from .feeds.errors import FeedWatchError
from .log import configure_logging


class LogLevel(str, Enum):
    off = "off"
    error = "error"
    warn = "warn"
    info = "info"
    debug = "debug"
    trace = "trace"


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path | None = None
    _settings: WatchSettings | None = None

    def ensure_settings(self) -> WatchSettings:
        if self._settings is None:
            if self.config_path is None:
                self._settings = WatchSettings()
            else:
                logger.debug("Loading settings from {}", self.config_path)
                settings = load_config(WatchSettings, self.config_path)
                self._settings = settings.resolve_paths(self.config_path.parent)
        return self._settings


app = typer.Typer(help="Report links that appeared in RSS/Atom feeds since the previous run")
config_app = typer.Typer(help="Validate and document settings files")
app.add_typer(config_app, name="config")
feeds_app = typer.Typer(help="Inspect the configured feed directory")
app.add_typer(feeds_app, name="feeds")


def _conf_path_option() -> Any:
    return typer.Option(
        None,
        "--conf-path",
        envvar="FEEDWATCH_CONF_PATH",
        help="Directory holding one file per feed (file name = feed name, content = URL)",
    )


def _log_level_option() -> Any:
    return typer.Option(
        None,
        "--log-level",
        envvar="FEEDWATCH_LOG_LEVEL",
        case_sensitive=False,
        help="Diagnostic verbosity written to stderr",
    )


def _normalize_format(value: str) -> str:
    return value.lower()


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> NoReturn:
    raise typer.Exit(code)


def _resolve_settings(ctx: typer.Context, **overrides: Any) -> WatchSettings:
    """Load settings and apply command line / environment overrides.

    Fatal: a settings file that cannot be read or validated ends the run.
    """

    state = _get_state(ctx)
    try:
        settings = state.ensure_settings()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Unable to load settings from {}: {}", state.config_path, exc)
        raise typer.Exit(1) from exc

    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    configure_logging(settings.log_level)
    return settings


def _require_conf_path(settings: WatchSettings) -> Path:
    if settings.conf_path is None:
        logger.error("No feed directory given; pass --conf-path or set FEEDWATCH_CONF_PATH")
        _exit(1)
    return settings.conf_path


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        envvar="FEEDWATCH_CONFIG",
        help="Optional TOML settings file; command line options take precedence",
    ),
) -> None:
    """Initialise CLI state; errors go to stderr until settings are resolved."""

    configure_logging("error")
    ctx.obj = CLIState(config_path=config.resolve() if config is not None else None)


@app.command(help="Fetch every feed and print links not present in the previous run")
def check(
    ctx: typer.Context,
    conf_path: Path | None = _conf_path_option(),
    cache_path: Path | None = typer.Option(
        None,
        "--cache-path",
        envvar="FEEDWATCH_CACHE_PATH",
        help="Directory storing the last fetched document per feed (default .feedwatch/cache)",
    ),
    log_level: LogLevel | None = _log_level_option(),
    max_workers: int | None = typer.Option(
        None,
        "--max-workers",
        min=1,
        help="Maximum number of feeds fetched concurrently",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Per-request HTTP timeout in seconds",
    ),
) -> None:
    settings = _resolve_settings(
        ctx,
        conf_path=conf_path,
        cache_path=cache_path,
        log_level=log_level.value if log_level is not None else None,
        max_workers=max_workers,
        request_timeout=timeout,
    )
    _require_conf_path(settings)

    pipeline = FeedWatchPipeline(settings)
    try:
        report = pipeline.check()
    except FeedWatchError as exc:
        logger.error("{}", exc)
        _exit(1)

    for link in report.new_links:
        typer.echo(link)


@feeds_app.command("list", help="Validate the feed directory and print each feed")
def list_feeds(
    ctx: typer.Context,
    conf_path: Path | None = _conf_path_option(),
    log_level: LogLevel | None = _log_level_option(),
) -> None:
    settings = _resolve_settings(
        ctx,
        conf_path=conf_path,
        log_level=log_level.value if log_level is not None else None,
    )
    directory = _require_conf_path(settings)

    try:
        definitions = load_feed_definitions(directory)
    except FeedWatchError as exc:
        logger.error("{}", exc)
        _exit(1)

    for definition in definitions.values():
        typer.echo(f"{definition.name}\t{definition.url}")


@config_app.command("check", help="Validate the settings file")
def check_settings(
    ctx: typer.Context,
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for validation results",
        callback=_normalize_format,
    ),
) -> None:
    state = _get_state(ctx)
    configure_logging("info")
    if state.config_path is None:
        logger.error("No settings file given; pass --config or set FEEDWATCH_CONFIG")
        _exit(2)

    result, exit_code, _ = check_config(state.config_path)

    if format == "json":
        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
        _exit(exit_code)

    if result["status"] == "ok":
        logger.info("Configuration OK: {}", result["config_path"])
        for warning in result["warnings"]:
            logger.warning(warning)
    else:
        error: dict[str, Any] = result["error"]
        logger.error(
            "Configuration error ({}) for {}: {}",
            error["type"],
            result["config_path"],
            error["message"],
        )
        for detail in error.get("details", []):
            location = detail["loc"] or "<root>"
            logger.error("  - {}: {} ({})", location, detail["message"], detail["type"])

    _exit(exit_code)


@config_app.command(help="Describe available settings fields")
def explain(
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for the settings schema",
        callback=_normalize_format,
    ),
) -> None:
    fields = explain_config()

    if format == "json":
        print(json.dumps({"fields": fields}, indent=2, ensure_ascii=False, default=str))
        return

    configure_logging("info")
    logger.info("Settings schema ({} fields):", len(fields))
    for field in fields:
        default_value = field["default"]
        default_repr = "None" if default_value is None else str(default_value)
        logger.info(
            "  - {name}: type={type}, required={required}, default={default}, description={description}",
            name=field["name"],
            type=field["type"],
            required="yes" if field["required"] else "no",
            default=default_repr,
            description=field["description"] or "(no description)",
        )


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:  # pragma: no cover - Typer translates exit codes
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
