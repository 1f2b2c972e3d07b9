from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from feedwatch.config import BaseConfig, WatchSettings, load_config
from feedwatch.config.inspector import check_config, explain_config
from feedwatch.config.settings import DEFAULT_CACHE_PATH


class ExampleConfig(BaseConfig):
    data_root: Path
    feature_enabled: bool


def test_load_config_success(tmp_path: Path) -> None:
    sample = tmp_path / "config.toml"
    sample.write_text(
        """
        data_root = "./cache"
        feature_enabled = true
        """.strip(),
        encoding="utf-8",
    )

    cfg = load_config(ExampleConfig, sample)

    assert cfg.data_root == Path("./cache")
    assert cfg.feature_enabled is True


def test_load_config_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.toml"
    with pytest.raises(FileNotFoundError):
        load_config(ExampleConfig, missing)


def test_load_config_rejects_unknown_keys(tmp_path: Path) -> None:
    sample = tmp_path / "config.toml"
    sample.write_text('conf_path = "./feeds"\nfeeds_dir = "./other"\n', encoding="utf-8")

    with pytest.raises(ValidationError) as excinfo:
        load_config(WatchSettings, sample)

    assert "Extra inputs are not permitted" in str(excinfo.value)


def test_watch_settings_defaults() -> None:
    settings = WatchSettings()

    assert settings.conf_path is None
    assert settings.cache_path == DEFAULT_CACHE_PATH == Path(".feedwatch/cache")
    assert settings.log_level == "error"
    assert settings.max_workers == 8


@pytest.mark.parametrize(
    "overrides",
    [
        {"log_level": "verbose"},
        {"max_workers": 0},
        {"request_timeout": 0},
    ],
)
def test_watch_settings_rejects_invalid_values(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        WatchSettings(**overrides)


def test_resolve_paths_anchors_file_relative_entries(tmp_path: Path) -> None:
    sample = tmp_path / "config.toml"
    sample.write_text('conf_path = "feeds"\ncache_path = "state/cache"\n', encoding="utf-8")

    settings = load_config(WatchSettings, sample).resolve_paths(tmp_path)

    assert settings.conf_path == tmp_path / "feeds"
    assert settings.cache_path == tmp_path / "state" / "cache"


def test_resolve_paths_keeps_default_cache_and_absolute_paths(tmp_path: Path) -> None:
    settings = WatchSettings(conf_path=tmp_path / "feeds").resolve_paths(Path("/elsewhere"))

    assert settings.conf_path == tmp_path / "feeds"
    assert settings.cache_path == DEFAULT_CACHE_PATH


def test_example_config_file() -> None:
    config_path = Path(__file__).resolve().parents[2] / "config" / "example.toml"
    settings = load_config(WatchSettings, config_path).resolve_paths(config_path.parent)

    assert settings.conf_path == config_path.parent / "feeds"
    assert settings.log_level == "warn"
    assert settings.max_workers == 4
    assert settings.request_timeout == 20.0
    assert sorted(path.name for path in settings.conf_path.iterdir()) == ["python-insider", "xkcd"]


def test_check_config_ok(tmp_path: Path) -> None:
    (tmp_path / "feeds").mkdir()
    config_file = tmp_path / "config.toml"
    config_file.write_text('conf_path = "feeds"\nlog_level = "info"\n', encoding="utf-8")

    result, exit_code, settings = check_config(config_file)

    assert exit_code == 0
    assert result == {"status": "ok", "config_path": str(config_file), "warnings": []}
    assert settings is not None
    assert settings.conf_path == tmp_path / "feeds"


def test_check_config_collects_warnings(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    (tmp_path / "blocked").write_text("", encoding="utf-8")
    config_file.write_text('cache_path = "blocked"\nlog_level = "off"\n', encoding="utf-8")

    result, exit_code, _ = check_config(config_file)

    assert exit_code == 0
    warnings = result["warnings"]
    assert len(warnings) == 3
    assert any("'conf_path' is not set" in warning for warning in warnings)
    assert any("'cache_path' exists and is not a directory" in warning for warning in warnings)
    assert any("'log_level' is off" in warning for warning in warnings)


def test_check_config_missing_file(tmp_path: Path) -> None:
    result, exit_code, settings = check_config(tmp_path / "absent.toml")

    assert exit_code == 2
    assert settings is None
    assert result["error"]["type"] == "missing_file"


def test_check_config_validation_error(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text('max_workers = 0\nlog_level = "loud"\n', encoding="utf-8")

    result, exit_code, _ = check_config(config_file)

    assert exit_code == 3
    error = result["error"]
    assert error["type"] == "validation_error"
    assert {detail["loc"] for detail in error["details"]} == {"max_workers", "log_level"}


def test_check_config_invalid_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("conf_path = \n", encoding="utf-8")

    result, exit_code, _ = check_config(config_file)

    assert exit_code == 1
    assert result["error"]["type"] == "invalid_format"


def test_explain_config_lists_every_field() -> None:
    fields = {field["name"]: field for field in explain_config()}

    assert list(fields) == list(WatchSettings.model_fields)
    assert fields["conf_path"]["type"] == "Optional[Path]"
    assert fields["cache_path"]["default"] == str(DEFAULT_CACHE_PATH)
    assert fields["log_level"]["type"] == "'off' | 'error' | 'warn' | 'info' | 'debug' | 'trace'"
    assert fields["max_workers"]["required"] is False
    assert all(field["description"] for field in fields.values())
