"""Tests for core.settings."""

from pathlib import Path

import pytest

from core.settings import get_setting, load_settings, reload_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    reload_settings()
    yield
    reload_settings()


def test_defaults_without_file(tmp_path: Path) -> None:
    settings = load_settings(tmp_path)
    assert get_setting(settings, "dashboard.access_key_secret") == "SERVERLESS_ACCESS_KEY"
    assert get_setting(settings, "deploy.command") == ["serverless"]
    assert get_setting(settings, "dashboard.missing", "fallback") == "fallback"


def test_file_values_merge_over_defaults(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text(
        "dashboard:\n  api_url: https://dashboard.internal/api\ndeploy:\n  command: npx serverless\n"
    )
    settings = load_settings(tmp_path)
    assert get_setting(settings, "dashboard.api_url") == "https://dashboard.internal/api"
    assert get_setting(settings, "dashboard.frontend_url") == "https://app.serverless.com"
    assert get_setting(settings, "deploy.command") == "npx serverless"


def test_invalid_yaml_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text("dashboard: [broken\n")
    settings = load_settings(tmp_path)
    assert get_setting(settings, "logging.level") == "INFO"


def test_settings_are_cached_until_reload(tmp_path: Path) -> None:
    first = load_settings(tmp_path)
    assert load_settings(tmp_path / "elsewhere") is first
    reload_settings()
    assert load_settings(tmp_path) is not first


def test_config_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "settings.yaml").write_text("deploy:\n  command: [npx, serverless]\n")
    monkeypatch.setenv("STACKWIZARD_CONFIG_DIR", str(tmp_path))
    assert get_setting(load_settings(), "deploy.command") == ["npx", "serverless"]
