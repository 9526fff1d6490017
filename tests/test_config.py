import json

import pytest

import sheet_records.config as config
from sheet_records.errors import ConfigError
from sheet_records.options import SheetOptions


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for env_name in config.ENV_OVERRIDES.values():
        monkeypatch.delenv(env_name, raising=False)


def _write_config(tmp_path, monkeypatch, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    monkeypatch.setattr(config, "repo_file", lambda *_parts: path)
    return path


def test_defaults_when_config_missing(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "repo_file", lambda *_parts: tmp_path / "missing.json")

    settings = config.load_settings()

    assert settings == config.Settings()
    assert settings.sheet_options() == SheetOptions()


def test_config_file_values_and_bool_parsing(monkeypatch, tmp_path):
    _write_config(
        tmp_path,
        monkeypatch,
        {
            "spreadsheet_id": "abc",
            "sheet_name": "Roster",
            "cell_range": "A1:F",
            "parse_input": "yes",
            "append_unknown_fields": "0",
        },
    )

    settings = config.load_settings()

    assert settings.require_spreadsheet_id() == "abc"
    assert settings.sheet_options() == SheetOptions(cell_range="A1:F", parse_input=True, append_unknown_fields=False)
    assert settings.sheet_name == "Roster"


def test_environment_overrides_config_file(monkeypatch, tmp_path):
    _write_config(tmp_path, monkeypatch, {"spreadsheet_id": "from-file", "auth_mode": "oauth"})
    monkeypatch.setenv("SPREADSHEET_ID", "from-env")
    monkeypatch.setenv("SHEETS_AUTH_MODE", "service_account")

    settings = config.load_settings()

    assert settings.spreadsheet_id == "from-env"
    assert settings.auth_mode == "service_account"


def test_invalid_values_raise_config_error(monkeypatch, tmp_path):
    _write_config(tmp_path, monkeypatch, {"auth_mode": "magic"})
    with pytest.raises(ConfigError, match="auth_mode"):
        config.load_settings()

    with pytest.raises(ConfigError):
        config.parse_bool("maybe", "parse_input")


def test_invalid_json_raises_config_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        config.load_json_config(path)


def test_missing_spreadsheet_id_is_config_error():
    with pytest.raises(ConfigError, match="SPREADSHEET_ID"):
        config.Settings().require_spreadsheet_id()


def test_configure_runtime_loads_dotenv_first(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(config, "repo_file", lambda *_parts: tmp_path / "missing.json")
    monkeypatch.setattr(config, "load_dotenv", lambda: calls.append("dotenv"))

    settings = config.configure_runtime()

    assert calls == ["dotenv"]
    assert isinstance(settings, config.Settings)
