"""sheet_records configuration: config.json, then environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from sheet_records.errors import ConfigError
from sheet_records.options import SheetOptions, WHOLE_SHEET_RANGE
from sheet_records.paths import repo_file

logger = logging.getLogger(__name__)

AUTH_MODES = ("service_account", "oauth")

ENV_OVERRIDES = {
    "spreadsheet_id": "SPREADSHEET_ID",
    "sheet_name": "SHEET_NAME",
    "auth_mode": "SHEETS_AUTH_MODE",
    "credentials_file": "SHEETS_CREDENTIALS_FILE",
    "token_file": "SHEETS_TOKEN_FILE",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class Settings:
    spreadsheet_id: str | None = None
    sheet_name: str = "Sheet1"
    auth_mode: str = "service_account"
    credentials_file: str = "client_secret.json"
    token_file: str = "token.json"
    cell_range: str = WHOLE_SHEET_RANGE
    parse_input: bool = False
    append_unknown_fields: bool = True

    def sheet_options(self) -> SheetOptions:
        return SheetOptions(
            cell_range=self.cell_range,
            parse_input=self.parse_input,
            append_unknown_fields=self.append_unknown_fields,
        )

    def require_spreadsheet_id(self) -> str:
        if not self.spreadsheet_id:
            raise ConfigError("SPREADSHEET_ID is not set.")
        return self.spreadsheet_id


def parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def load_json_config(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}")
    return data


def resolve_settings(config_data: dict[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(config_data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    values = {key: value for key, value in config_data.items() if key in known}

    for key, env_name in ENV_OVERRIDES.items():
        env_value = os.getenv(env_name)
        if env_value:
            values[key] = env_value

    for key in ("parse_input", "append_unknown_fields"):
        if key in values:
            values[key] = parse_bool(values[key], key)

    settings = Settings(**values)
    if settings.auth_mode not in AUTH_MODES:
        raise ConfigError(f"Unsupported auth_mode {settings.auth_mode!r}; expected one of {AUTH_MODES}")
    return settings


def load_settings() -> Settings:
    return resolve_settings(load_json_config(repo_file("config.json")))


def configure_runtime() -> Settings:
    load_dotenv()
    return load_settings()
