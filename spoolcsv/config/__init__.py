"""Settings model and loader for spoolcsv runs.

Settings come from a YAML document (JSON documents load too). Keys may be
snake_case or the PascalCase used by ``appsettings.json`` files; both are
normalized before pydantic validation. Validation never touches the file
system: :func:`ensure_directories` is the separate provisioning step.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from spoolcsv.core.errors import ConfigError, FileAccessError


CONFIG_ENV = "SPOOLCSV_CONFIG"
DEFAULT_CONFIG_PATH = Path("config") / "settings.yaml"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class SkipSettings(BaseModel):
    """Number of boilerplate lines trimmed from each end of a spool file."""

    model_config = ConfigDict(extra="ignore")

    top: int = Field(default=1, ge=0)
    bottom: int = Field(default=5, ge=0)


class LogSettings(BaseModel):
    """Locations and policies for the run logs."""

    model_config = ConfigDict(extra="ignore")

    base_directory: str
    error_log_directory: str = "Errors"
    success_log_directory: str = "Success"
    console_log_directory: str = "ConsoleLog"
    enable_detailed_logging: bool = False
    max_log_retention_days: int = Field(default=30, ge=0)

    @field_validator("base_directory")
    @classmethod
    def _require_base(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("logs.base_directory is required")
        return value.strip()

    @property
    def base_path(self) -> Path:
        return Path(self.base_directory)

    @property
    def error_path(self) -> Path:
        return self.base_path / self.error_log_directory

    @property
    def success_path(self) -> Path:
        return self.base_path / self.success_log_directory

    @property
    def console_path(self) -> Path:
        return self.base_path / self.console_log_directory


class AppSettings(BaseModel):
    """Validated configuration bundle consumed by the batch runner and engine."""

    model_config = ConfigDict(extra="ignore")

    input_directory: str
    output_directory: str
    delimiter: str = ","
    header_columns: List[str]
    lines_to_skip: SkipSettings = Field(default_factory=SkipSettings)
    footer_marker: Optional[str] = None
    date_column_index: Optional[int] = None
    supported_file_extensions: List[str] = Field(default_factory=lambda: [".txt"])
    encoding: str = "utf-8"
    logs: LogSettings

    @field_validator("input_directory", "output_directory")
    @classmethod
    def _require_directory(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("directory path is required")
        return value.strip()

    @field_validator("delimiter")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("delimiter must be exactly one character")
        if value in "\"\r\n":
            raise ValueError("delimiter cannot be a double quote or a line break")
        return value

    @field_validator("header_columns")
    @classmethod
    def _require_columns(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("header_columns are required")
        if any(not str(name).strip() for name in value):
            raise ValueError("header_columns must not contain blank names")
        return [str(name) for name in value]

    @field_validator("footer_marker")
    @classmethod
    def _blank_marker_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        return value

    @field_validator("supported_file_extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        normalized = []
        for ext in value:
            ext = str(ext).strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = f".{ext}"
            if ext not in normalized:
                normalized.append(ext)
        if not normalized:
            raise ValueError("supported_file_extensions must list at least one extension")
        return normalized

    @model_validator(mode="after")
    def _date_column_in_header(self) -> "AppSettings":
        index = self.date_column_index
        if index is not None and not 0 <= index < len(self.header_columns):
            raise ValueError(
                f"date_column_index {index} is outside the {len(self.header_columns)} header columns"
            )
        return self

    @property
    def input_path(self) -> Path:
        return Path(self.input_directory)

    @property
    def output_path(self) -> Path:
        return Path(self.output_directory)


def _snake_key(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _normalize_keys(node: Any) -> Any:
    if isinstance(node, Mapping):
        return {_snake_key(str(k)): _normalize_keys(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_normalize_keys(item) for item in node]
    return node


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "settings"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def validate_settings(data: Mapping[str, Any]) -> AppSettings:
    """Validate a raw settings mapping.

    Raises:
        ConfigError: When any setting is missing or invalid.
    """

    if not isinstance(data, Mapping):
        raise ConfigError("settings must be a mapping")
    try:
        return AppSettings.model_validate(_normalize_keys(data))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {_format_errors(exc)}") from exc


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Pick the settings file: explicit path, ``SPOOLCSV_CONFIG``, then the default."""

    if path:
        return Path(path)
    load_dotenv(override=False)
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def load_settings(path: str | Path | None = None, **overrides: Any) -> AppSettings:
    """Load and validate settings from YAML/JSON.

    Keyword overrides (e.g. ``output_directory``) replace file values when not
    ``None``.
    """

    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Configuration file not found: {cfg_path}")
    try:
        with cfg_path.open("r", encoding="utf-8-sig") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Error loading configuration: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")
    data = _normalize_keys(data)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return validate_settings(data)


def ensure_directories(settings: AppSettings) -> Dict[str, Path]:
    """Create the input, output and log directories. Safe to call repeatedly.

    Raises:
        FileAccessError: When a directory cannot be created.
    """

    dirs = {
        "input": settings.input_path,
        "output": settings.output_path,
        "logs": settings.logs.base_path,
        "errors": settings.logs.error_path,
        "success": settings.logs.success_path,
        "console": settings.logs.console_path,
    }
    for path in dirs.values():
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileAccessError(f"Cannot create directory {path}: {exc}") from exc
    return dirs


__all__ = [
    "AppSettings",
    "LogSettings",
    "SkipSettings",
    "ensure_directories",
    "load_settings",
    "resolve_config_path",
    "validate_settings",
]
