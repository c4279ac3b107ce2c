"""Option defaults loaded from config files and environment variables."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from tempwrite.core.options import (
    DEFAULT_DIR_MODE,
    DEFAULT_DIR_PREFIX,
    DEFAULT_FILE_PREFIX,
    DEFAULT_MODE,
    CsvOptions,
    DirOptions,
    WriteOptions,
    resolve_options,
)
from tempwrite.errors import InvalidArgument

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def _parse_bool(value: str) -> bool | None:
    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    return None


def parse_mode(value: Any) -> int:
    """Accept ints as-is and strings as octal (``"600"``, ``"0o600"``)."""
    if isinstance(value, int):
        return value
    text = str(value).strip().lower().removeprefix("0o")
    return int(text, 8)


def _config_mode(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    try:
        mode = parse_mode(value)
    except ValueError as e:
        raise InvalidArgument(f"Invalid {key} in config: {value!r}") from e
    if not 0 <= mode <= 0o7777:
        raise InvalidArgument(f"Invalid {key} in config: {value!r}")
    return mode


@dataclass(slots=True)
class Config:
    """Resolved defaults for temporary files and directories."""

    dir: Path | None = None
    prefix: str = DEFAULT_FILE_PREFIX
    dir_prefix: str = DEFAULT_DIR_PREFIX
    cleanup: bool = True
    mode: int = DEFAULT_MODE
    dir_mode: int = DEFAULT_DIR_MODE
    delimiter: str = ","

    @classmethod
    def load(cls) -> Config:
        """Load config from files and environment variables.

        Priority (highest to lowest):
        1. Environment variables (TEMPWRITE_*)
        2. Project config (.tempwrite/config.toml or .tempwrite/config.yaml)
        3. Global config (~/.tempwrite/config.toml or ~/.tempwrite/config.yaml)
        4. Defaults
        """
        config_data: dict[str, Any] = {}

        global_config_dir = Path.home() / ".tempwrite"
        config_data.update(cls._load_config_file(global_config_dir))

        project_config_dir = Path.cwd() / ".tempwrite"
        config_data.update(cls._load_config_file(project_config_dir))

        config_data = cls._apply_env_vars(config_data)
        return cls._from_dict(config_data)

    def to_write_options(self) -> WriteOptions:
        """Project onto write options; invalid values raise ``InvalidArgument``."""
        return resolve_options(
            WriteOptions,
            None,
            None,
            {"dir": self.dir, "prefix": self.prefix, "cleanup": self.cleanup, "mode": self.mode},
        )

    def to_csv_options(self) -> CsvOptions:
        return resolve_options(
            CsvOptions,
            None,
            None,
            {
                "dir": self.dir,
                "prefix": self.prefix,
                "cleanup": self.cleanup,
                "mode": self.mode,
                "delimiter": self.delimiter,
            },
        )

    def to_dir_options(self) -> DirOptions:
        return resolve_options(
            DirOptions,
            None,
            None,
            {
                "dir": self.dir,
                "prefix": self.dir_prefix,
                "cleanup": self.cleanup,
                "mode": self.dir_mode,
            },
        )

    @classmethod
    def _load_config_file(cls, config_dir: Path) -> dict[str, Any]:
        """Load config from a directory (TOML or YAML)."""
        toml_path = config_dir / "config.toml"
        yaml_path = config_dir / "config.yaml"
        yml_path = config_dir / "config.yml"

        if toml_path.exists():
            with open(toml_path, "rb") as f:
                return tomllib.load(f)
        if yaml_path.exists():
            with open(yaml_path) as f:
                return yaml.safe_load(f) or {}
        if yml_path.exists():
            with open(yml_path) as f:
                return yaml.safe_load(f) or {}

        return {}

    @classmethod
    def _apply_env_vars(cls, config_data: dict[str, Any]) -> dict[str, Any]:
        """Apply TEMPWRITE_* environment variables."""
        env_mappings = {
            "TEMPWRITE_DIR": "dir",
            "TEMPWRITE_PREFIX": "prefix",
            "TEMPWRITE_DIR_PREFIX": "dir_prefix",
            "TEMPWRITE_CLEANUP": "cleanup",
            "TEMPWRITE_MODE": "mode",
            "TEMPWRITE_DIR_MODE": "dir_mode",
            "TEMPWRITE_DELIMITER": "delimiter",
        }

        for env_var, config_key in env_mappings.items():
            if value := os.environ.get(env_var):
                if config_key == "cleanup":
                    parsed = _parse_bool(value)
                    if parsed is not None:
                        config_data[config_key] = parsed
                else:
                    config_data[config_key] = value

        return config_data

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from dictionary."""
        directory = data.get("dir")

        cleanup = data.get("cleanup", True)
        if isinstance(cleanup, str):
            cleanup = _parse_bool(cleanup)
            if cleanup is None:
                cleanup = True

        return cls(
            dir=Path(directory).expanduser() if directory else None,
            prefix=str(data.get("prefix", DEFAULT_FILE_PREFIX)),
            dir_prefix=str(data.get("dir_prefix", DEFAULT_DIR_PREFIX)),
            cleanup=bool(cleanup),
            mode=_config_mode(data, "mode", DEFAULT_MODE),
            dir_mode=_config_mode(data, "dir_mode", DEFAULT_DIR_MODE),
            delimiter=str(data.get("delimiter", ",")),
        )
