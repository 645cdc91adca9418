from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the listing generator.

Resolution order (later wins):
1. Built-in defaults
2. YAML file (``config/listings.yml`` unless another path is given)
3. Environment variables (``LOTLISTER_*``; ``.env`` is loaded by the CLI)
4. Explicit overrides (CLI flags)

The YAML file is optional when the default path is used. When present it is
validated against ``config_schema.json`` which rejects unknown keys.
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/listings.yml")

ENV_OVERRIDES = {
    "LOTLISTER_INPUT_DIR": "input_directory",
    "LOTLISTER_OUTPUT_DIR": "output_directory",
    "LOTLISTER_PHOTOS_DIR": "photos_directory",
}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ListingConfig:
    input_directory: str = "."
    output_directory: str | None = None  # default: <input_directory>/listings
    photos_directory: str | None = None  # default: input_directory
    data_file: str = "inventory.csv"
    template_file: str = "template.txt"
    output_extension: str = ".txt"
    preview_name: str = "preview.html"
    log_directory: str = "logs"

    @property
    def input_path(self) -> Path:
        return Path(self.input_directory)

    @property
    def output_path(self) -> Path:
        if self.output_directory:
            return Path(self.output_directory)
        return self.input_path / "listings"

    @property
    def photos_path(self) -> Path:
        if self.photos_directory:
            return Path(self.photos_directory)
        return self.input_path

    def resolve(self, name: str) -> Path:
        """Resolve a file name relative to the input directory (absolute paths kept)."""
        p = Path(name)
        if p.is_absolute():
            return p
        return self.input_path / p

    @property
    def data_path(self) -> Path:
        return self.resolve(self.data_file)

    @property
    def template_path(self) -> Path:
        return self.resolve(self.template_file)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the packaged JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    _validate_config_schema(data)
    return data


def load_config(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    environ: dict[str, str] | None = None,
) -> ListingConfig:
    """Build a ListingConfig from defaults, YAML, environment and overrides.

    ``path=None`` means the default location, which may be absent. An explicit
    path that does not exist is an error.
    """
    explicit = path is not None
    path = path if path is not None else DEFAULT_CONFIG_PATH
    if path.exists():
        data = _read_yaml(path)
    elif explicit:
        raise ConfigError(f"config file not found: {path}")
    else:
        data = {}

    env = environ if environ is not None else os.environ
    for var, key in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            data[key] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        cfg = replace(ListingConfig(), **data)
    except TypeError as e:
        raise ConfigError(f"unknown config key: {e}") from e

    ext = cfg.output_extension
    if not ext.startswith("."):
        cfg = replace(cfg, output_extension=f".{ext}")
    return cfg
