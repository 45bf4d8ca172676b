from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_BOILERPLATE, HierarchySettings, ReformatConfig

"""Config loader.

Responsibilities:
- Load the YAML config (default ``config/reformat.yml``)
- Validate it against the bundled JSON schema (unknown keys rejected)
- Apply defaults for every missing key
- Apply ``REFORMAT_*`` environment overrides (a ``.env`` file is loaded by the CLI)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/reformat.yml")

# environment variable -> ReformatConfig field
ENV_OVERRIDES = {
    "REFORMAT_SOURCE_DIR": "source_directory",
    "REFORMAT_OUTPUT_DIR": "output_directory",
    "REFORMAT_LOG_DIR": "log_directory",
    "REFORMAT_DEFAULT_ROOT_ID": "default_root_id",
}


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data violates it
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


def config_from_dict(data: dict[str, Any]) -> ReformatConfig:
    """Build a ReformatConfig from validated raw data, defaults for missing keys."""
    base = ReformatConfig()
    hierarchy = HierarchySettings(
        program_prefixes=dict(data.get("program_prefixes") or {}),
        boilerplate=tuple(data.get("boilerplate_phrases", DEFAULT_BOILERPLATE)),
        seed_major_areas=bool(data.get("seed_major_areas", False)),
    )
    return ReformatConfig(
        source_directory=data.get("source_directory", base.source_directory),
        output_directory=data.get("output_directory", base.output_directory),
        log_directory=data.get("log_directory", base.log_directory),
        default_root_id=str(data.get("default_root_id", base.default_root_id)),
        interactive=bool(data.get("interactive", base.interactive)),
        root_ids={str(k): str(v) for k, v in (data.get("root_ids") or {}).items()},
        hierarchy=hierarchy,
    )


def apply_env_overrides(cfg: ReformatConfig, environ: Mapping[str, str] | None = None) -> ReformatConfig:
    env = os.environ if environ is None else environ
    changes = {field: env[var] for var, field in ENV_OVERRIDES.items() if env.get(var)}
    return replace(cfg, **changes) if changes else cfg


def load_config(path: Path) -> ReformatConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)
    return config_from_dict(data)
