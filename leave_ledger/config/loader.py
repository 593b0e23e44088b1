from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..errors import LedgerError

"""Config loader.

Responsibilities:
- Load YAML (default ``config/leave_ledger.yml``)
- Validate against the packaged ``config_schema.json``
- Apply defaults for optional keys
"""

__all__ = [
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "LedgerConfig",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/leave_ledger.yml")


class ConfigError(LedgerError):
    pass


@dataclass(frozen=True)
class LedgerConfig:
    store_path: Path
    logs_dir: Path = Path("./logs")
    sample_size: int = 50
    default_workday_hours: int = 7


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or data violates it
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


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> LedgerConfig:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    return LedgerConfig(
        store_path=Path(data["store_path"]),
        logs_dir=Path(data.get("logs_dir", "./logs")),
        sample_size=data.get("sample_size", 50),
        default_workday_hours=data.get("default_workday_hours", 7),
    )
