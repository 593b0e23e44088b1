from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest
import yaml

from leave_ledger.config.loader import SCHEMA_PATH

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_schema_shape(schema):
    assert schema["required"] == ["store_path"]
    assert schema["additionalProperties"] is False
    assert set(schema["properties"]) == {"store_path", "logs_dir", "sample_size", "default_workday_hours"}


def test_shipped_sample_config_is_valid(schema):
    data = yaml.safe_load((PROJECT_ROOT / "config" / "leave_ledger.yml").read_text(encoding="utf-8"))
    jsonschema.validate(data, schema)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"store_path": 3},
        {"store_path": "x", "sample_size": 1001},
        {"store_path": "x", "default_workday_hours": 0},
        {"store_path": "x", "logs_dir": ""},
    ],
)
def test_schema_rejects(schema, data):
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(data, schema)
