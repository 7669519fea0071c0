"""
Configuration Loader (``flowsync_config.loader``).

Responsibility
--------------
Load a firm configuration YAML file and parse it into a ``FirmConfig``.
Missing keys fall back to the schema defaults; unknown keys are rejected so
typos never silently revert a setting.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown key, wrong type, or failed schema validation  -> ``ConfigError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import fields
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from flowsync_config.schema import FirmConfig
from flowsync_kernel.exceptions import ConfigError
from flowsync_kernel.logging_config import get_logger

logger = get_logger("config.loader")

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")

_DECIMAL_FIELDS = frozenset({
    "standard_week_hours",
    "planner_leave_multiplier",
    "conflict_leave_multiplier",
})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def _parse_decimal(key: str, value: Any) -> Decimal:
    # YAML floats go through str() so 37.5 stays Decimal("37.5")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ConfigError(f"{key} must be numeric, got {value!r}", key=key) from exc


def parse_config(data: dict[str, Any]) -> FirmConfig:
    """Parse a ``FirmConfig`` from a dict (e.g. loaded from YAML)."""
    known = {f.name for f in fields(FirmConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}", key=unknown[0])

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key in _DECIMAL_FIELDS:
            kwargs[key] = _parse_decimal(key, value)
        elif key == "timesheet_week_start":
            try:
                kwargs[key] = parse_date(value)
            except ValueError as exc:
                raise ConfigError(str(exc), key=key) from exc
        elif key == "service_codes":
            if not isinstance(value, (list, tuple)):
                raise ConfigError(f"{key} must be a list, got {value!r}", key=key)
            kwargs[key] = tuple(str(code).upper() for code in value)
        elif key == "timesheet_working_days":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{key} must be an integer, got {value!r}", key=key)
            kwargs[key] = value
        else:
            kwargs[key] = str(value)

    try:
        return FirmConfig(**kwargs)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(path: Path | str | None = None) -> FirmConfig:
    """Load a firm configuration; ``None`` loads the packaged defaults."""
    config_path = Path(path) if path is not None else DEFAULTS_PATH
    data = load_yaml_file(config_path)
    config = parse_config(data)
    logger.info(
        "firm_config_loaded",
        extra={
            "path": str(config_path),
            "keys": sorted(data.keys()),
            "checksum": compute_checksum(config.to_dict()),
        },
    )
    return config


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
