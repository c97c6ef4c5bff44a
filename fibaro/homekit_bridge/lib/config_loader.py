#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError

from . import constants as c

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration file is missing, is not JSON or does not match the schema."""


class ConverterSettings(BaseModel):
    """
    Tunable snapping and threshold policy used by the converters.

    Defaults mirror what the hub actually reports, see lib/constants.py.
    """

    percent_min: int = c.PERCENT_MIN
    percent_max: int = c.PERCENT_MAX
    snap_high_from: int = c.SNAP_HIGH_FROM
    snap_high_to: int = c.SNAP_HIGH_TO
    snap_low_from: int = c.SNAP_LOW_FROM
    snap_low_to: int = c.SNAP_LOW_TO
    battery_max: float = c.BATTERY_MAX
    low_battery_threshold: float = c.LOW_BATTERY_THRESHOLD
    outlet_in_use_watts: float = c.OUTLET_IN_USE_WATTS
    door_closed_value: int = c.DOOR_CLOSED_VALUE
    door_open_value: int = c.DOOR_OPEN_VALUE


class HubConfig(BaseModel):
    url: str
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = c.DEFAULT_HUB_TIMEOUT
    verify_ssl: bool = True


class BridgeConfig(BaseModel):
    hub: Optional[HubConfig] = None
    converters: ConverterSettings = ConverterSettings()
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


def load_config(path: str = c.CONFIG_PATH) -> BridgeConfig:
    """
    Load JSON config from disk.

    Input:
      path: path to JSON file.

    Output:
      BridgeConfig with hub access and converter settings.

    Example:
      cfg = load_config("tests/configs/config_example.json")
      cfg.hub.url -> "http://192.168.1.10"
      cfg.converters.low_battery_threshold -> 20
    """
    logger.debug("Reading bridge configuration file %r", path)
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a JSON object")

    try:
        return BridgeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e
