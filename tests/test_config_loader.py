#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fibaro.homekit_bridge.lib.config_loader import BridgeConfig, ConfigError, load_config


def test_load_config_from_file():
    """
    Integration-style test:
      - load JSON from tests/configs/config_example.json
      - overridden converter settings are applied, others keep defaults
    """
    cfg_path = Path(__file__).parent / "configs" / "config_example.json"
    cfg = load_config(str(cfg_path))

    assert cfg.hub is not None
    assert cfg.hub.url == "http://192.168.1.10"
    assert cfg.hub.username == "admin"
    assert cfg.hub.timeout == 3.0
    assert cfg.hub.verify_ssl is True

    assert cfg.converters.low_battery_threshold == 25
    assert cfg.converters.outlet_in_use_watts == 2.5
    # Untouched defaults
    assert cfg.converters.snap_high_from == 99
    assert cfg.converters.snap_high_to == 100
    assert cfg.converters.battery_max == 100

    assert cfg.log_level == "DEBUG"


def test_empty_object_gives_defaults(tmp_path: Path):
    p = tmp_path / "cfg.json"
    p.write_text("{}", encoding="utf-8")

    cfg = load_config(str(p))

    assert cfg == BridgeConfig()
    assert cfg.hub is None
    assert cfg.converters.low_battery_threshold == 20


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError, match="Cannot read"):
        load_config(str(tmp_path / "nope.json"))


def test_not_json_raises(tmp_path: Path):
    p = tmp_path / "cfg.json"
    p.write_text("hub = 1", encoding="utf-8")

    with pytest.raises(ConfigError, match="Cannot read"):
        load_config(str(p))


def test_not_object_raises(tmp_path: Path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps([1, 2]), encoding="utf-8")

    with pytest.raises(ConfigError, match="JSON object"):
        load_config(str(p))


def test_schema_violation_raises(tmp_path: Path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"hub": {"url": "http://hub", "timeout": "fast"}}), encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(str(p))


@pytest.mark.parametrize("level", ["verbose", "info", "TRACE"])
def test_unknown_log_level_raises(tmp_path: Path, level):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"log_level": level}), encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(str(p))
