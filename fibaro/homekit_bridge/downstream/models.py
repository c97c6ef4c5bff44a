#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ClimateZoneProperties(BaseModel):
    """
    Climate panel zone state

    Example (input JSON, fragment):
        {"mode": "Heat", "currentTemperatureHeating": 21.5, "handMode": "Off"}
    """

    model_config = ConfigDict(extra="allow")

    mode: Optional[str] = None
    currentTemperatureHeating: Optional[float] = None


class ClimateZone(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    name: Optional[str] = None
    properties: ClimateZoneProperties = ClimateZoneProperties()


class HeatingZoneProperties(BaseModel):
    """Heating panel zone state. Heating zones have no mode."""

    model_config = ConfigDict(extra="allow")

    currentTemperature: Optional[float] = None


class HeatingZone(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    name: Optional[str] = None
    properties: HeatingZoneProperties = HeatingZoneProperties()
