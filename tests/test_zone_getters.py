#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Thermostat getter tests.

Climate and heating zones fetch their state through a ZoneClient; a stub
client records the calls and returns canned zones (or raises).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import pytest

from fibaro.homekit_bridge.bridge import getters
from fibaro.homekit_bridge.bridge.characteristics import (
    Characteristic,
    CharacteristicKind,
    CurrentHeatingCoolingState,
    TargetHeatingCoolingState,
    identity_for,
)
from fibaro.homekit_bridge.bridge.models import ConverterContext, DeviceProperties, ServiceDescriptor
from fibaro.homekit_bridge.downstream.base import HubClientError, ZoneClient
from fibaro.homekit_bridge.downstream.models import ClimateZone, HeatingZone

K = CharacteristicKind

CLIMATE = ServiceDescriptor(device_ids=["7"], is_climate_zone=True)
HEATING = ServiceDescriptor(device_ids=["9"], is_heating_zone=True)
PLAIN = ServiceDescriptor(device_ids=["42"])


class StubZones(ZoneClient):
    def __init__(
        self,
        climate: Optional[Dict[str, Any]] = None,
        heating: Optional[Dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.climate = climate or {}
        self.heating = heating or {}
        self.error = error
        self.calls: List[Tuple[str, Any]] = []

    async def get_climate_zone(self, zone_id):
        self.calls.append(("climate", zone_id))
        if self.error:
            raise self.error
        return ClimateZone.model_validate({"id": zone_id, "properties": self.climate})

    async def get_heating_zone(self, zone_id):
        self.calls.append(("heating", zone_id))
        if self.error:
            raise self.error
        return HeatingZone.model_validate({"id": zone_id, "properties": self.heating})

    async def close(self) -> None:
        return None


def _ctx(kind, service, zones=None, properties=None) -> ConverterContext:
    return ConverterContext(
        kind=kind,
        characteristic=Characteristic(identity_for(kind)),
        service=service,
        device_ids=list(service.device_ids),
        properties=DeviceProperties.from_raw(properties),
        zones=zones,
    )


# ---- temperature ----

@pytest.mark.asyncio
@pytest.mark.parametrize("kind", [K.CURRENT_TEMPERATURE, K.TARGET_TEMPERATURE])
async def test_climate_zone_temperature(kind):
    zones = StubZones(climate={"mode": "Heat", "currentTemperatureHeating": 21.5})
    getter = getters.get_current_temperature if kind is K.CURRENT_TEMPERATURE else getters.get_target_temperature
    ctx = _ctx(kind, CLIMATE, zones, {"value": 5})

    outcome = await getter(ctx)

    assert outcome.updated is True
    assert ctx.characteristic.value == 21.5
    assert zones.calls == [("climate", "7")]


@pytest.mark.asyncio
async def test_heating_zone_temperature():
    zones = StubZones(heating={"currentTemperature": 19})
    ctx = _ctx(K.CURRENT_TEMPERATURE, HEATING, zones)

    await getters.get_current_temperature(ctx)

    assert ctx.characteristic.value == 19.0
    assert zones.calls == [("heating", "9")]


@pytest.mark.asyncio
async def test_plain_thermostat_uses_device_value():
    zones = StubZones()
    ctx = _ctx(K.CURRENT_TEMPERATURE, PLAIN, zones, {"value": 22.5})

    await getters.get_current_temperature(ctx)

    assert ctx.characteristic.value == 22.5
    assert zones.calls == []

    ctx = _ctx(K.TARGET_TEMPERATURE, PLAIN, zones, {})
    outcome = await getters.get_target_temperature(ctx)
    assert outcome.updated is False


@pytest.mark.asyncio
async def test_zone_without_temperature_is_skipped(caplog):
    zones = StubZones(climate={"mode": "Heat"})
    ctx = _ctx(K.CURRENT_TEMPERATURE, CLIMATE, zones)

    with caplog.at_level(logging.WARNING):
        outcome = await getters.get_current_temperature(ctx)

    assert outcome.updated is False
    assert ctx.characteristic.updates == 0
    assert "No value for Temperature" in caplog.text


@pytest.mark.asyncio
@pytest.mark.parametrize("service", [CLIMATE, HEATING])
async def test_zone_fetch_failure_is_skipped(service, caplog):
    zones = StubZones(error=HubClientError("hub down"))
    ctx = _ctx(K.TARGET_TEMPERATURE, service, zones)

    with caplog.at_level(logging.WARNING):
        outcome = await getters.get_target_temperature(ctx)

    assert outcome.updated is False
    assert ctx.characteristic.updates == 0
    assert "There was a problem getting value" in caplog.text
    assert "hub down" in caplog.text


@pytest.mark.asyncio
async def test_zone_without_client_is_skipped():
    ctx = _ctx(K.CURRENT_TEMPERATURE, CLIMATE, zones=None)

    outcome = await getters.get_current_temperature(ctx)

    assert outcome.updated is False


# ---- heating / cooling state ----

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "mode,expected",
    [
        ("Off", CurrentHeatingCoolingState.OFF),
        ("Heat", CurrentHeatingCoolingState.HEAT),
        ("Cool", CurrentHeatingCoolingState.COOL),
    ],
)
@pytest.mark.parametrize("kind", [K.CURRENT_HEATING_COOLING_STATE, K.TARGET_HEATING_COOLING_STATE])
async def test_climate_zone_mode(kind, mode, expected):
    zones = StubZones(climate={"mode": mode})
    ctx = _ctx(kind, CLIMATE, zones)

    await getters.get_heating_cooling_state(ctx)

    assert ctx.characteristic.value == expected
    assert zones.calls == [("climate", "7")]


@pytest.mark.asyncio
@pytest.mark.parametrize("climate", [{"mode": "Auto"}, {"mode": ""}, {}])
async def test_climate_zone_unusable_mode_keeps_value(climate):
    zones = StubZones(climate=climate)
    ctx = _ctx(K.TARGET_HEATING_COOLING_STATE, CLIMATE, zones)
    ctx.characteristic.update_value(TargetHeatingCoolingState.COOL)

    outcome = await getters.get_heating_cooling_state(ctx)

    assert outcome.updated is False
    assert ctx.characteristic.value == TargetHeatingCoolingState.COOL
    assert ctx.characteristic.updates == 1


@pytest.mark.asyncio
async def test_climate_zone_mode_fetch_failure_is_skipped():
    zones = StubZones(error=HubClientError("timeout"))
    ctx = _ctx(K.CURRENT_HEATING_COOLING_STATE, CLIMATE, zones)

    outcome = await getters.get_heating_cooling_state(ctx)

    assert outcome.updated is False
    assert ctx.characteristic.updates == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", [K.CURRENT_HEATING_COOLING_STATE, K.TARGET_HEATING_COOLING_STATE])
async def test_heating_zone_always_heats(kind):
    zones = StubZones()
    ctx = _ctx(kind, HEATING, zones)

    await getters.get_heating_cooling_state(ctx)

    assert ctx.characteristic.value == TargetHeatingCoolingState.HEAT
    assert zones.calls == []


@pytest.mark.asyncio
async def test_plain_service_has_no_mode():
    ctx = _ctx(K.CURRENT_HEATING_COOLING_STATE, PLAIN, StubZones(), {"value": "Heat"})

    outcome = await getters.get_heating_cooling_state(ctx)

    assert outcome.updated is False
    assert ctx.characteristic.updates == 0
