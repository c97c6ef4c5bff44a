#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from fibaro.homekit_bridge.bridge import getters
from fibaro.homekit_bridge.bridge.characteristics import (
    HAP_IDENTITIES,
    Characteristic,
    CharacteristicKind,
    CharacteristicHandle,
    CharacteristicProps,
    hap_uuid,
    identity_for,
)
from fibaro.homekit_bridge.bridge.converter_registry import CONVERTERS, ConverterRegistry
from fibaro.homekit_bridge.bridge.models import DeviceProperties, ServiceDescriptor
from fibaro.homekit_bridge.downstream.base import ZoneClient
from fibaro.homekit_bridge.downstream.models import ClimateZone, HeatingZone
from fibaro.homekit_bridge.lib.config_loader import ConverterSettings

K = CharacteristicKind


def test_every_kind_has_exactly_one_getter():
    assert set(CONVERTERS) == set(CharacteristicKind)


def test_default_identities_are_unique():
    assert len(HAP_IDENTITIES) == len(CharacteristicKind)
    assert set(HAP_IDENTITIES.values()) == set(CharacteristicKind)


def test_hap_uuid_format():
    assert hap_uuid(0x25) == "00000025-0000-1000-8000-0026BB765291"
    assert identity_for(K.ON) == hap_uuid(0x25)


def test_lookup_by_identity():
    registry = ConverterRegistry.from_identities()

    assert registry.by_identity(hap_uuid(0x08)) is getters.get_brightness
    # framework may hand out lower case UUIDs
    assert registry.by_identity(hap_uuid(0x08).lower()) is getters.get_brightness
    assert registry.by_identity(hap_uuid(0x66)) is getters.get_security_system_state
    assert registry.by_identity("not-a-uuid") is None


def test_injected_translation_table_by_name():
    registry = ConverterRegistry.from_identities({"abc-1": "Brightness", "abc-2": K.HUE})

    assert registry.kind_of("ABC-1") is K.BRIGHTNESS
    assert registry.by_identity("abc-2") is getters.get_hue
    assert registry.kinds() == [K.BRIGHTNESS, K.HUE]
    assert registry.by_identity(hap_uuid(0x08)) is None


def test_unknown_kind_name_raises():
    with pytest.raises(ValueError, match="Unknown characteristic kind"):
        ConverterRegistry.from_identities({"abc": "Teleport"})


def test_identity_mapped_twice_raises():
    with pytest.raises(ValueError, match="mapped to both"):
        ConverterRegistry.from_identities({"abc": "On", "ABC": "Brightness"})


@pytest.mark.asyncio
async def test_refresh_with_raw_properties():
    registry = ConverterRegistry.from_identities()
    ch = Characteristic(identity_for(K.BRIGHTNESS), CharacteristicProps(0, 100))

    outcome = await registry.refresh(ch, ServiceDescriptor(device_ids=["12"]), ["12"], {"value": "99"})

    assert outcome.updated is True
    assert ch.value == 100


@pytest.mark.asyncio
async def test_refresh_with_typed_properties():
    registry = ConverterRegistry.from_identities()
    ch = Characteristic(identity_for(K.BATTERY_LEVEL))
    props = DeviceProperties(batteryLevel=255)

    await registry.refresh(ch, ServiceDescriptor(), [], props)

    assert ch.value == 0


@pytest.mark.asyncio
async def test_refresh_unregistered_identity_is_skipped(caplog):
    registry = ConverterRegistry.from_identities({identity_for(K.ON): K.ON})
    ch = Characteristic(identity_for(K.BRIGHTNESS))

    with caplog.at_level(logging.WARNING):
        outcome = await registry.refresh(ch, ServiceDescriptor(), [], {"value": "50"})

    assert outcome.updated is False
    assert ch.updates == 0
    assert "No getter for characteristic" in caplog.text


@pytest.mark.asyncio
async def test_refresh_never_raises(caplog):
    async def broken(ctx):
        raise RuntimeError("boom")

    registry = ConverterRegistry(identities={"X": K.ON}, converters={K.ON: broken})
    ch = Characteristic("x")

    with caplog.at_level(logging.ERROR):
        outcome = await registry.refresh(ch, ServiceDescriptor(), ["1"], {"value": 1})

    assert outcome.updated is False
    assert "boom" in outcome.reason
    assert "Getter for On failed" in caplog.text


@pytest.mark.asyncio
async def test_refresh_with_bad_properties_is_skipped():
    registry = ConverterRegistry.from_identities()
    ch = Characteristic(identity_for(K.ON))

    outcome = await registry.refresh(ch, ServiceDescriptor(), [], "not a mapping")

    assert outcome.updated is False
    assert ch.updates == 0


@pytest.mark.asyncio
async def test_refresh_passes_settings_and_zone_client():
    class Zones(ZoneClient):
        def __init__(self):
            self.calls = []

        async def get_climate_zone(self, zone_id):
            self.calls.append(zone_id)
            return ClimateZone.model_validate({"properties": {"currentTemperatureHeating": 20.5}})

        async def get_heating_zone(self, zone_id):  # pragma: no cover
            return HeatingZone()

        async def close(self):  # pragma: no cover
            return None

    zones = Zones()
    registry = ConverterRegistry.from_identities(settings=ConverterSettings(outlet_in_use_watts=5), zones=zones)

    temp = Characteristic(identity_for(K.TARGET_TEMPERATURE))
    # device ids default to the service ones
    await registry.refresh(temp, ServiceDescriptor(device_ids=["7"], is_climate_zone=True))
    assert temp.value == 20.5
    assert zones.calls == ["7"]

    outlet = Characteristic(identity_for(K.OUTLET_IN_USE))
    await registry.refresh(outlet, ServiceDescriptor(), [], {"power": 3})
    assert outlet.value is False


@pytest.mark.asyncio
async def test_refresh_drives_any_characteristic_handle():
    handle = MagicMock(spec=CharacteristicHandle)
    handle.uuid = identity_for(K.CURRENT_POSITION)
    handle.props = CharacteristicProps(0, 100)
    registry = ConverterRegistry.from_identities()

    outcome = await registry.refresh(handle, ServiceDescriptor(), ["3"], {"value": "1"})

    assert outcome.updated is True
    handle.update_value.assert_called_once_with(0)


@pytest.mark.asyncio
async def test_refresh_heating_zone_through_mocked_client():
    zones = AsyncMock(spec=ZoneClient)
    zones.get_heating_zone.return_value = HeatingZone.model_validate({"properties": {"currentTemperature": 18}})
    registry = ConverterRegistry.from_identities(zones=zones)
    ch = Characteristic(identity_for(K.CURRENT_TEMPERATURE))

    await registry.refresh(ch, ServiceDescriptor(device_ids=["9", "10"], is_heating_zone=True))

    zones.get_heating_zone.assert_awaited_once_with("9")
    zones.get_climate_zone.assert_not_called()
    assert ch.value == 18.0
