#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Getters: hub device properties -> HomeKit characteristic values

Every getter is a coroutine taking a ConverterContext and returning a
ConversionOutcome. Getters write through ctx.update() and never raise: bad
input means the characteristic keeps its previous value.

Only the climate/heating zone getters actually await (zone fetch).
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .characteristics import (
    Active,
    CarbonMonoxideDetected,
    ChargingState,
    ContactSensorState,
    CurrentDoorState,
    CurrentHeatingCoolingState,
    InUse,
    LeakDetected,
    LockCurrentState,
    PositionState,
    ProgrammableSwitchEvent,
    SmokeDetected,
    StatusLowBattery,
    TargetDoorState,
    TargetHeatingCoolingState,
    TemperatureDisplayUnits,
)
from .models import ConversionOutcome, ConverterContext
from .security_state import lookup_security_state
from .values import convert_to_bool, normalize_brightness, normalize_position, normalize_tilt, parse_rgbw
from ..downstream.base import HubClientError
from ..lib.constants import TILT_ANGLE_MAX, TILT_ANGLE_MIN

logger = logging.getLogger(__name__)

CLOSED_STATE = "Closed"
UNKNOWN_STATE = "Unknown"

HEATING_COOLING_MODES: Mapping[str, int] = {
    "Off": CurrentHeatingCoolingState.OFF,
    "Heat": CurrentHeatingCoolingState.HEAT,
    "Cool": CurrentHeatingCoolingState.COOL,
}

# Door state strings. Transitional states report where the door still is
# (current) and where it is heading (target).
CURRENT_DOOR_STATES: Mapping[str, int] = {
    "Opened": CurrentDoorState.OPEN,
    "Opening": CurrentDoorState.CLOSED,
    "Closing": CurrentDoorState.OPEN,
    "Closed": CurrentDoorState.CLOSED,
}

TARGET_DOOR_STATES: Mapping[str, int] = {
    "Opened": TargetDoorState.OPEN,
    "Opening": TargetDoorState.OPEN,
    "Closing": TargetDoorState.CLOSED,
    "Closed": TargetDoorState.CLOSED,
}


# ---- generic ----

async def get_bool(ctx: ConverterContext) -> ConversionOutcome:
    # An explicit null value still counts as reported
    if ctx.properties.reported("value"):
        return ctx.update(convert_to_bool(ctx.properties.field("value").raw))
    # Scenes and activity switches report through the UI property only
    activity = ctx.properties.field("start_stop_activity")
    return ctx.update(activity.raw if activity.present else False)


async def get_float(ctx: ConverterContext) -> ConversionOutcome:
    value = ctx.properties.field("value").as_float()
    if value is None:
        return ctx.skip("value is not a number")
    return ctx.update(value)


# ---- lights ----

async def get_brightness(ctx: ConverterContext) -> ConversionOutcome:
    snap = not ctx.service.is_global_variable_dimmer
    value = normalize_brightness(ctx.properties.field("value").raw, ctx.settings, snap=snap)
    if value is None:
        return ctx.skip("value is not a number")
    return ctx.update(value)


async def get_hue(ctx: ConverterContext) -> ConversionOutcome:
    hsv = parse_rgbw(ctx.properties.field("color").raw)
    if hsv is None:
        return ctx.skip("no usable color")
    return ctx.update(round(hsv.h))


async def get_saturation(ctx: ConverterContext) -> ConversionOutcome:
    hsv = parse_rgbw(ctx.properties.field("color").raw)
    if hsv is None:
        return ctx.skip("no usable color")
    return ctx.update(round(hsv.s))


# ---- window coverings ----

async def get_position_state(ctx: ConverterContext) -> ConversionOutcome:
    return ctx.update(PositionState.STOPPED)


async def get_current_position(ctx: ConverterContext) -> ConversionOutcome:
    props = ctx.characteristic.props
    low = props.min_value if props.min_value is not None else ctx.settings.percent_min
    high = props.max_value if props.max_value is not None else ctx.settings.percent_max

    raw = ctx.properties.field("value")
    if raw.as_float() is None:
        closed = ctx.properties.field("state").raw == CLOSED_STATE
        return ctx.update(ctx.settings.percent_min if closed else ctx.settings.percent_max)
    return ctx.update(normalize_position(raw.as_int(), low, high, ctx.settings))


async def get_current_tilt_angle(ctx: ConverterContext) -> ConversionOutcome:
    props = ctx.characteristic.props
    low = props.min_value if props.min_value is not None else TILT_ANGLE_MIN
    high = props.max_value if props.max_value is not None else TILT_ANGLE_MAX
    angle = normalize_tilt(ctx.properties.field("value2").raw, low, high, ctx.settings)
    return ctx.update(angle)


# ---- sensors ----

async def get_contact_sensor_state(ctx: ConverterContext) -> ConversionOutcome:
    # 0 means the magnet touches the sensor: door closed
    if ctx.properties.field("value").as_bool():
        return ctx.update(ContactSensorState.CONTACT_NOT_DETECTED)
    return ctx.update(ContactSensorState.CONTACT_DETECTED)


async def get_leak_detected(ctx: ConverterContext) -> ConversionOutcome:
    if ctx.properties.field("value").as_bool():
        return ctx.update(LeakDetected.LEAK_DETECTED)
    return ctx.update(LeakDetected.LEAK_NOT_DETECTED)


async def get_smoke_detected(ctx: ConverterContext) -> ConversionOutcome:
    if ctx.properties.field("value").as_bool():
        return ctx.update(SmokeDetected.SMOKE_DETECTED)
    return ctx.update(SmokeDetected.SMOKE_NOT_DETECTED)


async def get_carbon_monoxide_detected(ctx: ConverterContext) -> ConversionOutcome:
    if ctx.properties.field("value").as_bool():
        return ctx.update(CarbonMonoxideDetected.CO_LEVELS_ABNORMAL)
    return ctx.update(CarbonMonoxideDetected.CO_LEVELS_NORMAL)


async def get_carbon_monoxide_level(ctx: ConverterContext) -> ConversionOutcome:
    level = ctx.properties.field("concentration").as_float()
    if level is None:
        return ctx.skip("concentration is not a number")
    return ctx.update(level)


async def get_carbon_monoxide_peak_level(ctx: ConverterContext) -> ConversionOutcome:
    level = ctx.properties.field("max_concentration").as_float()
    if level is None:
        return ctx.skip("maxConcentration is not a number")
    return ctx.update(level)


async def get_outlet_in_use(ctx: ConverterContext) -> ConversionOutcome:
    power = ctx.properties.field("power").as_float()
    if power is None:
        return ctx.skip("power is not a number", level=logging.WARNING)
    return ctx.update(power > ctx.settings.outlet_in_use_watts)


async def get_obstruction_detected(ctx: ConverterContext) -> ConversionOutcome:
    return ctx.update(False)


# ---- locks ----

async def get_lock_state(ctx: ConverterContext) -> ConversionOutcome:
    """
    Lock current and target state share the same rule.

    Lock switches are relays where "on" releases the lock, so the sense is
    inverted for them.
    """
    locked = ctx.properties.field("value").as_bool()
    if ctx.service.is_lock_switch:
        locked = not locked
    return ctx.update(LockCurrentState.SECURED if locked else LockCurrentState.UNSECURED)


# ---- battery ----

async def get_battery_level(ctx: ConverterContext) -> ConversionOutcome:
    level = ctx.properties.field("battery_level").as_float()
    if level is None:
        return ctx.skip("batteryLevel is not a number", level=logging.WARNING)
    if level > ctx.settings.battery_max:
        # Hub reports 255 for "unknown"
        level = 0
    return ctx.update(level)


async def get_charging_state(ctx: ConverterContext) -> ConversionOutcome:
    return ctx.update(ChargingState.NOT_CHARGING)


async def get_status_low_battery(ctx: ConverterContext) -> ConversionOutcome:
    level = ctx.properties.field("battery_level").as_float()
    if level is None:
        return ctx.skip("batteryLevel is not a number", level=logging.WARNING)
    low = level <= ctx.settings.low_battery_threshold or level > ctx.settings.battery_max
    return ctx.update(StatusLowBattery.BATTERY_LEVEL_LOW if low else StatusLowBattery.BATTERY_LEVEL_NORMAL)


# ---- valves, irrigation, buttons ----

async def get_active(ctx: ConverterContext) -> ConversionOutcome:
    if ctx.properties.field("value").as_bool():
        return ctx.update(Active.ACTIVE)
    return ctx.update(Active.INACTIVE)


async def get_in_use(ctx: ConverterContext) -> ConversionOutcome:
    if ctx.properties.field("value").as_bool():
        return ctx.update(InUse.IN_USE)
    return ctx.update(InUse.NOT_IN_USE)


async def get_programmable_switch_event(ctx: ConverterContext) -> ConversionOutcome:
    # Event characteristic: only a press is reported, release is silent
    if ctx.properties.field("value").as_bool():
        return ctx.update(ProgrammableSwitchEvent.SINGLE_PRESS)
    return ctx.skip("button not pressed")


# ---- garage doors ----

def _door_state(ctx: ConverterContext, states: Mapping[str, int], undecided: int, fallback: int) -> int:
    state = ctx.properties.field("state").raw
    value = ctx.properties.field("value").as_int()
    logger.debug("%s: state=%r value=%r", ctx.kind.value, state, value)

    if state is None or state == UNKNOWN_STATE:
        if value == ctx.settings.door_closed_value:
            return CurrentDoorState.CLOSED
        if value == ctx.settings.door_open_value:
            return CurrentDoorState.OPEN
        return undecided
    return states.get(state, fallback)


async def get_current_door_state(ctx: ConverterContext) -> ConversionOutcome:
    return ctx.update(_door_state(ctx, CURRENT_DOOR_STATES, CurrentDoorState.STOPPED, CurrentDoorState.STOPPED))


async def get_target_door_state(ctx: ConverterContext) -> ConversionOutcome:
    # Target has no STOPPED, a door in between is assumed to be closing
    return ctx.update(_door_state(ctx, TARGET_DOOR_STATES, TargetDoorState.CLOSED, TargetDoorState.CLOSED))


# ---- security system ----

async def get_security_system_state(ctx: ConverterContext) -> ConversionOutcome:
    status = ctx.properties.field("value").raw
    value = lookup_security_state(ctx.kind, status)
    if value is None:
        return ctx.skip("no %s value for status %r", ctx.kind.value, status)
    return ctx.update(value)


# ---- thermostats ----

async def _zone_temperature(ctx: ConverterContext) -> Optional[ConversionOutcome]:
    """
    Temperature from a climate or heating zone panel.

    Returns None when the service is not a zone and the device value applies.
    """
    if not (ctx.service.is_climate_zone or ctx.service.is_heating_zone):
        return None
    if ctx.zones is None or ctx.zone_id is None:
        return ctx.skip("no zone client or zone id", level=logging.WARNING)

    try:
        if ctx.service.is_climate_zone:
            zone = await ctx.zones.get_climate_zone(ctx.zone_id)
            temperature = zone.properties.currentTemperatureHeating
        else:
            zone = await ctx.zones.get_heating_zone(ctx.zone_id)
            temperature = zone.properties.currentTemperature
    except HubClientError as e:
        return ctx.skip("There was a problem getting value from %s: %s", ctx.zone_id, e, level=logging.WARNING)

    if temperature is None:
        return ctx.skip("No value for Temperature in zone %s", ctx.zone_id, level=logging.WARNING)
    return ctx.update(temperature)


async def get_current_temperature(ctx: ConverterContext) -> ConversionOutcome:
    outcome = await _zone_temperature(ctx)
    if outcome is not None:
        return outcome
    value = ctx.properties.field("value")
    if not value.present:
        return ctx.skip("no value")
    return ctx.update(value.raw)


async def get_target_temperature(ctx: ConverterContext) -> ConversionOutcome:
    # Zones expose only one setpoint, the same reading serves as target
    return await get_current_temperature(ctx)


async def get_heating_cooling_state(ctx: ConverterContext) -> ConversionOutcome:
    """
    Current and target heating/cooling state.

    Climate zones report their mode; heating zones can only heat, so they
    always report HEAT. Plain thermostats are handled elsewhere.
    """
    if not ctx.service.is_climate_zone:
        if ctx.service.is_heating_zone:
            return ctx.update(TargetHeatingCoolingState.HEAT)
        return ctx.skip("not a climate or heating zone")
    if ctx.zones is None or ctx.zone_id is None:
        return ctx.skip("no zone client or zone id", level=logging.WARNING)

    try:
        zone = await ctx.zones.get_climate_zone(ctx.zone_id)
    except HubClientError as e:
        return ctx.skip("There was a problem getting value from %s: %s", ctx.zone_id, e, level=logging.WARNING)

    mode = zone.properties.mode
    if not mode:
        return ctx.skip("No value for heating cooling state in zone %s", ctx.zone_id, level=logging.WARNING)
    value = HEATING_COOLING_MODES.get(mode)
    if value is None:
        return ctx.skip("unsupported mode %r", mode)
    return ctx.update(value)


async def get_temperature_display_units(ctx: ConverterContext) -> ConversionOutcome:
    return ctx.update(TemperatureDisplayUnits.CELSIUS)
