#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HomeKit characteristic catalog

Kinds, enumeration values and identities follow the HomeKit Accessory
Protocol. The bridge talks to the framework in UUIDs; everything below the
registry works with CharacteristicKind only.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional


class CharacteristicKind(Enum):
    ON = "On"
    BRIGHTNESS = "Brightness"
    POSITION_STATE = "PositionState"
    CURRENT_POSITION = "CurrentPosition"
    TARGET_POSITION = "TargetPosition"
    CURRENT_HORIZONTAL_TILT_ANGLE = "CurrentHorizontalTiltAngle"
    TARGET_HORIZONTAL_TILT_ANGLE = "TargetHorizontalTiltAngle"
    MOTION_DETECTED = "MotionDetected"
    CURRENT_TEMPERATURE = "CurrentTemperature"
    TARGET_TEMPERATURE = "TargetTemperature"
    CURRENT_RELATIVE_HUMIDITY = "CurrentRelativeHumidity"
    CONTACT_SENSOR_STATE = "ContactSensorState"
    LEAK_DETECTED = "LeakDetected"
    SMOKE_DETECTED = "SmokeDetected"
    CARBON_MONOXIDE_DETECTED = "CarbonMonoxideDetected"
    CARBON_MONOXIDE_LEVEL = "CarbonMonoxideLevel"
    CARBON_MONOXIDE_PEAK_LEVEL = "CarbonMonoxidePeakLevel"
    CURRENT_AMBIENT_LIGHT_LEVEL = "CurrentAmbientLightLevel"
    OUTLET_IN_USE = "OutletInUse"
    LOCK_CURRENT_STATE = "LockCurrentState"
    LOCK_TARGET_STATE = "LockTargetState"
    CURRENT_HEATING_COOLING_STATE = "CurrentHeatingCoolingState"
    TARGET_HEATING_COOLING_STATE = "TargetHeatingCoolingState"
    TEMPERATURE_DISPLAY_UNITS = "TemperatureDisplayUnits"
    HUE = "Hue"
    SATURATION = "Saturation"
    CURRENT_DOOR_STATE = "CurrentDoorState"
    TARGET_DOOR_STATE = "TargetDoorState"
    OBSTRUCTION_DETECTED = "ObstructionDetected"
    BATTERY_LEVEL = "BatteryLevel"
    CHARGING_STATE = "ChargingState"
    STATUS_LOW_BATTERY = "StatusLowBattery"
    ACTIVE = "Active"
    IN_USE = "InUse"
    PROGRAMMABLE_SWITCH_EVENT = "ProgrammableSwitchEvent"
    SECURITY_SYSTEM_CURRENT_STATE = "SecuritySystemCurrentState"
    SECURITY_SYSTEM_TARGET_STATE = "SecuritySystemTargetState"


# ---- enumeration values ----

class PositionState(IntEnum):
    DECREASING = 0
    INCREASING = 1
    STOPPED = 2


class ContactSensorState(IntEnum):
    CONTACT_DETECTED = 0
    CONTACT_NOT_DETECTED = 1


class LeakDetected(IntEnum):
    LEAK_NOT_DETECTED = 0
    LEAK_DETECTED = 1


class SmokeDetected(IntEnum):
    SMOKE_NOT_DETECTED = 0
    SMOKE_DETECTED = 1


class CarbonMonoxideDetected(IntEnum):
    CO_LEVELS_NORMAL = 0
    CO_LEVELS_ABNORMAL = 1


class LockCurrentState(IntEnum):
    UNSECURED = 0
    SECURED = 1
    JAMMED = 2
    UNKNOWN = 3


class LockTargetState(IntEnum):
    UNSECURED = 0
    SECURED = 1


class CurrentHeatingCoolingState(IntEnum):
    OFF = 0
    HEAT = 1
    COOL = 2


class TargetHeatingCoolingState(IntEnum):
    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


class TemperatureDisplayUnits(IntEnum):
    CELSIUS = 0
    FAHRENHEIT = 1


class CurrentDoorState(IntEnum):
    OPEN = 0
    CLOSED = 1
    OPENING = 2
    CLOSING = 3
    STOPPED = 4


class TargetDoorState(IntEnum):
    OPEN = 0
    CLOSED = 1


class ChargingState(IntEnum):
    NOT_CHARGING = 0
    CHARGING = 1
    NOT_CHARGEABLE = 2


class StatusLowBattery(IntEnum):
    BATTERY_LEVEL_NORMAL = 0
    BATTERY_LEVEL_LOW = 1


class Active(IntEnum):
    INACTIVE = 0
    ACTIVE = 1


class InUse(IntEnum):
    NOT_IN_USE = 0
    IN_USE = 1


class ProgrammableSwitchEvent(IntEnum):
    SINGLE_PRESS = 0
    DOUBLE_PRESS = 1
    LONG_PRESS = 2


class SecuritySystemCurrentState(IntEnum):
    STAY_ARM = 0
    AWAY_ARM = 1
    NIGHT_ARM = 2
    DISARMED = 3
    ALARM_TRIGGERED = 4


class SecuritySystemTargetState(IntEnum):
    STAY_ARM = 0
    AWAY_ARM = 1
    NIGHT_ARM = 2
    DISARM = 3


# ---- framework identities ----

HAP_BASE_UUID = "-0000-1000-8000-0026BB765291"


def hap_uuid(short_id: int) -> str:
    """
    Expand a short HomeKit type id into the full UUID string

    Example:
        hap_uuid(0x25) -> "00000025-0000-1000-8000-0026BB765291"
    """
    return f"{short_id:08X}{HAP_BASE_UUID}"


HAP_IDENTITIES: Dict[str, CharacteristicKind] = {
    hap_uuid(0x25): CharacteristicKind.ON,
    hap_uuid(0x08): CharacteristicKind.BRIGHTNESS,
    hap_uuid(0x72): CharacteristicKind.POSITION_STATE,
    hap_uuid(0x6D): CharacteristicKind.CURRENT_POSITION,
    hap_uuid(0x7C): CharacteristicKind.TARGET_POSITION,
    hap_uuid(0x6C): CharacteristicKind.CURRENT_HORIZONTAL_TILT_ANGLE,
    hap_uuid(0x7B): CharacteristicKind.TARGET_HORIZONTAL_TILT_ANGLE,
    hap_uuid(0x22): CharacteristicKind.MOTION_DETECTED,
    hap_uuid(0x11): CharacteristicKind.CURRENT_TEMPERATURE,
    hap_uuid(0x35): CharacteristicKind.TARGET_TEMPERATURE,
    hap_uuid(0x10): CharacteristicKind.CURRENT_RELATIVE_HUMIDITY,
    hap_uuid(0x6A): CharacteristicKind.CONTACT_SENSOR_STATE,
    hap_uuid(0x70): CharacteristicKind.LEAK_DETECTED,
    hap_uuid(0x76): CharacteristicKind.SMOKE_DETECTED,
    hap_uuid(0x69): CharacteristicKind.CARBON_MONOXIDE_DETECTED,
    hap_uuid(0x90): CharacteristicKind.CARBON_MONOXIDE_LEVEL,
    hap_uuid(0x91): CharacteristicKind.CARBON_MONOXIDE_PEAK_LEVEL,
    hap_uuid(0x6B): CharacteristicKind.CURRENT_AMBIENT_LIGHT_LEVEL,
    hap_uuid(0x26): CharacteristicKind.OUTLET_IN_USE,
    hap_uuid(0x1D): CharacteristicKind.LOCK_CURRENT_STATE,
    hap_uuid(0x1E): CharacteristicKind.LOCK_TARGET_STATE,
    hap_uuid(0x0F): CharacteristicKind.CURRENT_HEATING_COOLING_STATE,
    hap_uuid(0x33): CharacteristicKind.TARGET_HEATING_COOLING_STATE,
    hap_uuid(0x36): CharacteristicKind.TEMPERATURE_DISPLAY_UNITS,
    hap_uuid(0x13): CharacteristicKind.HUE,
    hap_uuid(0x2F): CharacteristicKind.SATURATION,
    hap_uuid(0x0E): CharacteristicKind.CURRENT_DOOR_STATE,
    hap_uuid(0x32): CharacteristicKind.TARGET_DOOR_STATE,
    hap_uuid(0x24): CharacteristicKind.OBSTRUCTION_DETECTED,
    hap_uuid(0x68): CharacteristicKind.BATTERY_LEVEL,
    hap_uuid(0x8F): CharacteristicKind.CHARGING_STATE,
    hap_uuid(0x79): CharacteristicKind.STATUS_LOW_BATTERY,
    hap_uuid(0xB0): CharacteristicKind.ACTIVE,
    hap_uuid(0xD2): CharacteristicKind.IN_USE,
    hap_uuid(0x73): CharacteristicKind.PROGRAMMABLE_SWITCH_EVENT,
    hap_uuid(0x66): CharacteristicKind.SECURITY_SYSTEM_CURRENT_STATE,
    hap_uuid(0x67): CharacteristicKind.SECURITY_SYSTEM_TARGET_STATE,
}


def identity_for(kind: CharacteristicKind) -> str:
    """Reverse lookup of HAP_IDENTITIES, used by tools that start from a kind."""
    for uuid, k in HAP_IDENTITIES.items():
        if k is kind:
            return uuid
    raise KeyError(kind)


# ---- characteristic handle ----

@dataclass(frozen=True)
class CharacteristicProps:
    min_value: Optional[float] = None
    max_value: Optional[float] = None


class CharacteristicHandle(ABC):
    """
    Value cell owned by the accessory framework.

    Converters only call update_value() and read props; they never create or
    destroy handles.
    """

    @property
    @abstractmethod
    def uuid(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def props(self) -> CharacteristicProps:
        raise NotImplementedError

    @abstractmethod
    def update_value(self, value: Any) -> None:
        raise NotImplementedError


class Characteristic(CharacteristicHandle):
    """
    In-memory handle. Keeps the last written value and the write count.

    Example:
        ch = Characteristic(hap_uuid(0x08), CharacteristicProps(0, 100))
        ch.update_value(42)
        ch.value -> 42
    """

    def __init__(self, uuid: str, props: Optional[CharacteristicProps] = None, value: Any = None) -> None:
        self._uuid = uuid
        self._props = props or CharacteristicProps()
        self.value = value
        self.updates = 0

    @property
    def uuid(self) -> str:
        return self._uuid

    @property
    def props(self) -> CharacteristicProps:
        return self._props

    def update_value(self, value: Any) -> None:
        self.value = value
        self.updates += 1

    def __repr__(self) -> str:
        return f"Characteristic({self._uuid!r}, value={self.value!r})"
