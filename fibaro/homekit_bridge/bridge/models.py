#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .characteristics import CharacteristicHandle, CharacteristicKind
from .values import convert_to_bool, parse_float, parse_int
from ..downstream.base import ZoneClient
from ..lib.config_loader import ConverterSettings
from ..lib.constants import START_STOP_ACTIVITY_SWITCH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceDescriptor:
    """
    Device or zone behind a characteristic, as seen by converters.

    Fields:
      - device_ids: hub ids backing the service (zone id for zones)
      - is_climate_zone / is_heating_zone: state lives in a zone panel, fetch it
      - is_global_variable_dimmer: virtual dimmer backed by a hub variable
      - is_lock_switch: a switch wired as lock, "on" means unlocked

    Example (output):
        ServiceDescriptor(device_ids=["12"], is_climate_zone=True)
    """

    device_ids: List[str] = field(default_factory=list)
    is_climate_zone: bool = False
    is_heating_zone: bool = False
    is_global_variable_dimmer: bool = False
    is_lock_switch: bool = False


@dataclass(frozen=True)
class PropertyField:
    """
    One probed property with explicit presence.

    Example:
        props.field("battery_level") -> PropertyField(name="battery_level", present=True, raw="87")
        props.field("battery_level").as_float() -> 87.0
    """

    name: str
    present: bool
    raw: Any = None

    def as_float(self) -> Optional[float]:
        return parse_float(self.raw) if self.present else None

    def as_int(self) -> Optional[int]:
        return parse_int(self.raw) if self.present else None

    def as_bool(self) -> bool:
        return convert_to_bool(self.raw) if self.present else False


class DeviceProperties(BaseModel):
    """
    Property bag of a hub device.

    Values are kept raw (string, number or None); no field is required
    because the shape depends on the device class. Unknown keys are kept
    as extras.

    Example (input JSON, fragment):
        {"value": "99", "batteryLevel": 87, "ui.startStopActivitySwitch.value": true}
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    value: Any = None
    value2: Any = None
    state: Any = None
    power: Any = None
    color: Any = None
    concentration: Any = None
    battery_level: Any = Field(default=None, alias="batteryLevel")
    max_concentration: Any = Field(default=None, alias="maxConcentration")
    start_stop_activity: Any = Field(default=None, alias=START_STOP_ACTIVITY_SWITCH)

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "DeviceProperties":
        return cls.model_validate(dict(raw or {}))

    def field(self, name: str) -> PropertyField:
        """
        Probe a property by python name, alias or extra key.

        A field set to None counts as absent.
        """
        raw = None
        if name in type(self).model_fields:
            raw = getattr(self, name)
        else:
            for attr, info in type(self).model_fields.items():
                if info.alias == name:
                    raw = getattr(self, attr)
                    break
            else:
                raw = (self.model_extra or {}).get(name)
        return PropertyField(name=name, present=raw is not None, raw=raw)

    def reported(self, name: str) -> bool:
        """True when the hub sent the key at all, even with a null value."""
        for attr, info in type(self).model_fields.items():
            if name in (attr, info.alias):
                return attr in self.model_fields_set
        return name in (self.model_extra or {})


@dataclass(frozen=True)
class ConversionOutcome:
    """
    Result of one converter invocation.

    updated=False means the characteristic was left untouched; reason tells why.
    """

    updated: bool
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def written(cls, value: Any) -> "ConversionOutcome":
        return cls(updated=True, value=value)

    @classmethod
    def skipped(cls, reason: str) -> "ConversionOutcome":
        return cls(updated=False, reason=reason)


@dataclass
class ConverterContext:
    """Everything a converter may look at for one refresh."""

    kind: CharacteristicKind
    characteristic: CharacteristicHandle
    service: ServiceDescriptor
    device_ids: List[str]
    properties: DeviceProperties
    settings: ConverterSettings = field(default_factory=ConverterSettings)
    zones: Optional[ZoneClient] = None

    @property
    def zone_id(self) -> Optional[str]:
        ids = self.device_ids or self.service.device_ids
        return ids[0] if ids else None

    def update(self, value: Any) -> ConversionOutcome:
        self.characteristic.update_value(value)
        return ConversionOutcome.written(value)

    def skip(self, reason: str, *args: Any, level: int = logging.DEBUG) -> ConversionOutcome:
        message = reason % args if args else reason
        logger.log(level, "%s: %s", self.kind.value, message)
        return ConversionOutcome.skipped(message)
