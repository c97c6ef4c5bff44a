#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

from . import getters
from .characteristics import HAP_IDENTITIES, CharacteristicHandle, CharacteristicKind
from .models import ConversionOutcome, ConverterContext, DeviceProperties, ServiceDescriptor
from ..downstream.base import ZoneClient
from ..lib.config_loader import ConverterSettings

logger = logging.getLogger(__name__)

Converter = Callable[[ConverterContext], Awaitable[ConversionOutcome]]

K = CharacteristicKind

# One getter per characteristic kind
CONVERTERS: Mapping[CharacteristicKind, Converter] = {
    K.ON: getters.get_bool,
    K.BRIGHTNESS: getters.get_brightness,
    K.POSITION_STATE: getters.get_position_state,
    K.CURRENT_POSITION: getters.get_current_position,
    K.TARGET_POSITION: getters.get_current_position,
    K.CURRENT_HORIZONTAL_TILT_ANGLE: getters.get_current_tilt_angle,
    K.TARGET_HORIZONTAL_TILT_ANGLE: getters.get_current_tilt_angle,
    K.MOTION_DETECTED: getters.get_bool,
    K.CURRENT_TEMPERATURE: getters.get_current_temperature,
    K.TARGET_TEMPERATURE: getters.get_target_temperature,
    K.CURRENT_RELATIVE_HUMIDITY: getters.get_float,
    K.CONTACT_SENSOR_STATE: getters.get_contact_sensor_state,
    K.LEAK_DETECTED: getters.get_leak_detected,
    K.SMOKE_DETECTED: getters.get_smoke_detected,
    K.CARBON_MONOXIDE_DETECTED: getters.get_carbon_monoxide_detected,
    K.CARBON_MONOXIDE_LEVEL: getters.get_carbon_monoxide_level,
    K.CARBON_MONOXIDE_PEAK_LEVEL: getters.get_carbon_monoxide_peak_level,
    K.CURRENT_AMBIENT_LIGHT_LEVEL: getters.get_float,
    K.OUTLET_IN_USE: getters.get_outlet_in_use,
    K.LOCK_CURRENT_STATE: getters.get_lock_state,
    K.LOCK_TARGET_STATE: getters.get_lock_state,
    K.CURRENT_HEATING_COOLING_STATE: getters.get_heating_cooling_state,
    K.TARGET_HEATING_COOLING_STATE: getters.get_heating_cooling_state,
    K.TEMPERATURE_DISPLAY_UNITS: getters.get_temperature_display_units,
    K.HUE: getters.get_hue,
    K.SATURATION: getters.get_saturation,
    K.CURRENT_DOOR_STATE: getters.get_current_door_state,
    K.TARGET_DOOR_STATE: getters.get_target_door_state,
    K.OBSTRUCTION_DETECTED: getters.get_obstruction_detected,
    K.BATTERY_LEVEL: getters.get_battery_level,
    K.CHARGING_STATE: getters.get_charging_state,
    K.STATUS_LOW_BATTERY: getters.get_status_low_battery,
    K.ACTIVE: getters.get_active,
    K.IN_USE: getters.get_in_use,
    K.PROGRAMMABLE_SWITCH_EVENT: getters.get_programmable_switch_event,
    K.SECURITY_SYSTEM_CURRENT_STATE: getters.get_security_system_state,
    K.SECURITY_SYSTEM_TARGET_STATE: getters.get_security_system_state,
}


@dataclass
class ConverterRegistry:
    """
    Resolves framework characteristic identities to getters.

    Output index:
      identities[uuid (upper case)] -> CharacteristicKind
      converters[CharacteristicKind] -> getter

    Example usage:

      registry = ConverterRegistry.from_identities(HAP_IDENTITIES, zones=hub_client)

      # Lookup only:
      getter = registry.by_identity("00000008-0000-1000-8000-0026BB765291")
      # getter is getters.get_brightness

      # Lookup and run:
      outcome = await registry.refresh(characteristic, service, ["42"], {"value": "99"})
      # outcome.updated is True, characteristic now holds 100
    """

    identities: Dict[str, CharacteristicKind]
    converters: Mapping[CharacteristicKind, Converter] = field(default_factory=lambda: dict(CONVERTERS))
    settings: ConverterSettings = field(default_factory=ConverterSettings)
    zones: Optional[ZoneClient] = None

    @classmethod
    def from_identities(
        cls,
        identities: Mapping[str, Any] = HAP_IDENTITIES,
        *,
        settings: Optional[ConverterSettings] = None,
        zones: Optional[ZoneClient] = None,
    ) -> "ConverterRegistry":
        """
        Build the registry from a translation table of framework identities.

        Input:
          identities: {uuid: CharacteristicKind or kind name}
            e.g. {"00000025-0000-1000-8000-0026BB765291": "On"}

        Raises ValueError for unknown kind names, kinds without a getter and
        for one identity mapped twice (case-insensitively) to different kinds.
        """
        index: Dict[str, CharacteristicKind] = {}
        for uuid, kind in identities.items():
            if not isinstance(kind, CharacteristicKind):
                try:
                    kind = CharacteristicKind(str(kind))
                except ValueError:
                    raise ValueError(f"Unknown characteristic kind {kind!r} for identity {uuid!r}") from None
            if kind not in CONVERTERS:
                raise ValueError(f"No getter registered for {kind.value}")

            key = str(uuid).upper()
            if key in index and index[key] is not kind:
                raise ValueError(f"Identity {uuid!r} mapped to both {index[key].value} and {kind.value}")
            index[key] = kind

        return cls(identities=index, settings=settings or ConverterSettings(), zones=zones)

    def kind_of(self, uuid: str) -> Optional[CharacteristicKind]:
        return self.identities.get(str(uuid).upper())

    def by_kind(self, kind: CharacteristicKind) -> Optional[Converter]:
        return self.converters.get(kind)

    def by_identity(self, uuid: str) -> Optional[Converter]:
        """Return the getter for a framework identity or None if not registered."""
        kind = self.kind_of(uuid)
        if kind is None:
            return None
        return self.by_kind(kind)

    def kinds(self) -> List[CharacteristicKind]:
        return sorted(set(self.identities.values()), key=lambda k: k.value)

    async def refresh(
        self,
        characteristic: CharacteristicHandle,
        service: ServiceDescriptor,
        device_ids: Optional[Sequence[str]] = None,
        properties: Any = None,
    ) -> ConversionOutcome:
        """
        Run the getter registered for the characteristic.

        properties may be a DeviceProperties or the raw dict from the hub.
        Never raises: failures are logged and reported as skipped outcomes.
        """
        kind = self.kind_of(characteristic.uuid)
        if kind is None:
            logger.warning("No getter for characteristic %s", characteristic.uuid)
            return ConversionOutcome.skipped(f"unregistered characteristic {characteristic.uuid}")

        converter = self.by_kind(kind)
        if converter is None:
            logger.warning("No getter for characteristic kind %s", kind.value)
            return ConversionOutcome.skipped(f"no getter for {kind.value}")

        ids = list(device_ids) if device_ids is not None else list(service.device_ids)
        try:
            if not isinstance(properties, DeviceProperties):
                properties = DeviceProperties.from_raw(properties)
            ctx = ConverterContext(
                kind=kind,
                characteristic=characteristic,
                service=service,
                device_ids=ids,
                properties=properties,
                settings=self.settings,
                zones=self.zones,
            )
            return await converter(ctx)
        except Exception as e:
            logger.exception("Getter for %s failed on devices %s", kind.value, ids)
            return ConversionOutcome.skipped(f"{kind.value} getter failed: {e!r}")
