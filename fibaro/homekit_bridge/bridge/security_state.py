#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .characteristics import (
    CharacteristicKind,
    SecuritySystemCurrentState,
    SecuritySystemTargetState,
)

# Hub alarm partition status -> HomeKit value.
# Target table has no AlarmTriggered: a user cannot ask for an alarm.
CURRENT_SECURITY_SYSTEM_STATE: Mapping[str, SecuritySystemCurrentState] = {
    "AwayArmed": SecuritySystemCurrentState.AWAY_ARM,
    "Disarmed": SecuritySystemCurrentState.DISARMED,
    "NightArmed": SecuritySystemCurrentState.NIGHT_ARM,
    "StayArmed": SecuritySystemCurrentState.STAY_ARM,
    "AlarmTriggered": SecuritySystemCurrentState.ALARM_TRIGGERED,
}

TARGET_SECURITY_SYSTEM_STATE: Mapping[str, SecuritySystemTargetState] = {
    "AwayArmed": SecuritySystemTargetState.AWAY_ARM,
    "Disarmed": SecuritySystemTargetState.DISARM,
    "NightArmed": SecuritySystemTargetState.NIGHT_ARM,
    "StayArmed": SecuritySystemTargetState.STAY_ARM,
}

_TABLES: Dict[CharacteristicKind, Mapping[str, int]] = {
    CharacteristicKind.SECURITY_SYSTEM_CURRENT_STATE: CURRENT_SECURITY_SYSTEM_STATE,
    CharacteristicKind.SECURITY_SYSTEM_TARGET_STATE: TARGET_SECURITY_SYSTEM_STATE,
}


def lookup_security_state(kind: CharacteristicKind, status: object) -> Optional[int]:
    """
    Map hub status string to the value of the given security characteristic.

    None for unknown statuses and for kinds other than the two security ones.

    Examples:
        lookup_security_state(CharacteristicKind.SECURITY_SYSTEM_CURRENT_STATE, "AlarmTriggered")
          -> SecuritySystemCurrentState.ALARM_TRIGGERED
        lookup_security_state(CharacteristicKind.SECURITY_SYSTEM_TARGET_STATE, "AlarmTriggered")
          -> None
    """
    table = _TABLES.get(kind)
    if table is None or not isinstance(status, str):
        return None
    return table.get(status)
