#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Value helpers for hub -> HomeKit conversions
Handles lenient parsing, boolean coercion, percentage snapping and colors
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from ..lib.config_loader import ConverterSettings

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

TRUE_TOKENS = frozenset({"true", "on", "yes"})


def parse_float(raw: Any) -> Optional[float]:
    """
    Parse a hub value as float. None when absent, not numeric or NaN

    Examples:
        >>> parse_float("23.5")
        23.5
        >>> parse_float(7)
        7.0
        >>> parse_float("abc") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (ValueError, TypeError):
        return None
    if math.isnan(value):
        return None
    return value


def parse_int(raw: Any) -> Optional[int]:
    """
    Parse the leading integer of a hub value, like the hub's own firmware does

    Examples:
        >>> parse_int("55.7")
        55
        >>> parse_int(" 12abc")
        12
        >>> parse_int(99.9)
        99
        >>> parse_int("Opened") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        if math.isnan(raw) or math.isinf(raw):
            return None
        return int(raw)
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return None
    return int(match.group(1))


def convert_to_bool(raw_state: Any) -> bool:
    """
    Convert hub value to strict bool

    Numbers are true when non-zero. Strings starting with an integer follow the
    same rule, other strings are true only for "true", "on" and "yes" (case
    sensitive, as the hub sends them).

    Examples:
        >>> convert_to_bool("1")
        True
        >>> convert_to_bool("off")
        False
        >>> convert_to_bool(0)
        False
        >>> convert_to_bool("On")
        False
    """
    if isinstance(raw_state, bool):
        return raw_state
    if isinstance(raw_state, (int, float)):
        return raw_state != 0
    if isinstance(raw_state, str):
        number = parse_int(raw_state)
        if number is not None:
            return number != 0
        return raw_state in TRUE_TOKENS
    logger.debug("Unknown value type %s, set False", type(raw_state).__name__)
    return False


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def snap_percent(value: float, settings: ConverterSettings, snap_low: bool = True) -> float:
    """
    Replace near-boundary hub readings with the real boundary

    99 -> 100 always, 1 -> 0 only when snap_low is set (dimmers keep 1%).
    """
    if value == settings.snap_high_from:
        return settings.snap_high_to
    if snap_low and value == settings.snap_low_from:
        return settings.snap_low_to
    return value


def normalize_brightness(raw: Any, settings: ConverterSettings, snap: bool = True) -> Optional[float]:
    """
    Clamp a dimmer level to [0, 100] and snap 99 -> 100

    Returns None when raw is not a number; caller must skip the update then.
    Global variable dimmers pass snap=False.

    Examples:
        normalize_brightness("99", settings) -> 100
        normalize_brightness("99", settings, snap=False) -> 99.0
        normalize_brightness(150, settings) -> 100.0
    """
    value = parse_float(raw)
    if value is None:
        return None
    value = clamp(value, settings.percent_min, settings.percent_max)
    if snap:
        return snap_percent(value, settings, snap_low=False)
    return value


def normalize_position(raw: Optional[int], min_value: float, max_value: float, settings: ConverterSettings) -> float:
    """
    Snap a shutter position inside the characteristic bounds

    Out of bounds or non integer values fall back to min_value.

    Examples:
        normalize_position(99, 0, 100, settings) -> 100
        normalize_position(1, 0, 100, settings) -> 0
        normalize_position(120, 0, 100, settings) -> 0
        normalize_position(None, 0, 100, settings) -> 0
    """
    if raw is not None and min_value <= raw <= max_value:
        return snap_percent(raw, settings)
    return min_value


def scale(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """
    Linear rescale of value from [in_min, in_max] into [out_min, out_max]

    Shared with the write path, which runs the inverse conversion.

    Examples:
        >>> scale(50, 0, 100, -90, 90)
        0.0
        >>> scale(0, 0, 100, -90, 90)
        -90.0
    """
    if in_max == in_min:
        return float(out_min)
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def normalize_tilt(raw: Any, min_value: float, max_value: float, settings: ConverterSettings) -> float:
    """
    Convert a hub tilt percentage into the characteristic angle range

    Snaps 99/1 like positions, then rescales [0, 100] into [min_value, max_value].
    Unparseable or out of range percentages map to min_value.

    Examples:
        normalize_tilt("50", -90, 90, settings) -> 0.0
        normalize_tilt("99", -90, 90, settings) -> 90.0
        normalize_tilt(None, -90, 90, settings) -> -90.0
    """
    percent = parse_int(raw)
    if percent is None or not settings.percent_min <= percent <= settings.percent_max:
        percent = settings.percent_min
    else:
        percent = snap_percent(percent, settings)
    return scale(percent, settings.percent_min, settings.percent_max, min_value, max_value)


@dataclass(frozen=True)
class HSV:
    h: float  # degrees 0..360
    s: float  # percent 0..100
    v: float  # percent 0..100


def rgbw_to_hsv(r: float, g: float, b: float, w: float = 0) -> HSV:
    """
    Convert RGBW components (0-255) to hue/saturation/value

    Standard RGB -> HSV, except that V also takes the white channel into
    account: an RGBW lamp with only white lit is at full brightness.

    Examples:
        rgbw_to_hsv(255, 0, 0, 0) -> HSV(h=0.0, s=100.0, v=100.0)
        rgbw_to_hsv(0, 0, 0, 255) -> HSV(h=0.0, s=0.0, v=100.0)
    """
    mx = max(r, g, b)
    mn = min(r, g, b)
    d = mx - mn
    s = 0.0 if mx == 0 else d / mx
    v = max(mx, w) / 255.0

    if mx == mn:
        h = 0.0
    elif mx == r:
        h = ((g - b) + d * (6 if g < b else 0)) / (6 * d)
    elif mx == g:
        h = ((b - r) + d * 2) / (6 * d)
    else:
        h = ((r - g) + d * 4) / (6 * d)

    return HSV(h=h * 360.0, s=s * 100.0, v=v * 100.0)


def parse_rgbw(raw: Any) -> Optional[HSV]:
    """
    Parse hub color string "R,G,B,W" and convert it to HSV

    Returns None for missing or malformed strings.

    Examples:
        parse_rgbw("0,255,0,0") -> HSV(h=120.0, s=100.0, v=100.0)
        parse_rgbw("garbage") -> None
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    parts = raw.split(",")
    if len(parts) < 4:
        logger.warning("Color must be in 'R,G,B,W' format: %r", raw)
        return None
    channels = [parse_int(p) for p in parts[:4]]
    if any(ch is None for ch in channels):
        logger.warning("Color has non numeric channels: %r", raw)
        return None
    r, g, b, w = channels
    return rgbw_to_hsv(r, g, b, w)
