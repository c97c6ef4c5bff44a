#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from .models import ClimateZone, HeatingZone

ZoneId = Union[int, str]


class HubClientError(Exception):
    """Zone could not be fetched or the hub answered with garbage."""


class ZoneClient(ABC):
    """
    Base interface for fetching zone state from the hub

    Client responsibilities:
      - get_climate_zone(id): current mode and setpoint of a climate zone
      - get_heating_zone(id): current temperature of a heating zone
      - close(): release transport resources

    Any failure must surface as HubClientError so callers handle one type.
    """

    @abstractmethod
    async def get_climate_zone(self, zone_id: ZoneId) -> ClimateZone:
        raise NotImplementedError

    @abstractmethod
    async def get_heating_zone(self, zone_id: ZoneId) -> HeatingZone:
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError
