#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..base import HubClientError, ZoneClient, ZoneId
from ..models import ClimateZone, HeatingZone
from ...lib.config_loader import HubConfig
from ...lib.constants import CLIMATE_ZONE_PATH, HEATING_ZONE_PATH


logger = logging.getLogger(__name__)

_Model = TypeVar("_Model", bound=BaseModel)


class FibaroHttpClient(ZoneClient):
    """
    Zone client over the hub REST API

    Notes:
      - In tests we inject an httpx.AsyncClient with MockTransport via `client=...`
      - In production the client is created from HubConfig
    """

    def __init__(self, *, cfg: HubConfig, client: Optional[httpx.AsyncClient] = None) -> None:
        self._cfg = cfg
        if client is None:
            auth = None
            if cfg.username:
                auth = httpx.BasicAuth(cfg.username, cfg.password or "")
            client = httpx.AsyncClient(
                base_url=cfg.url,
                auth=auth,
                timeout=cfg.timeout,
                verify=cfg.verify_ssl,
            )
        self._client = client

    async def get_climate_zone(self, zone_id: ZoneId) -> ClimateZone:
        return await self._get(CLIMATE_ZONE_PATH.format(zone_id=zone_id), ClimateZone)

    async def get_heating_zone(self, zone_id: ZoneId) -> HeatingZone:
        return await self._get(HEATING_ZONE_PATH.format(zone_id=zone_id), HeatingZone)

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except Exception:
            logger.exception("Hub client close failed")

    async def _get(self, path: str, model: Type[_Model]) -> _Model:
        logger.debug("Hub GET %s", path)
        try:
            r = await self._client.get(path)
            r.raise_for_status()
            data: Any = r.json()
        except httpx.HTTPStatusError as e:
            raise HubClientError(f"Hub answered {e.response.status_code} for {path}") from e
        except httpx.HTTPError as e:
            raise HubClientError(f"Hub request {path} failed: {e!r}") from e
        except ValueError as e:
            raise HubClientError(f"Hub returned invalid JSON for {path}") from e

        if not isinstance(data, dict):
            raise HubClientError(f"Hub expects JSON object (dict) for {path}, got {type(data).__name__}")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise HubClientError(f"Unexpected payload for {path}: {e}") from e
