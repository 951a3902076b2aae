from __future__ import annotations

import logging
from typing import Optional

from .base import HttpSource, UpstreamError
from ..entities import RawConditions


CURRENT_FIELDS = ("temperature_2m", "wind_speed_10m", "relative_humidity_2m")


class OpenMeteoClient(HttpSource):
    base_url = "https://api.open-meteo.com/v1"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")
        self._log = logging.getLogger(self.__class__.__name__)

    def fetch_current(self, latitude: float, longitude: float) -> RawConditions:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "timezone": "auto",
        }
        data = self._get_json(f"{self.base_url}/forecast", params=params)
        current = data.get("current")
        if current is not None and not isinstance(current, dict):
            raise UpstreamError("malformed current block")
        return RawConditions.from_payload(data)


__all__ = ["CURRENT_FIELDS", "OpenMeteoClient"]
