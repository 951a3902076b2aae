from __future__ import annotations

import logging
import random
from typing import Optional

from .base import HttpSource
from ..entities import RawCharacter, RawPlanet


# SWAPI numbers its people from 1 to 83.
FIRST_CHARACTER_ID = 1
LAST_CHARACTER_ID = 83


class SwapiClient(HttpSource):
    """Character registry client for the Star Wars API."""

    base_url = "https://swapi.info/api"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")
        self._log = logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def fetch_by_id(self, character_id: int) -> RawCharacter:
        data = self._get_json(f"{self.base_url}/people/{character_id}")
        return RawCharacter.from_payload(data)

    def fetch_by_reference(self, reference: str) -> RawPlanet:
        data = self._get_json(reference)
        return RawPlanet.from_payload(data)

    def fetch_random(self) -> RawCharacter:
        character_id = random.randint(FIRST_CHARACTER_ID, LAST_CHARACTER_ID)
        self._log.debug("Picked random character %s", character_id)
        return self.fetch_by_id(character_id)


__all__ = ["FIRST_CHARACTER_ID", "LAST_CHARACTER_ID", "SwapiClient"]
