from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional
from uuid import uuid4

from ..cache import FusionCache
from ..coordinates import Coordinates, resolve
from ..entities import FusedRecord, RawCharacter
from ..normalizer import (
    normalize_character,
    normalize_conditions,
    normalize_planet,
    utcnow_iso,
)
from ..providers.base import UpstreamError


class FusionStage(str, Enum):
    CACHE_CHECK = "cache_check"
    HIT = "hit"
    FETCH_CHARACTER = "fetch_character"
    FETCH_PLANET = "fetch_planet"
    RESOLVE_COORDS = "resolve_coords"
    FETCH_CONDITIONS = "fetch_conditions"
    NORMALIZE = "normalize"
    CACHE_WRITE = "cache_write"
    DONE = "done"
    FAILED = "failed"


class FusionError(RuntimeError):
    """Raised when a fusion cannot be completed.

    ``stage`` names the pipeline step that failed and the original exception is
    kept as ``__cause__``.
    """

    def __init__(self, message: str, *, stage: FusionStage) -> None:
        super().__init__(message)
        self.stage = stage


class FusionService:
    """Fuse a random character, its homeworld and the weather there.

    The result is cached under a key scoped to the local calendar day. The
    cache entry lives for ``CACHE_TTL_MINUTES`` only, so a call made later on
    the same day after the entry expired fuses a new random character and
    replaces the day's entry.
    """

    CACHE_PREFIX = "fusion"
    CACHE_TTL_MINUTES = 30

    def __init__(
        self,
        *,
        registry: Any,
        conditions: Any,
        cache: Optional[FusionCache] = None,
        resolver: Callable[[str], Coordinates] = resolve,
        ttl_minutes: Optional[float] = None,
        today: Callable[[], date] = date.today,
        now: Callable[[], str] = utcnow_iso,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.conditions = conditions
        self.cache = cache or FusionCache()
        self.resolver = resolver
        self.ttl_minutes = self.CACHE_TTL_MINUTES if ttl_minutes is None else ttl_minutes
        self._today = today
        self._now = now
        self._id_factory = id_factory
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def fuse_star_wars_with_weather(self) -> FusedRecord:
        cache_key = self.cache_key()
        cached = self._read_cache(cache_key)
        if cached is not None:
            self._log.info("Returning cached fusion %s", cached.id)
            return cached

        stage = FusionStage.FETCH_CHARACTER
        try:
            raw_character = self.registry.fetch_random()

            stage = FusionStage.FETCH_PLANET
            raw_planet = self.registry.fetch_by_reference(self._homeworld_of(raw_character))

            stage = FusionStage.RESOLVE_COORDS
            latitude, longitude = self.resolver(str(raw_planet.name or ""))

            stage = FusionStage.FETCH_CONDITIONS
            raw_conditions = self.conditions.fetch_current(latitude, longitude)

            stage = FusionStage.NORMALIZE
            record = FusedRecord(
                id=self._id_factory(),
                character=normalize_character(raw_character),
                planet=normalize_planet(raw_planet),
                weather=normalize_conditions(raw_conditions, now=self._now),
                fused_at=self._now(),
            )

            stage = FusionStage.CACHE_WRITE
            self.cache.set(cache_key, record.as_dict(), self.ttl_minutes)
        except Exception as exc:  # noqa: BLE001 - every failure surfaces as FusionError
            self._log.error("Fusion failed during %s: %s", stage.value, exc)
            raise FusionError(f"Failed to fuse data during {stage.value}: {exc}", stage=stage) from exc

        self._log.info(
            "Fused %s from %s at (%s, %s)",
            record.character.name,
            record.planet.name,
            latitude,
            longitude,
        )
        return record

    def cache_key(self) -> str:
        return self.cache.generate_key(self.CACHE_PREFIX, "random", self._today().isoformat())

    # Helpers ------------------------------------------------------------
    def _read_cache(self, cache_key: str) -> Optional[FusedRecord]:
        payload = self.cache.get(cache_key)
        if payload is None:
            return None
        try:
            return FusedRecord.from_dict(payload)
        except (KeyError, TypeError) as exc:
            self._log.warning("Ignoring malformed cache entry %s: %s", cache_key, exc)
            return None

    def _homeworld_of(self, character: RawCharacter) -> str:
        if not character.homeworld:
            raise UpstreamError(f"character {character.name!r} has no homeworld reference")
        return str(character.homeworld)


__all__ = ["FusionError", "FusionService", "FusionStage"]
