from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional


# Raw upstream payloads ---------------------------------------------------
@dataclass(frozen=True)
class RawCharacter:
    """Character fields exactly as the registry returned them."""

    name: Optional[Any] = None
    height: Optional[Any] = None
    mass: Optional[Any] = None
    birth_year: Optional[Any] = None
    gender: Optional[Any] = None
    homeworld: Optional[Any] = None
    url: Optional[Any] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawCharacter":
        return cls(
            name=payload.get("name"),
            height=payload.get("height"),
            mass=payload.get("mass"),
            birth_year=payload.get("birth_year"),
            gender=payload.get("gender"),
            homeworld=payload.get("homeworld"),
            url=payload.get("url"),
        )


@dataclass(frozen=True)
class RawPlanet:
    """Planet fields exactly as the registry returned them."""

    name: Optional[Any] = None
    diameter: Optional[Any] = None
    climate: Optional[Any] = None
    terrain: Optional[Any] = None
    population: Optional[Any] = None
    url: Optional[Any] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawPlanet":
        return cls(
            name=payload.get("name"),
            diameter=payload.get("diameter"),
            climate=payload.get("climate"),
            terrain=payload.get("terrain"),
            population=payload.get("population"),
            url=payload.get("url"),
        )


@dataclass(frozen=True)
class RawConditions:
    """The ``current`` block of an Open-Meteo forecast response."""

    temperature_2m: Optional[Any] = None
    wind_speed_10m: Optional[Any] = None
    relative_humidity_2m: Optional[Any] = None
    time: Optional[Any] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawConditions":
        current = payload.get("current") or {}
        return cls(
            temperature_2m=current.get("temperature_2m"),
            wind_speed_10m=current.get("wind_speed_10m"),
            relative_humidity_2m=current.get("relative_humidity_2m"),
            time=current.get("time"),
        )


# Canonical entities ------------------------------------------------------
@dataclass(frozen=True)
class Character:
    name: str
    height: str
    mass: str
    birth_year: str
    gender: str
    homeworld: str
    url: str


@dataclass(frozen=True)
class Planet:
    name: str
    diameter: str
    climate: str
    terrain: str
    population: str
    url: str


@dataclass(frozen=True)
class Conditions:
    """Current conditions at the coordinates mapped to a planet.

    Temperature is in Celsius and wind speed in km/h, both rounded to one
    decimal place. Humidity is a percentage and may be missing.
    """

    temperature: float
    wind_speed: float
    humidity: Optional[float]
    time: str


@dataclass(frozen=True)
class FusedRecord:
    """A character, its homeworld and the weather there, fused once."""

    id: str
    character: Character
    planet: Planet
    weather: Conditions
    fused_at: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FusedRecord":
        return cls(
            id=payload["id"],
            character=Character(**payload["character"]),
            planet=Planet(**payload["planet"]),
            weather=Conditions(**payload["weather"]),
            fused_at=payload["fused_at"],
        )


@dataclass(frozen=True)
class CustomRecord:
    id: str
    title: str
    description: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HistoryRecord:
    id: str
    type: str
    data: Dict[str, Any]
    timestamp: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "Character",
    "Conditions",
    "CustomRecord",
    "FusedRecord",
    "HistoryRecord",
    "Planet",
    "RawCharacter",
    "RawConditions",
    "RawPlanet",
]
