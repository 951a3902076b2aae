"""Pure functions turning raw registry and weather fields into display values.

Every function is total. Missing values fall back to ``"Unknown"`` (or ``0.0``
for the numeric weather readings) and values that do not parse are handed back
untouched. Only ``None`` and the empty string count as missing, never zero.
"""
from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Optional

from .entities import Character, Conditions, Planet, RawCharacter, RawConditions, RawPlanet

UNKNOWN = "Unknown"
UNKNOWN_SENTINEL = "unknown"

# Both read the leading number and ignore whatever follows it.
_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_ONE_DECIMAL = Decimal("0.1")


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _parse_int(raw: str, *, grouped: bool = False) -> Optional[int]:
    text = raw.strip()
    if grouped:
        text = text.replace(",", "")
    match = _INT_RE.match(text)
    if not match:
        return None
    return int(match.group())


def _parse_float(raw: str, *, grouped: bool = False) -> Optional[float]:
    text = raw.strip()
    if grouped:
        text = text.replace(",", "")
    match = _FLOAT_RE.match(text)
    if not match:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value


def _format_float(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)


def _round_one_decimal(value: Any) -> float:
    if _is_missing(value) or isinstance(value, bool):
        return 0.0
    try:
        number = Decimal(str(value))
    except (ArithmeticError, ValueError):
        return 0.0
    if not number.is_finite():
        return 0.0
    return float(number.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


# Field normalizers -------------------------------------------------------
def normalize_text(value: Any) -> str:
    if _is_missing(value):
        return UNKNOWN
    return str(value)


def normalize_height(value: Any) -> str:
    if _is_missing(value) or value == UNKNOWN_SENTINEL:
        return UNKNOWN
    raw = str(value)
    height = _parse_int(raw)
    if height is None:
        return raw
    return f"{height} cm"


def normalize_mass(value: Any) -> str:
    if _is_missing(value) or value == UNKNOWN_SENTINEL:
        return UNKNOWN
    raw = str(value)
    mass = _parse_float(raw, grouped=True)
    if mass is None:
        return raw
    return f"{_format_float(mass)} kg"


def normalize_diameter(value: Any) -> str:
    if _is_missing(value) or value == UNKNOWN_SENTINEL:
        return UNKNOWN
    raw = str(value)
    diameter = _parse_int(raw, grouped=True)
    if diameter is None:
        return raw
    return f"{diameter:,} km"


def normalize_population(value: Any) -> str:
    if _is_missing(value) or value == UNKNOWN_SENTINEL:
        return UNKNOWN
    raw = str(value)
    population = _parse_int(raw, grouped=True)
    if population is None:
        return raw
    return f"{population:,}"


def normalize_temperature(value: Any) -> float:
    return _round_one_decimal(value)


def normalize_wind_speed(value: Any) -> float:
    return _round_one_decimal(value)


def normalize_humidity(value: Any) -> Optional[float]:
    if _is_missing(value) or isinstance(value, bool):
        return None
    try:
        humidity = float(value)
    except (TypeError, ValueError):
        return None
    return humidity if math.isfinite(humidity) else None


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def normalize_time(value: Any, now: Callable[[], str] = utcnow_iso) -> str:
    if _is_missing(value):
        return now()
    return str(value)


# Entity normalizers ------------------------------------------------------
def normalize_character(raw: RawCharacter) -> Character:
    return Character(
        name=normalize_text(raw.name),
        height=normalize_height(raw.height),
        mass=normalize_mass(raw.mass),
        birth_year=normalize_text(raw.birth_year),
        gender=normalize_text(raw.gender),
        homeworld=normalize_text(raw.homeworld),
        url="" if _is_missing(raw.url) else str(raw.url),
    )


def normalize_planet(raw: RawPlanet) -> Planet:
    return Planet(
        name=normalize_text(raw.name),
        diameter=normalize_diameter(raw.diameter),
        climate=normalize_text(raw.climate),
        terrain=normalize_text(raw.terrain),
        population=normalize_population(raw.population),
        url="" if _is_missing(raw.url) else str(raw.url),
    )


def normalize_conditions(raw: RawConditions, now: Callable[[], str] = utcnow_iso) -> Conditions:
    return Conditions(
        temperature=normalize_temperature(raw.temperature_2m),
        wind_speed=normalize_wind_speed(raw.wind_speed_10m),
        humidity=normalize_humidity(raw.relative_humidity_2m),
        time=normalize_time(raw.time, now=now),
    )


__all__ = [
    "UNKNOWN",
    "normalize_character",
    "normalize_conditions",
    "normalize_diameter",
    "normalize_height",
    "normalize_humidity",
    "normalize_mass",
    "normalize_planet",
    "normalize_population",
    "normalize_temperature",
    "normalize_text",
    "normalize_time",
    "normalize_wind_speed",
    "utcnow_iso",
]
