from __future__ import annotations

import pytest

from fusion.entities import RawCharacter, RawConditions, RawPlanet
from fusion.normalizer import (
    normalize_character,
    normalize_conditions,
    normalize_diameter,
    normalize_height,
    normalize_humidity,
    normalize_mass,
    normalize_planet,
    normalize_population,
    normalize_temperature,
    normalize_time,
    normalize_wind_speed,
)


@pytest.mark.parametrize(
    "func", [normalize_height, normalize_mass, normalize_diameter, normalize_population]
)
@pytest.mark.parametrize("value", [None, "", "unknown"])
def test_missing_measurements_become_unknown(func, value):
    assert func(value) == "Unknown"


@pytest.mark.parametrize(
    "func", [normalize_height, normalize_mass, normalize_diameter, normalize_population]
)
@pytest.mark.parametrize("value", ["n/a", "indefinite", "Unknown", "none yet", ".x"])
def test_unparseable_measurements_pass_through(func, value):
    assert func(value) == value


def test_height_and_mass_units():
    assert normalize_height("172") == "172 cm"
    assert normalize_mass("77") == "77 kg"
    assert normalize_mass("78.2") == "78.2 kg"
    assert normalize_mass("1,358") == "1358 kg"


def test_measurements_read_the_leading_number():
    assert normalize_height("172.5") == "172 cm"
    assert normalize_height("12abc") == "12 cm"
    assert normalize_height(" 96 ") == "96 cm"
    assert normalize_mass("12abc") == "12 kg"
    assert normalize_mass("78.2kg") == "78.2 kg"
    assert normalize_diameter("12500 (approx)") == "12,500 km"
    assert normalize_population("1,000,000 or so") == "1,000,000"


def test_diameter_and_population_grouping():
    assert normalize_diameter("10465") == "10,465 km"
    assert normalize_diameter("118,000") == "118,000 km"
    assert normalize_population("200000") == "200,000"
    assert normalize_population("1000000000000") == "1,000,000,000,000"


def test_zero_is_not_missing():
    assert normalize_height("0") == "0 cm"
    assert normalize_diameter("0") == "0 km"
    assert normalize_population(0) == "0"
    assert normalize_temperature(0) == 0.0


@pytest.mark.parametrize(
    "value, expected",
    [
        (25.54, 25.5),
        (10.21, 10.2),
        (25.55, 25.6),
        (-2.25, -2.3),
        (-0.04, -0.0),
        (7, 7.0),
        (None, 0.0),
    ],
)
def test_weather_readings_round_to_one_decimal(value, expected):
    assert normalize_temperature(value) == expected
    assert normalize_wind_speed(value) == expected


def test_weather_readings_reject_garbage():
    assert normalize_temperature("warm") == 0.0
    assert normalize_wind_speed(float("nan")) == 0.0


def test_humidity_is_optional():
    assert normalize_humidity(None) is None
    assert normalize_humidity(0) == 0.0
    assert normalize_humidity("45") == 45.0


def test_time_passes_through_or_defaults_to_now():
    assert normalize_time("2024-01-01T12:00") == "2024-01-01T12:00"
    assert normalize_time(None, now=lambda: "2024-05-04T00:00:00Z") == "2024-05-04T00:00:00Z"
    assert normalize_time("").endswith("Z")


def test_normalize_character_fills_fallbacks():
    character = normalize_character(RawCharacter(name="R2-D2", height="96", mass="32"))

    assert character.name == "R2-D2"
    assert character.height == "96 cm"
    assert character.mass == "32 kg"
    assert character.birth_year == "Unknown"
    assert character.gender == "Unknown"
    assert character.homeworld == "Unknown"
    assert character.url == ""


def test_normalize_planet_and_conditions():
    planet = normalize_planet(
        RawPlanet(name="Hoth", diameter="7200", climate="frozen", terrain="tundra", population="unknown")
    )
    conditions = normalize_conditions(
        RawConditions(temperature_2m=-12.34, wind_speed_10m=None, relative_humidity_2m=80),
        now=lambda: "2024-01-01T00:00:00Z",
    )

    assert planet.diameter == "7,200 km"
    assert planet.population == "Unknown"
    assert conditions.temperature == -12.3
    assert conditions.wind_speed == 0.0
    assert conditions.humidity == 80.0
    assert conditions.time == "2024-01-01T00:00:00Z"
