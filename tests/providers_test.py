from __future__ import annotations

import pytest
import requests

from fusion.providers.base import RequestConfig, UpstreamError
from fusion.providers.openmeteo import OpenMeteoClient
from fusion.providers.swapi import FIRST_CHARACTER_ID, LAST_CHARACTER_ID, SwapiClient


LUKE = {
    "name": "Luke Skywalker",
    "height": "172",
    "mass": "77",
    "birth_year": "19BBY",
    "gender": "male",
    "homeworld": "https://swapi.test/api/planets/1",
    "url": "https://swapi.test/api/people/1",
}


def test_swapi_fetch_by_id_returns_raw_fields(requests_mock):
    client = SwapiClient(base_url="https://swapi.test/api/")
    requests_mock.get("https://swapi.test/api/people/1", json=LUKE)

    character = client.fetch_by_id(1)

    assert character.name == "Luke Skywalker"
    assert character.height == "172"
    assert character.homeworld == "https://swapi.test/api/planets/1"


def test_swapi_fetch_by_reference(requests_mock):
    client = SwapiClient(base_url="https://swapi.test/api")
    requests_mock.get(
        "https://swapi.test/api/planets/1",
        json={"name": "Tatooine", "diameter": "10465", "population": "200000"},
    )

    planet = client.fetch_by_reference("https://swapi.test/api/planets/1")

    assert planet.name == "Tatooine"
    assert planet.climate is None


def test_swapi_fetch_random_stays_in_range(requests_mock, monkeypatch):
    picked = []

    def fake_randint(low, high):
        picked.append((low, high))
        return 42

    monkeypatch.setattr("fusion.providers.swapi.random.randint", fake_randint)
    client = SwapiClient(base_url="https://swapi.test/api")
    requests_mock.get("https://swapi.test/api/people/42", json={"name": "Quarsh Panaka"})

    character = client.fetch_random()

    assert picked == [(FIRST_CHARACTER_ID, LAST_CHARACTER_ID)]
    assert character.name == "Quarsh Panaka"


@pytest.mark.parametrize("status_code", [404, 500, 503])
def test_swapi_http_errors_raise_upstream_error(requests_mock, status_code):
    client = SwapiClient(base_url="https://swapi.test/api")
    requests_mock.get("https://swapi.test/api/people/1", status_code=status_code, text="nope")

    with pytest.raises(UpstreamError):
        client.fetch_by_id(1)


def test_swapi_timeout_raises_upstream_error(requests_mock):
    client = SwapiClient(base_url="https://swapi.test/api", request_config=RequestConfig(timeout=0.1))
    requests_mock.get("https://swapi.test/api/people/1", exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(UpstreamError) as excinfo:
        client.fetch_by_id(1)

    assert isinstance(excinfo.value.__cause__, requests.Timeout)


def test_swapi_invalid_json_raises_upstream_error(requests_mock):
    client = SwapiClient(base_url="https://swapi.test/api")
    requests_mock.get("https://swapi.test/api/people/1", text="<html>")

    with pytest.raises(UpstreamError):
        client.fetch_by_id(1)


def test_openmeteo_current_conditions(requests_mock):
    client = OpenMeteoClient(base_url="https://openmeteo.test/v1")
    requests_mock.get(
        "https://openmeteo.test/v1/forecast",
        json={
            "current": {
                "time": "2024-01-01T12:00",
                "temperature_2m": 25.54,
                "wind_speed_10m": 10.21,
                "relative_humidity_2m": 45,
            }
        },
    )

    conditions = client.fetch_current(33.749, -84.388)

    assert conditions.temperature_2m == 25.54
    assert conditions.wind_speed_10m == 10.21
    assert conditions.relative_humidity_2m == 45
    assert conditions.time == "2024-01-01T12:00"
    query = requests_mock.last_request.qs
    assert query["latitude"] == ["33.749"]
    assert query["longitude"] == ["-84.388"]
    assert query["current"] == ["temperature_2m,wind_speed_10m,relative_humidity_2m"]


def test_openmeteo_missing_current_block_is_empty(requests_mock):
    client = OpenMeteoClient(base_url="https://openmeteo.test/v1")
    requests_mock.get("https://openmeteo.test/v1/forecast", json={"latitude": 1.0})

    conditions = client.fetch_current(1.0, 1.0)

    assert conditions.temperature_2m is None
    assert conditions.time is None


def test_openmeteo_failure_is_not_retried(requests_mock):
    client = OpenMeteoClient(base_url="https://openmeteo.test/v1")
    requests_mock.get("https://openmeteo.test/v1/forecast", status_code=502, text="bad gateway")

    with pytest.raises(UpstreamError):
        client.fetch_current(1.0, 1.0)

    assert requests_mock.call_count == 1
