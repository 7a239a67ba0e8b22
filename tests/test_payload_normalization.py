import time

import pytest

from src.services.weather import normalize_payload


@pytest.mark.parametrize("speed,expected", [(0, 0), (1, 4), (5, 18), (2.5, 9), (10.3, 37), ("4", 14)])
def test_wind_is_converted_to_kmh(speed, expected):
    payload = normalize_payload({"wind": {"speed": speed}, "dt": 1}, "Oslo")
    assert payload.wind_kmh == expected


def test_missing_dt_defaults_to_now():
    before = int(time.time())
    payload = normalize_payload({"name": "Oslo"}, "Oslo")
    after = int(time.time())
    assert before <= payload.dt <= after + 1


def test_dt_default_uses_injected_clock():
    payload = normalize_payload({}, "Oslo", now=lambda: 1700000000.9)
    assert payload.dt == 1700000000


def test_missing_fields_default_to_zero_and_empty():
    payload = normalize_payload({"dt": 10}, "Oslo")
    assert payload.to_json() == {
        "city": "Oslo",
        "country": "",
        "tempC": 0,
        "feelsC": 0,
        "condition": "",
        "description": "",
        "icon": "01d",
        "humidity": 0,
        "windKmh": 0,
        "sunrise": 0,
        "sunset": 0,
        "timezone": 0,
        "dt": 10,
    }


def test_non_numeric_fields_become_zero():
    data = {
        "main": {"temp": "hot", "feels_like": None, "humidity": "n/a"},
        "wind": {"speed": float("nan")},
        "sys": {"sunrise": [], "sunset": {}},
        "timezone": "UTC",
        "dt": "later",
    }
    payload = normalize_payload(data, "Oslo")
    assert (payload.temp_c, payload.feels_c, payload.humidity, payload.wind_kmh) == (0, 0, 0, 0)
    assert (payload.sunrise, payload.sunset, payload.timezone, payload.dt) == (0, 0, 0, 0)


def test_temperatures_round_half_up():
    payload = normalize_payload({"main": {"temp": 2.5, "feels_like": -2.5}, "dt": 1}, "Oslo")
    assert payload.temp_c == 3
    assert payload.feels_c == -2


def test_negative_timezone_is_kept():
    payload = normalize_payload({"timezone": -18000, "dt": 1}, "New York")
    assert payload.timezone == -18000


def test_city_falls_back_to_query_and_empty_weather_list_is_tolerated():
    payload = normalize_payload({"weather": [], "dt": 1}, "Springfield")
    assert payload.city == "Springfield"
    assert payload.condition == ""
    assert payload.icon == "01d"


def test_non_object_document_is_treated_as_empty():
    payload = normalize_payload(["unexpected"], "Oslo", now=lambda: 5)
    assert payload.city == "Oslo"
    assert payload.dt == 5


def test_wind_speed_overflowing_on_conversion_becomes_zero():
    payload = normalize_payload({"wind": {"speed": 1e308}, "dt": 1}, "Oslo")
    assert payload.wind_kmh == 0
