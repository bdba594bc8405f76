import pytest
import requests

import config
import weather
from weather import CityWeather, fetch_weather, parse_city_weather, resolve_city

MANILA_PAYLOAD = {
    "name": "Manila",
    "coord": {"lat": 14.6042, "lon": 120.9822},
    "main": {"temp": 31.4, "humidity": 70},
    "weather": [{"main": "Clouds"}],
    "sys": {"country": "PH"},
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture()
def api_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config, "OPENWEATHER_API_KEY", "test-key")


def test_parse_city_weather_full_payload():
    w = parse_city_weather(MANILA_PAYLOAD)
    assert w == CityWeather(
        name="Manila", lat=14.6042, lon=120.9822, temperature=31.4,
        country="PH", humidity=70.0, conditions="Clouds",
    )
    assert w.location == (14.6042, 120.9822)


def test_parse_city_weather_minimal_payload():
    w = parse_city_weather({"name": "Cebu", "coord": {"lat": 10.3, "lon": 123.9}, "main": {"temp": 29}})
    assert w is not None
    assert w.country == "" and w.humidity is None and w.conditions == ""


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"cod": "404", "message": "city not found"},
        {"name": "X", "coord": {"lat": 1, "lon": 2}},
        {"name": "", "coord": {"lat": 1, "lon": 2}, "main": {"temp": 3}},
        {"name": "X", "coord": {"lat": 1, "lon": 2}, "main": {"temp": 3, "humidity": "n/a"}},
        {"name": "X", "coord": {"lat": 1, "lon": 2}, "main": [3]},
        {"name": "X", "coord": "1,2", "main": {"temp": 3}},
        {"name": "X", "coord": {"lat": 1, "lon": 2}, "main": {"temp": 3}, "sys": "PH"},
    ],
)
def test_parse_city_weather_rejects_incomplete(payload):
    assert parse_city_weather(payload) is None


def test_fetch_weather_sends_metric_query(api_key, monkeypatch: pytest.MonkeyPatch):
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen.update(url=url, params=params, timeout=timeout)
        return FakeResponse(200, MANILA_PAYLOAD)

    monkeypatch.setattr(weather.requests, "get", fake_get)
    assert fetch_weather("manila") == MANILA_PAYLOAD
    assert seen["url"] == config.OPENWEATHER_URL
    assert seen["params"] == {"q": "manila", "appid": "test-key", "units": "metric"}
    assert seen["timeout"] == config.WEATHER_TIMEOUT_SECONDS


def test_fetch_weather_not_found_status(api_key, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(weather.requests, "get", lambda *a, **k: FakeResponse(404, {"cod": "404"}))
    assert fetch_weather("Nowhereville") is None


def test_fetch_weather_transport_error(api_key, monkeypatch: pytest.MonkeyPatch):
    def boom(*a, **k):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(weather.requests, "get", boom)
    assert fetch_weather("Manila") is None


def test_fetch_weather_bad_body(api_key, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(weather.requests, "get", lambda *a, **k: FakeResponse(200, None))
    assert fetch_weather("Manila") is None


def test_fetch_weather_without_key_skips_request(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config, "OPENWEATHER_API_KEY", "")

    def fail(*a, **k):
        raise AssertionError("no request expected")

    monkeypatch.setattr(weather.requests, "get", fail)
    assert fetch_weather("Manila") is None


def test_resolve_city_calls_fetch_once():
    calls = []

    def fetch(city):
        calls.append(city)
        return MANILA_PAYLOAD

    w = resolve_city("mAnIlA", fetch=fetch)
    assert calls == ["mAnIlA"]
    # canonical name comes from the lookup, not the query
    assert w.name == "Manila"


def test_resolve_city_not_found():
    calls = []

    def fetch(city):
        calls.append(city)
        return None

    assert resolve_city("Nowhereville", fetch=fetch) is None
    assert len(calls) == 1


def test_parse_city_weather_ignores_malformed_conditions():
    payload = dict(MANILA_PAYLOAD, weather={"main": "Clouds"})
    w = parse_city_weather(payload)
    assert w is not None
    assert w.conditions == ""


def test_resolve_city_malformed_payload_is_not_found():
    payload = {"name": "Manila", "coord": {"lat": 14.6, "lon": 121.0}, "main": {"temp": 30, "humidity": "humid"}}
    assert resolve_city("Manila", fetch=lambda city: payload) is None
