from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple

import requests

import config

logger = logging.getLogger(__name__)

WeatherFetcher = Callable[[str], Optional[Mapping[str, Any]]]


@dataclass(frozen=True)
class CityWeather:
    name: str
    lat: float
    lon: float
    temperature: float
    country: str = ""
    humidity: Optional[float] = None
    conditions: str = ""

    @property
    def location(self) -> Tuple[float, float]:
        return (self.lat, self.lon)


def fetch_weather(city: str) -> Optional[Mapping[str, Any]]:
    """
    Current weather for ``city`` from OpenWeather (metric units), or None on
    any failure: no API key, transport error, non-2xx status or bad JSON.
    """
    if not config.OPENWEATHER_API_KEY:
        logger.warning("OPENWEATHER_API_KEY is not set; weather lookup skipped")
        return None
    try:
        resp = requests.get(
            config.OPENWEATHER_URL,
            params={"q": city, "appid": config.OPENWEATHER_API_KEY, "units": "metric"},
            timeout=config.WEATHER_TIMEOUT_SECONDS,
        )
        resp.raise_for_status()
        payload = resp.json()
    except requests.HTTPError as e:
        logger.info("Weather lookup for %r returned HTTP %s", city, e.response.status_code)
        return None
    except requests.RequestException as e:
        logger.warning("Weather lookup for %r failed: %s", city, e)
        return None
    except ValueError:
        logger.warning("Weather lookup for %r returned a non-JSON body", city)
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def parse_city_weather(payload: Optional[Mapping[str, Any]]) -> Optional[CityWeather]:
    if not payload:
        return None
    name = payload.get("name")
    if not name:
        return None
    try:
        coord = payload.get("coord") or {}
        main = payload.get("main") or {}
        lat = float(coord["lat"])
        lon = float(coord["lon"])
        temperature = float(main["temp"])
        humidity = main.get("humidity")
        humidity = float(humidity) if humidity is not None else None
        country = str((payload.get("sys") or {}).get("country") or "")
    except (AttributeError, KeyError, TypeError, ValueError):
        return None
    conditions = ""
    weather = payload.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        conditions = str(weather[0].get("main") or "")
    return CityWeather(
        name=str(name),
        lat=lat,
        lon=lon,
        temperature=temperature,
        country=country,
        humidity=humidity,
        conditions=conditions,
    )


def resolve_city(city: str, fetch: WeatherFetcher = fetch_weather) -> Optional[CityWeather]:
    """Resolve a city through a single weather lookup; None means not found."""
    weather = parse_city_weather(fetch(city))
    if weather is None:
        logger.info("City %r could not be resolved", city)
    return weather
