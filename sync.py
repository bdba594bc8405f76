from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import store
from constants import AUTO_CITY_DESCRIPTION
from models import Record, SensorKind, new_record
from weather import CityWeather, resolve_city

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Optional[CityWeather]]


@dataclass
class CitySession:
    """
    The city currently on screen.

    Every search takes a new token from ``begin``; a lookup that finishes
    after a newer search has started no longer holds the current token and
    its result is dropped.
    """

    current_city: Optional[str] = None
    canonical_city: Optional[str] = None
    token: int = 0

    def begin(self, city: str) -> int:
        self.token += 1
        self.current_city = city
        self.canonical_city = None
        return self.token

    def is_current(self, token: int) -> bool:
        return token == self.token

    @property
    def view_city(self) -> Optional[str]:
        return self.canonical_city or self.current_city

    def matches(self, city: Optional[str]) -> bool:
        wanted = (city or "").strip().lower()
        if not wanted:
            return False
        names = (self.current_city, self.canonical_city)
        return any(n and n.strip().lower() == wanted for n in names)


@dataclass
class SyncResult:
    city: str
    weather: Optional[CityWeather] = None
    records: List[Record] = field(default_factory=list)
    focus: Optional[Tuple[float, float]] = None

    @property
    def resolved(self) -> bool:
        return self.weather is not None


def city_temperature_record(weather: CityWeather) -> Record:
    return new_record(
        f"{weather.name} Temp",
        weather.temperature,
        description=AUTO_CITY_DESCRIPTION,
        city=weather.name,
        lat=weather.lat,
        lon=weather.lon,
        kind=SensorKind.TEMPERATURE,
    )


def sync_city(
    city: str, session: CitySession, resolver: Resolver = resolve_city
) -> Optional[SyncResult]:
    """
    Resolve ``city``, fold its current temperature into the store and return
    the stored records for that city.

    Returns None when a newer search replaced this one while the lookup was
    in flight; nothing is written in that case.
    """
    query = (city or "").strip()
    if not query:
        raise ValueError("Enter a city to search.")

    token = session.begin(query)
    weather = resolver(query)

    if not session.is_current(token):
        logger.info("Discarding stale weather result for %r", query)
        return None

    if weather is None:
        return SyncResult(city=query, records=store.filter_by_city(store.load_all(), query))

    session.canonical_city = weather.name
    records = store.upsert(store.load_all(), city_temperature_record(weather))
    store.save_all(records)
    logger.info("Synced %s: %.1f at %s", weather.name, weather.temperature, weather.location)
    return SyncResult(
        city=weather.name,
        weather=weather,
        records=store.filter_by_city(store.load_all(), weather.name),
        focus=weather.location,
    )


def refresh_city_view(
    session: CitySession, last: Optional[SyncResult] = None
) -> Optional[SyncResult]:
    """Re-filter the stored records for the active city without a new lookup."""
    city = session.view_city
    if not city:
        return None
    result = SyncResult(city=city, records=store.filter_by_city(store.load_all(), city))
    if last is not None and session.matches(last.city):
        result.weather = last.weather
        result.focus = last.focus
    return result
