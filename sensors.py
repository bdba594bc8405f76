from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import store
from models import Record, new_record
from sync import Resolver
from utils.values import InvalidSensorInput, parse_sensor_value
from weather import resolve_city

logger = logging.getLogger(__name__)


@dataclass
class SensorForm:
    name: str
    city: str
    raw_value: str = ""
    description: str = ""
    auto: bool = False


def submit_sensor(
    form: SensorForm,
    *,
    confirm_auto: Optional[bool] = None,
    resolver: Resolver = resolve_city,
) -> Record:
    """Add or update a sensor from the manage form and persist the store."""
    name = form.name.strip()
    city = form.city.strip()
    if not name or not city:
        raise InvalidSensorInput("Sensor Name and City are required.")
    value = parse_sensor_value(form.raw_value, auto=form.auto, confirm_auto=confirm_auto)

    weather = resolver(city)
    lat, lon = weather.location if weather is not None else (None, None)

    candidate = new_record(
        name, value, description=form.description.strip(), city=city, lat=lat, lon=lon
    )
    records = store.upsert(store.load_all(), candidate)
    store.save_all(records)
    saved = records[store.find_index(records, name)]
    logger.info("Saved sensor %r (%s) for %s", saved.name, saved.kind.value, city)
    return saved


def delete_sensor(index: int) -> Record:
    records = store.load_all()
    remaining = store.delete_at(records, index)
    store.save_all(remaining)
    logger.info("Deleted sensor %r", records[index].name)
    return records[index]
