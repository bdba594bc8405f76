from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from constants import DEFAULT_UNIT, TEMPERATURE_TYPE


class SensorKind(str, Enum):
    GENERIC = "generic"
    TEMPERATURE = "temperature"


@dataclass
class Record:
    """One stored sensor reading.

    ``kind`` is fixed when the record is first created (see ``new_record``);
    updates go through ``store.upsert`` which never touches it.
    """

    name: str
    value: float
    kind: SensorKind = SensorKind.GENERIC
    description: str = ""
    city: str = ""
    lat: Optional[float] = None
    lon: Optional[float] = None
    unit: Optional[str] = None

    @property
    def location(self) -> Optional[Tuple[float, float]]:
        if self.lat is None or self.lon is None:
            return None
        return (self.lat, self.lon)

    @property
    def is_temperature(self) -> bool:
        return self.kind is SensorKind.TEMPERATURE

    def display(self) -> str:
        if self.is_temperature:
            return f"{self.name}: {self.value} {self.unit}"
        return f"{self.name}: {self.value}"


def classify_name(name: str) -> SensorKind:
    # "temp" also covers "temperature"
    if "temp" in name.lower():
        return SensorKind.TEMPERATURE
    return SensorKind.GENERIC


def new_record(
    name: str,
    value: float,
    *,
    description: str = "",
    city: str = "",
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    kind: Optional[SensorKind] = None,
) -> Record:
    if kind is None:
        kind = classify_name(name)
    elif kind is SensorKind.GENERIC and classify_name(name) is SensorKind.TEMPERATURE:
        # Stored generic records carry no type marker, so such a name would
        # come back as a temperature record on the next load.
        raise ValueError(f"Sensor name {name!r} marks a temperature sensor.")
    return Record(
        name=name,
        value=float(value),
        kind=kind,
        description=description,
        city=city,
        lat=lat,
        lon=lon,
        unit=DEFAULT_UNIT if kind is SensorKind.TEMPERATURE else None,
    )


def record_to_dict(record: Record) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": record.name,
        "value": record.value,
        "description": record.description,
        "city": record.city,
        "lat": record.lat,
        "lon": record.lon,
    }
    if record.is_temperature:
        data["unit"] = record.unit or DEFAULT_UNIT
        data["type"] = TEMPERATURE_TYPE
    return data


def _optional_float(raw: Any) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def record_from_dict(data: Mapping[str, Any]) -> Record:
    """Rebuild a Record from its stored map.

    The ``type`` discriminant wins; entries written before it existed are
    classified by their name instead.
    """
    name = str(data.get("name") or "")
    if data.get("type") == TEMPERATURE_TYPE:
        kind = SensorKind.TEMPERATURE
    else:
        kind = classify_name(name)
    value = _optional_float(data.get("value"))
    return Record(
        name=name,
        value=value if value is not None else 0.0,
        kind=kind,
        description=str(data.get("description") or ""),
        city=str(data.get("city") or ""),
        lat=_optional_float(data.get("lat")),
        lon=_optional_float(data.get("lon")),
        unit=(data.get("unit") or DEFAULT_UNIT) if kind is SensorKind.TEMPERATURE else None,
    )
