import sys
from pathlib import Path

import pytest


# Ensure the project root (parent of this file) is importable when running pytest from anywhere
THIS_DIR = Path(__file__).resolve().parent
ROOT_DIR = THIS_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import db  # noqa: E402
from weather import CityWeather  # noqa: E402


@pytest.fixture()
def temp_db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    test_db = tmp_path / "test.db"
    monkeypatch.setattr(db, "DB_PATH", test_db, raising=False)
    db.initialize_database()
    return test_db


class FakeResolver:
    """Stands in for the weather lookup: known cities resolve, others do not."""

    def __init__(self, *cities: CityWeather):
        self.cities = {c.name.lower(): c for c in cities}
        self.calls = []

    def __call__(self, city: str):
        self.calls.append(city)
        return self.cities.get(city.strip().lower())


@pytest.fixture()
def manila() -> CityWeather:
    return CityWeather(
        name="Manila", lat=14.6042, lon=120.9822, temperature=31.4,
        country="PH", humidity=70, conditions="Clouds",
    )


@pytest.fixture()
def cebu() -> CityWeather:
    return CityWeather(name="Cebu", lat=10.3167, lon=123.8907, temperature=29.0, country="PH")


@pytest.fixture()
def resolver(manila: CityWeather, cebu: CityWeather) -> FakeResolver:
    return FakeResolver(manila, cebu)
