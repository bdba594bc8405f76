from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

OPENWEATHER_API_KEY: str = os.getenv("OPENWEATHER_API_KEY", "")
OPENWEATHER_URL: str = os.getenv(
    "OPENWEATHER_URL", "https://api.openweathermap.org/data/2.5/weather"
)
WEATHER_TIMEOUT_SECONDS: float = float(os.getenv("WEATHER_TIMEOUT_SECONDS", "10"))

DB_PATH: Path = Path(os.getenv("ECOLIVE_DB_PATH", str(BASE_DIR / "data.db")))

# Demo login only; this gates navigation and is not a security boundary.
DEMO_USERNAME: str = os.getenv("ECOLIVE_USERNAME", "admin")
DEMO_PASSWORD: str = os.getenv("ECOLIVE_PASSWORD", "1234")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
