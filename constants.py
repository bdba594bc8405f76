from __future__ import annotations

# Storage keys shared with earlier browser-based versions of the dashboard.
STORAGE_KEY: str = "eco_sensors_v1"
THEME_KEY: str = "ecolive_theme"
LOGIN_KEY: str = "loggedIn"

# Serialized marker for temperature records and their default unit.
TEMPERATURE_TYPE: str = "temperature"
DEFAULT_UNIT: str = "°C"
AUTO_CITY_DESCRIPTION: str = "Auto city temperature"

BAR_COLOR: str = "#2e8b57"
BAR_COLOR_DARK: str = "#4ade80"

# Map framing (lat, lon) and zoom levels.
DEFAULT_MAP_CENTER: tuple[float, float] = (8.2280, 125.2433)
DEFAULT_MAP_ZOOM: int = 5
FOCUS_ZOOM: int = 8
RECORD_ZOOM: int = 10
