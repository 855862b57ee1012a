"""Default provider endpoint and backup location."""

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_FORECAST_PATH = "/forecast"
DEFAULT_RECORD_COUNT = 40
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CACHE_FILE = "data/weather_backup.json"

API_KEY_ENV = "OPENWEATHER_API_KEY"
