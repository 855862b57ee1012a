"""OpenWeatherMap 3-hour forecast data models."""

from dataclasses import dataclass, replace

from advisor.models.common import SUCCESS_CODE


@dataclass(frozen=True)
class WeatherCondition:
    main: str
    description: str


@dataclass(frozen=True)
class ForecastRecord:
    epoch_timestamp: int
    temperature_kelvin: float
    conditions: tuple[WeatherCondition, ...]
    wind_speed: float
    local_time_text: str  # YYYY-MM-DD HH:MM:SS, as formatted by the provider


@dataclass(frozen=True)
class CityMeta:
    utc_offset_seconds: int = 0


@dataclass(frozen=True)
class CityForecastBundle:
    status_code: str
    record_count: int
    message: str
    records: tuple[ForecastRecord, ...]
    city: CityMeta = CityMeta()

    @property
    def is_success(self) -> bool:
        return self.status_code == SUCCESS_CODE and len(self.records) > 0

    def with_records(self, records: tuple[ForecastRecord, ...]) -> "CityForecastBundle":
        """Return a copy holding `records`, keeping record_count in step."""
        return replace(self, records=records, record_count=len(records))


BackupIndex = dict[str, CityForecastBundle]
