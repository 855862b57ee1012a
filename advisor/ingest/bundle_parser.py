"""Conversion between OpenWeatherMap forecast JSON and bundle models.

The backup file stores bundles in the provider's own shape, so the same
parser reads live responses and cached snapshots.
"""

import math

from advisor.models.forecast import (
    CityForecastBundle,
    CityMeta,
    ForecastRecord,
    WeatherCondition,
)

# Latest epoch that still converts to a date with any offset applied
MAX_EPOCH_SECONDS = 253402300799 - 86400
# Offsets stay within one day either side of UTC
MAX_OFFSET_SECONDS = 86400


class BundleParseError(ValueError):
    """Raised when a payload does not have the forecast shape."""


def parse_bundle(raw: dict) -> CityForecastBundle:
    """Build a bundle from a provider-shaped dict.

    Error payloads ({"cod": "404", "message": "city not found"}) parse into
    a bundle with no records.
    """
    if not isinstance(raw, dict):
        raise BundleParseError(f"Expected a JSON object, got {type(raw).__name__}")

    try:
        records = tuple(_parse_record(item) for item in raw.get("list") or [])
        city = raw.get("city") or {}
        return CityForecastBundle(
            status_code=str(raw.get("cod", "")),
            record_count=len(records),
            message=str(raw.get("message", "") or ""),
            records=records,
            city=CityMeta(utc_offset_seconds=_parse_offset(city.get("timezone", 0))),
        )
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
        raise BundleParseError(f"Malformed forecast payload: {e}") from e


def _parse_record(item: dict) -> ForecastRecord:
    wind = item.get("wind") or {}
    epoch = int(item["dt"])
    if not 0 <= epoch <= MAX_EPOCH_SECONDS:
        raise ValueError(f"timestamp out of range: {epoch}")
    return ForecastRecord(
        epoch_timestamp=epoch,
        temperature_kelvin=_finite(item["main"]["temp"], "temperature"),
        conditions=tuple(
            WeatherCondition(
                main=str(w.get("main", "")),
                description=str(w.get("description", "")),
            )
            for w in item.get("weather") or []
        ),
        wind_speed=_finite(wind.get("speed", 0.0) or 0.0, "wind speed"),
        local_time_text=str(item.get("dt_txt", "")),
    )


def _finite(value, name: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{name} is not a finite number: {value!r}")
    return number


def _parse_offset(value) -> int:
    offset = int(value or 0)
    if abs(offset) > MAX_OFFSET_SECONDS:
        raise ValueError(f"UTC offset out of range: {offset}")
    return offset


def bundle_to_dict(bundle: CityForecastBundle) -> dict:
    """Serialize a bundle back to the provider's JSON shape."""
    return {
        "cod": bundle.status_code,
        "cnt": bundle.record_count,
        "message": bundle.message,
        "list": [
            {
                "dt": r.epoch_timestamp,
                "main": {"temp": r.temperature_kelvin},
                "weather": [
                    {"main": c.main, "description": c.description}
                    for c in r.conditions
                ],
                "wind": {"speed": r.wind_speed},
                "dt_txt": r.local_time_text,
            }
            for r in bundle.records
        ],
        "city": {"timezone": bundle.city.utc_offset_seconds},
    }
