"""Forecast aggregator: groups 3-hour records into per-day advisories."""

from advisor.advice.rules import build_advice, kelvin_to_celsius
from advisor.advice.timezone import local_date_time
from advisor.models.advisory import CityAdvisoryResult, ConditionStatus, DailyAdvisory
from advisor.models.forecast import CityForecastBundle, ForecastRecord

SUCCESS_MESSAGE = "success"


class EmptyForecastError(ValueError):
    """Raised when a bundle with no records is handed to the aggregator."""


def build_daily_advisory(record: ForecastRecord, time_of_day: str) -> DailyAdvisory:
    temperature = kelvin_to_celsius(record.temperature_kelvin)
    return DailyAdvisory(
        time=time_of_day,
        temperature=temperature,
        conditions=tuple(
            ConditionStatus(status=c.main, description=c.description)
            for c in record.conditions
        ),
        advice=build_advice(record.conditions, temperature, record.wind_speed),
    )


def aggregate(bundle: CityForecastBundle) -> CityAdvisoryResult:
    """Group a bundle's records by local date, in first-seen order.

    A record whose date differs from the previous record's opens a fresh
    group, even when that date was seen earlier. The fresh group replaces
    the earlier binding, so out-of-order records drop the earlier slots.
    Providers return non-decreasing timestamps, so this only matters for
    malformed input.
    """
    if not bundle.records:
        raise EmptyForecastError("Cannot aggregate a forecast bundle with no records")

    offset = bundle.city.utc_offset_seconds
    current_date, _ = local_date_time(bundle.records[0].epoch_timestamp, offset)

    data: dict[str, list[DailyAdvisory]] = {}
    group: list[DailyAdvisory] = []

    for record in bundle.records:
        record_date, record_time = local_date_time(record.epoch_timestamp, offset)
        if record_date != current_date:
            group = []
            current_date = record_date
        group.append(build_daily_advisory(record, record_time))
        data[record_date] = group

    return CityAdvisoryResult(message=SUCCESS_MESSAGE, status=200, data=data)
