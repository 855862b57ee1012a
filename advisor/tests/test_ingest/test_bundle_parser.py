"""Tests for provider payload parsing."""

import pytest

from advisor.ingest.bundle_parser import BundleParseError, bundle_to_dict, parse_bundle


class TestParseBundle:
    def test_fixture(self, london_payload: dict):
        bundle = parse_bundle(london_payload)
        assert bundle.status_code == "200"
        assert bundle.record_count == 5
        assert len(bundle.records) == 5
        assert bundle.city.utc_offset_seconds == 0
        assert bundle.is_success

    def test_record_fields(self, london_payload: dict):
        record = parse_bundle(london_payload).records[1]
        assert record.epoch_timestamp == 1770757200
        assert record.temperature_kelvin == 278.95
        assert record.wind_speed == 5.2
        assert record.local_time_text == "2026-02-10 21:00:00"
        assert record.conditions[0].main == "Rain"
        assert record.conditions[0].description == "light rain"

    def test_record_count_follows_list_not_cnt(self, london_payload: dict):
        london_payload["cnt"] = 40
        assert parse_bundle(london_payload).record_count == 5

    def test_error_payload(self, not_found_payload: dict):
        bundle = parse_bundle(not_found_payload)
        assert bundle.status_code == "404"
        assert bundle.message == "city not found"
        assert bundle.records == ()
        assert not bundle.is_success

    def test_numeric_cod(self, london_payload: dict):
        london_payload["cod"] = 200
        assert parse_bundle(london_payload).status_code == "200"

    def test_missing_temperature_raises(self, london_payload: dict):
        del london_payload["list"][0]["main"]
        with pytest.raises(BundleParseError):
            parse_bundle(london_payload)

    def test_not_an_object(self):
        with pytest.raises(BundleParseError):
            parse_bundle(["not", "a", "dict"])

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_temperature_raises(self, london_payload: dict, value: float):
        london_payload["list"][0]["main"]["temp"] = value
        with pytest.raises(BundleParseError, match="temperature"):
            parse_bundle(london_payload)

    def test_non_finite_wind_raises(self, london_payload: dict):
        london_payload["list"][3]["wind"]["speed"] = float("nan")
        with pytest.raises(BundleParseError, match="wind speed"):
            parse_bundle(london_payload)

    @pytest.mark.parametrize("dt", [10**20, -1])
    def test_timestamp_out_of_range_raises(self, london_payload: dict, dt: int):
        london_payload["list"][0]["dt"] = dt
        with pytest.raises(BundleParseError, match="timestamp out of range"):
            parse_bundle(london_payload)

    def test_offset_out_of_range_raises(self, london_payload: dict):
        london_payload["city"]["timezone"] = 10**9
        with pytest.raises(BundleParseError, match="UTC offset"):
            parse_bundle(london_payload)


class TestBundleToDict:
    def test_reparses_to_equal_bundle(self, london_payload: dict):
        bundle = parse_bundle(london_payload)
        assert parse_bundle(bundle_to_dict(bundle)) == bundle

    def test_provider_shape(self, london_payload: dict):
        data = bundle_to_dict(parse_bundle(london_payload))
        assert data["cod"] == "200"
        assert data["cnt"] == 5
        assert data["city"] == {"timezone": 0}
        assert data["list"][0]["dt_txt"] == "2026-02-10 18:00:00"
        assert data["list"][0]["main"] == {"temp": 280.15}
