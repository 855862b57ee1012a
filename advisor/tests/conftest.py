"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from advisor.config.schema import AdvisorConfig, ProviderConfig, ServiceConfig
from advisor.ingest.bundle_parser import parse_bundle
from advisor.models.forecast import CityForecastBundle

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def london_payload() -> dict:
    with open(FIXTURE_DIR / "openweather_forecast_london.json") as f:
        return json.load(f)


@pytest.fixture
def london_bundle(london_payload: dict) -> CityForecastBundle:
    return parse_bundle(london_payload)


@pytest.fixture
def not_found_payload() -> dict:
    with open(FIXTURE_DIR / "openweather_city_not_found.json") as f:
        return json.load(f)


@pytest.fixture
def backup_path(tmp_path: Path) -> Path:
    return tmp_path / "backup" / "weather_backup.json"


@pytest.fixture
def online_config(backup_path: Path) -> AdvisorConfig:
    """Online config writing its back up under tmp_path."""
    return AdvisorConfig(
        provider=ProviderConfig(api_key="test-key", record_count=5),
        service=ServiceConfig(online=True, cache_file=str(backup_path)),
    )


@pytest.fixture
def offline_config(backup_path: Path) -> AdvisorConfig:
    return AdvisorConfig(
        provider=ProviderConfig(api_key="test-key", record_count=5),
        service=ServiceConfig(online=False, cache_file=str(backup_path)),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path, backup_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"api_key": "yaml-key", "record_count": 8},
        "service": {"online": True, "cache_file": str(backup_path)},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
