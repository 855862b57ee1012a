"""Weather orchestrator: live fetch with fallback to the forecast backup."""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol

from advisor.advice.aggregator import aggregate
from advisor.config.schema import AdvisorConfig
from advisor.ingest.openweather_client import (
    SERVICE_UNAVAILABLE,
    FailureKind,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    OpenWeatherClient,
)
from advisor.models.advisory import CityAdvisoryResult
from advisor.models.common import utc_now
from advisor.models.forecast import BackupIndex
from advisor.storage.backup_store import (
    get_bundle,
    load_backup,
    prune_expired,
    put_bundle,
    save_backup,
)

logger = logging.getLogger(__name__)

OFFLINE_MISS_MESSAGE = "No data available currently for {city}"


class ForecastProvider(Protocol):
    def fetch(self, city: str, count: int) -> FetchResult: ...


class WeatherOrchestrator:
    def __init__(
        self,
        config: AdvisorConfig,
        provider: ForecastProvider | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.provider = provider or OpenWeatherClient.from_config(config.provider)
        self.clock = clock

    @property
    def cache_path(self) -> Path:
        return Path(self.config.service.cache_file)

    def get_advisory(self, city: str) -> CityAdvisoryResult:
        """Build the day-grouped advisory for `city`.

        Always returns a result; failures are reported through its status.
        """
        index = load_backup(self.cache_path)

        if not self.config.service.online:
            logger.info("Service is in offline mode. Fetching data from back up.")
            result = self._from_backup(index, city, prune=False)
            if result is not None:
                return result
            return CityAdvisoryResult(
                message=OFFLINE_MISS_MESSAGE.format(city=city), status=503
            )

        outcome = self.provider.fetch(city, self.config.provider.record_count)

        if isinstance(outcome, FetchSuccess) and outcome.bundle.is_success:
            result = aggregate(outcome.bundle)
            if put_bundle(index, city, outcome.bundle):
                self._save(index)
            return result

        if isinstance(outcome, FetchSuccess):
            logger.error("Provider returned no forecast records for city %s", city)
            outcome = FetchFailure(FailureKind.TRANSPORT, "503", SERVICE_UNAVAILABLE)

        return self._fallback(index, city, outcome)

    def _fallback(
        self, index: BackupIndex, city: str, failure: FetchFailure
    ) -> CityAdvisoryResult:
        result = self._from_backup(index, city, prune=True)
        if result is not None:
            return result

        if failure.kind == FailureKind.CLIENT:
            return CityAdvisoryResult(
                message=failure.message, status=_status_int(failure.status)
            )
        return CityAdvisoryResult(message=SERVICE_UNAVAILABLE, status=503)

    def _from_backup(
        self, index: BackupIndex, city: str, prune: bool
    ) -> CityAdvisoryResult | None:
        bundle = get_bundle(index, city)
        if bundle is None:
            logger.info("No data available for %s in back up.", city)
            return None

        if prune:
            pruned = prune_expired(bundle, self.clock())
            if pruned.record_count != bundle.record_count:
                if pruned.records:
                    index[city] = pruned
                else:
                    del index[city]
                self._save(index)
            bundle = pruned

        if not bundle.records:
            logger.info("Back up data for %s has expired.", city)
            return None

        logger.info("Serving %s from back up (%d records)", city, bundle.record_count)
        return aggregate(bundle)

    def _save(self, index: BackupIndex) -> None:
        try:
            save_backup(self.cache_path, index)
        except OSError:
            logger.exception("Error saving back up to %s", self.cache_path)


def _status_int(status: str) -> int:
    try:
        return int(status)
    except (TypeError, ValueError):
        return 503
