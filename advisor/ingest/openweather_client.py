"""OpenWeatherMap forecast client.

Failures are returned as values rather than raised, so callers can branch
on the outcome without exception handling. There are no retries: the first
failure goes straight to the caller's fallback path.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

import httpx

from advisor.config.defaults import DEFAULT_BASE_URL, DEFAULT_FORECAST_PATH
from advisor.config.schema import ProviderConfig
from advisor.ingest.bundle_parser import parse_bundle
from advisor.models.common import SUCCESS_CODE
from advisor.models.forecast import CityForecastBundle

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weather-advisor/0.1.0"
SERVICE_UNAVAILABLE = "Service temporarily unavailable."
NOT_FOUND_CODE = "404"


class FailureKind(StrEnum):
    CLIENT = "client"  # city not found, passed through to the caller
    TRANSPORT = "transport"  # everything else: network, timeout, 5xx, other 4xx


@dataclass(frozen=True)
class FetchSuccess:
    bundle: CityForecastBundle


@dataclass(frozen=True)
class FetchFailure:
    kind: FailureKind
    status: str
    message: str


FetchResult: TypeAlias = FetchSuccess | FetchFailure


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        path: str = DEFAULT_FORECAST_PATH,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.path = path if path.startswith("/") else f"/{path}"
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, config: ProviderConfig) -> "OpenWeatherClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            path=config.path,
            timeout=config.timeout_seconds,
        )

    def fetch(self, city: str, count: int) -> FetchResult:
        """Fetch up to `count` 3-hour forecast slots for `city`."""
        url = f"{self.base_url}{self.path}"
        params = {"q": city, "cnt": count, "appid": self.api_key}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        try:
            resp = httpx.get(url, params=params, headers=headers, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.error("Error fetching weather data from API for city %s: %s", city, e)
            return FetchFailure(FailureKind.TRANSPORT, "503", SERVICE_UNAVAILABLE)

        if resp.is_client_error:
            return self._client_failure(city, resp)

        if not resp.is_success:
            logger.error(
                "Unexpected error with status code: %d for city %s",
                resp.status_code, city,
            )
            return FetchFailure(FailureKind.TRANSPORT, "503", SERVICE_UNAVAILABLE)

        try:
            bundle = parse_bundle(resp.json())
        except ValueError as e:  # JSON decode or BundleParseError
            logger.error("Unreadable forecast payload for city %s: %s", city, e)
            return FetchFailure(FailureKind.TRANSPORT, "503", SERVICE_UNAVAILABLE)

        if bundle.status_code != SUCCESS_CODE:
            # OpenWeatherMap can report errors in the body of a 2xx response
            return self._provider_error(city, bundle.status_code, bundle.message)

        return FetchSuccess(bundle)

    def _client_failure(self, city: str, resp: httpx.Response) -> FetchFailure:
        status = str(resp.status_code)
        message = resp.reason_phrase
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            status = str(body.get("cod") or status)
            message = str(body.get("message") or message)
        return self._provider_error(city, status, message)

    def _provider_error(self, city: str, status: str, message: str) -> FetchFailure:
        """Only city-not-found reaches the caller; other rejections read as unavailable."""
        logger.error(
            "Error fetching weather data for city %s: %s - %s", city, status, message
        )
        if status == NOT_FOUND_CODE:
            return FetchFailure(FailureKind.CLIENT, status, message)
        return FetchFailure(FailureKind.TRANSPORT, "503", SERVICE_UNAVAILABLE)
