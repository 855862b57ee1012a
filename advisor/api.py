"""Weather advisory HTTP API: FastAPI app over the orchestrator."""

import logging
import os

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from advisor.config.loader import load_config
from advisor.ingest.openweather_client import SERVICE_UNAVAILABLE
from advisor.models.advisory import CityAdvisoryResult
from advisor.pipeline.orchestrator import WeatherOrchestrator

logger = logging.getLogger(__name__)

CONFIG_PATH = os.environ.get("ADVISOR_CONFIG", "configs/default.yaml")


def http_status_for(result: CityAdvisoryResult) -> int:
    """200 and 404 pass through; everything else is a 503."""
    if result.status in (200, 404):
        return result.status
    return 503


def create_app(orchestrator: WeatherOrchestrator | None = None) -> FastAPI:
    app = FastAPI(title="Weather Advisory", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    state: dict[str, WeatherOrchestrator] = {}
    if orchestrator is not None:
        state["orchestrator"] = orchestrator

    def _orchestrator() -> WeatherOrchestrator:
        # Built on first use so importing the module never reads config
        if "orchestrator" not in state:
            state["orchestrator"] = WeatherOrchestrator(load_config(CONFIG_PATH))
        return state["orchestrator"]

    @app.get("/api/v1/weather/advice")
    def get_weather_advice(city: str = Query(..., min_length=1)):
        """Day-grouped forecast and advice for a city."""
        try:
            result = _orchestrator().get_advisory(city)
        except Exception:
            logger.exception("Unexpected error building advisory for %s", city)
            result = CityAdvisoryResult(message=SERVICE_UNAVAILABLE, status=503)
        return JSONResponse(content=result.to_dict(), status_code=http_status_for(result))

    @app.get("/api/health")
    def health():
        return {"status": "ok", "online": _orchestrator().config.service.online}

    return app


app = create_app()
