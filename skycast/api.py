"""Forecast API: FastAPI surface over the pipeline and its tools."""

import os
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from skycast.config.loader import load_config
from skycast.config.schema import SkycastConfig
from skycast.errors import EnvelopeDecodeError, NetworkError, SkycastError, UserInputError
from skycast.models.place import Place
from skycast.pipeline.forecast_pipeline import ForecastPipeline
from skycast.tools.registry import ToolRegistry

CONFIG_PATH = os.environ.get("SKYCAST_CONFIG", "skycast.yaml")


class ToolCall(BaseModel):
    arguments: dict = {}


def _http_error(e: SkycastError) -> HTTPException:
    if isinstance(e, UserInputError):
        return HTTPException(400, str(e))
    if isinstance(e, (NetworkError, EnvelopeDecodeError)):
        return HTTPException(502, str(e))
    return HTTPException(500, str(e))


def create_app(
    config: SkycastConfig | None = None,
    pipeline: ForecastPipeline | None = None,
) -> FastAPI:
    pipeline = pipeline or ForecastPipeline(config)
    tools = ToolRegistry(pipeline)

    app = FastAPI(title="Skycast Forecast API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Data endpoints ──────────────────────────────────────────────

    @app.get("/api/locations")
    def get_locations(query: str):
        """Candidate places for a free-text query."""
        try:
            return [p.to_dict() for p in pipeline.locate(query)]
        except SkycastError as e:
            raise _http_error(e) from e

    @app.get("/api/forecast/{place_id}")
    def get_forecast(place_id: str, name: str | None = None):
        """Today's forecast and outlook for a placeId."""
        place = Place(place_id=place_id, display_name=name or place_id)
        try:
            return pipeline.forecast(place).to_dict()
        except SkycastError as e:
            raise _http_error(e) from e

    # ── Tool endpoints ──────────────────────────────────────────────

    @app.get("/api/tools")
    def list_tools():
        return tools.schemas()

    @app.post("/api/tools/{name}")
    def call_tool(name: str, call: ToolCall):
        try:
            return {"result": tools.call(name, call.arguments)}
        except SkycastError as e:
            raise _http_error(e) from e

    @app.get("/api/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}

    return app


app = create_app(load_config(CONFIG_PATH))
