"""REST API: FastAPI application for distance and slice queries.

The map editor posts its current hex snapshot with every request; the
server keeps no map state between calls.

Usage::

    from hexreach.network.rest_api import create_app

    app = create_app(config)
    # Serve with uvicorn (see hexreach.main)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hexreach.engine.distance import DistanceEngine
from hexreach.engine.slice_analysis import analyze_slices
from hexreach.loaders.config_loader import EngineConfig
from hexreach.models.hex_graph import HexGraph, MalformedHexError
from hexreach.models.options import DistanceOptions
from hexreach.network.rest_models import (
    DistanceRequest,
    DistanceResponse,
    OptionsModel,
    SliceRequest,
    SliceResponse,
    hexes_to_raw,
)

log = logging.getLogger(__name__)


def _options(config: EngineConfig, body: Optional[OptionsModel]) -> DistanceOptions:
    if body is None:
        return config.options
    return DistanceOptions.from_mapping(body.model_dump())


def create_app(config: EngineConfig, engine: Optional[DistanceEngine] = None) -> FastAPI:
    """Factory: create and return a configured FastAPI application.

    ``config`` and ``engine`` are captured by closure so every endpoint
    shares them without global state.
    """
    engine = engine or DistanceEngine(strict=config.strict)

    app = FastAPI(title="Hexreach Distance Server", version="1.0.0")

    # CORS: the editor runs as a static page on another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/distances", response_model=DistanceResponse)
    async def distances(body: DistanceRequest) -> dict[str, Any]:
        graph = HexGraph.from_dict(hexes_to_raw(body.hexes))
        max_distance = body.max_distance if body.max_distance is not None else config.max_distance
        try:
            result = engine.calculate(graph, body.source, max_distance, _options(config, body.options))
        except MalformedHexError as exc:
            log.warning("Rejected map snapshot: %s", exc)
            return {"source": body.source, "max_distance": max_distance, "error": str(exc)}
        log.info("Distances from %s: %d of %d hexes reached", body.source, len(result), len(graph))
        return {"source": body.source, "max_distance": max_distance, "distances": result}

    @app.post("/api/slices", response_model=SliceResponse)
    async def slices(body: SliceRequest) -> dict[str, Any]:
        graph = HexGraph.from_dict(hexes_to_raw(body.hexes))
        max_distance = body.max_distance if body.max_distance is not None else config.max_distance
        try:
            summaries = analyze_slices(graph, max_distance, _options(config, body.options), engine)
        except MalformedHexError as exc:
            log.warning("Rejected map snapshot: %s", exc)
            return {"max_distance": max_distance, "error": str(exc)}
        return {
            "max_distance": max_distance,
            "slices": [
                {
                    "label": s.label,
                    "real_id": s.real_id,
                    "tiles": s.tiles,
                    "planet_count": s.planet_count,
                    "resources": s.resources,
                    "influence": s.influence,
                    "planet_types": s.planet_types,
                    "techs": sorted(s.techs),
                    "wormholes": sorted(s.wormholes),
                    "ideal": s.ideal_label,
                }
                for s in summaries
            ],
        }

    return app
