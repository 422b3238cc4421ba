from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .core.logging import configure_logging
from .recommendations.cache import clear_cache, evict, get_cache_stats
from .recommendations.data_store import get_car, get_cars
from .recommendations.engine import get_recommendations
from .recommendations.errors import InvalidPreferenceError
from .recommendations.models import (
    Car,
    RecommendationRequest,
    RecommendationResponse,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="CarMatch Recommendation API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(InvalidPreferenceError)
def invalid_preference_handler(request: Request, exc: InvalidPreferenceError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/info")
def info() -> dict[str, str]:
    return {
        "name": "CarMatch",
        "description": "Car recommendation service",
        "version": app.version,
        "features": "Rule-based recommendation engine with result caching",
    }


@app.get("/metadata")
def metadata() -> dict:
    cars = get_cars()
    return {
        "brands": sorted({c.brand for c in cars}),
        "fuel_types": sorted({c.fuel_type for c in cars}),
        "drivetrain_types": sorted({c.drivetrain_type for c in cars}),
    }


# ── Inventory ────────────────────────────────────────────────────────────


@app.get("/cars", response_model=list[Car])
def list_cars() -> list[Car]:
    return list(get_cars())


@app.get("/cars/{car_id}", response_model=Car)
def read_car(car_id: int) -> Car:
    car = get_car(car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


# ── Recommendations ──────────────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    return get_recommendations(body.to_preferences())


# ── Cache ────────────────────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


@app.post("/cache/evict")
def cache_evict(body: RecommendationRequest) -> dict[str, str]:
    evict(body.to_preferences())
    return {"status": "evicted"}


@app.delete("/cache")
def cache_clear() -> dict[str, str]:
    clear_cache()
    return {"status": "cleared"}
