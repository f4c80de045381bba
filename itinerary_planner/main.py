from __future__ import annotations

import os
from typing import Any, Dict, List

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from itinerary_planner.agents.city_search import search_cities
from itinerary_planner.errors import CityNotFound, ItineraryError
from itinerary_planner.orchestrator import orchestrate_itinerary
from itinerary_planner.storage import MemStorage

MIN_DAYS = 1
MAX_DAYS = 7

app = FastAPI(title="Canadian Itinerary Planner API")

# Allow local development UIs to reach the API without browser CORS friction.
# Operators can scope this via ITINERARY_PLANNER_ALLOWED_ORIGINS.
raw_origins = os.getenv("ITINERARY_PLANNER_ALLOWED_ORIGINS") or "*"
allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
if not allowed_origins:
    allowed_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Read-only after this point; shared by every request.
app.state.storage = MemStorage.seeded()


@app.exception_handler(ItineraryError)
async def _itinerary_error_handler(request: Request, exc: ItineraryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request parameters", "errors": _jsonable_errors(exc)},
    )


def _jsonable_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def _storage(request: Request) -> MemStorage:
    return request.app.state.storage


@app.get("/api/cities")
async def list_cities(request: Request) -> List[Dict[str, Any]]:
    cities = await _storage(request).get_all_cities()
    return [c.model_dump(mode="json", by_alias=True) for c in cities]


@app.get("/api/cities/search")
async def city_search(request: Request, q: str = Query("")) -> List[Dict[str, Any]]:
    """Match cities against a free-text query."""
    cities = await _storage(request).get_all_cities()
    matches = await search_cities(q, cities)
    return [c.model_dump(mode="json", by_alias=True) for c in matches]


@app.get("/api/cities/{slug}")
async def get_city(request: Request, slug: str) -> Dict[str, Any]:
    city = await _storage(request).get_city_by_slug(slug)
    if city is None:
        raise CityNotFound("City not found")
    return city.model_dump(mode="json", by_alias=True)


@app.get("/api/itinerary")
async def get_itinerary(
    request: Request,
    city: str = Query(...),
    days: int = Query(...),
    use_ai: bool = Query(True, alias="useAI"),
    skip_ai: bool = Query(False, alias="skipAI"),
) -> Dict[str, Any]:
    """Primary endpoint consumed by the itinerary page."""
    if days < MIN_DAYS or days > MAX_DAYS:
        return JSONResponse(status_code=400, content={"message": f"Days must be between {MIN_DAYS} and {MAX_DAYS}"})

    itinerary = await orchestrate_itinerary(
        _storage(request),
        city,
        days,
        use_ai=use_ai,
        skip_ai=skip_ai,
    )
    return itinerary.to_payload()
