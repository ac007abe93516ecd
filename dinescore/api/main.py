"""
FastAPI application serving aggregated restaurant details to the browser client.
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from dinescore.errors import PlaceIdValidationError, PrimaryLookupFailure
from dinescore.models import PlaceSuggestion, RestaurantDetail, Review
from dinescore.processing.restaurant_service import RestaurantService
from dinescore.utils.config import get_settings
from dinescore.utils.logger import app_logger

API_VERSION = "1.0.0"


# Pydantic models
class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1, description="Restaurant name or Google place id")


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class AutocompleteRequest(BaseModel):
    input: str = Field(..., min_length=1, description="Partial restaurant name typed by the user")
    location: Coordinates


class AutocompleteResponse(BaseModel):
    suggestions: List[PlaceSuggestion]


class AnalyzeMoreRequest(BaseModel):
    reviews: List[Review] = Field(default_factory=list)


class AnalyzeMoreResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    detailed_summary: str = Field(..., alias="detailedSummary")


class CompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    place_id_1: str = Field(..., min_length=1, alias="placeId1")
    place_id_2: str = Field(..., min_length=1, alias="placeId2")


class CompareResponse(BaseModel):
    comparison: str
    restaurants: List[RestaurantDetail]


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    services: Dict[str, str]
    cache: Dict[str, Any]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the restaurant service on startup and release Redis on shutdown."""
    app_logger.info("🚀 Starting DineScore API...")
    app.state.service = RestaurantService.from_settings(get_settings())
    app_logger.info("✅ API startup completed")

    yield

    await app.state.service.close()
    app_logger.info("✅ API shutdown completed")


app = FastAPI(
    title="DineScore API",
    description="Restaurant ratings and reviews fused from Google, Yelp and TripAdvisor",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_restaurant_service(request: Request) -> RestaurantService:
    return request.app.state.service


@app.exception_handler(PlaceIdValidationError)
async def place_id_validation_handler(request: Request, exc: PlaceIdValidationError):
    app_logger.warning(f"Rejected place id {exc.place_id!r}")
    return JSONResponse(status_code=400, content={"message": str(exc)})


@app.exception_handler(PrimaryLookupFailure)
async def primary_lookup_handler(request: Request, exc: PrimaryLookupFailure):
    return JSONResponse(status_code=404, content={"message": "Restaurant not found"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    app_logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/health", response_model=HealthResponse)
async def health_check(service: RestaurantService = Depends(get_restaurant_service)):
    """Report which providers are configured and how the cache is doing."""
    settings = service.settings
    configured = {
        "google": settings.google_api_key,
        "yelp": settings.yelp_api_key,
        "tripadvisor": settings.tripadvisor_api_key,
        "openai": settings.openai_api_key,
    }
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        version=API_VERSION,
        services={name: "configured" if key else "missing_key" for name, key in configured.items()},
        cache=service.cache.get_stats(),
    )


@app.get("/restaurant/{place_id}", response_model=RestaurantDetail)
async def get_restaurant(place_id: str, service: RestaurantService = Depends(get_restaurant_service)):
    """Fused ratings, reviews, photos and summary for a Google place id."""
    return await service.get_restaurant(place_id)


@app.post("/restaurant/search", response_model=RestaurantDetail)
async def search_restaurant(request: SearchRequest, service: RestaurantService = Depends(get_restaurant_service)):
    """Resolve a restaurant name to a place and return its details."""
    return await service.search_restaurant(request.query)


@app.delete("/restaurant/{place_id}/cache")
async def invalidate_restaurant(place_id: str, service: RestaurantService = Depends(get_restaurant_service)):
    """Drop a cached restaurant so the next request refetches every provider."""
    return {"deleted": await service.invalidate(place_id)}


@app.post("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(request: AutocompleteRequest, service: RestaurantService = Depends(get_restaurant_service)):
    suggestions = await service.autocomplete(request.input, request.location.lat, request.location.lng)
    return AutocompleteResponse(suggestions=suggestions)


@app.post("/analyze-more", response_model=AnalyzeMoreResponse, response_model_by_alias=True)
async def analyze_more(request: AnalyzeMoreRequest, service: RestaurantService = Depends(get_restaurant_service)):
    """Detailed review analysis for the "Analyze More" button."""
    if not request.reviews:
        return JSONResponse(status_code=400, content={"message": "No reviews provided to analyze."})
    return AnalyzeMoreResponse(detailed_summary=await service.analyze_more(request.reviews))


@app.post("/compare-restaurants", response_model=CompareResponse)
async def compare_restaurants(request: CompareRequest, service: RestaurantService = Depends(get_restaurant_service)):
    """Side-by-side details and an LLM recommendation for two restaurants."""
    result = await service.compare(request.place_id_1, request.place_id_2)
    return CompareResponse(comparison=result.comparison, restaurants=[result.first, result.second])


@app.get("/")
async def root():
    return {"message": "DineScore API", "version": API_VERSION, "status": "running"}
