"""
Restaurant pipeline: validation, cache, assembly, summarization.
"""
import asyncio
from dataclasses import dataclass
from typing import List, Sequence

from dinescore.data_collection.cache_manager import RestaurantCache
from dinescore.data_collection.google_places_client import GooglePlacesClient
from dinescore.data_collection.tripadvisor_client import TripAdvisorClient
from dinescore.data_collection.yelp_client import YelpClient
from dinescore.errors import SummarizationUnavailable
from dinescore.models import (
    PlaceSuggestion,
    RestaurantDetail,
    Review,
    looks_like_place_id,
    validate_place_id,
)
from dinescore.processing.details_assembler import DetailsAssembler
from dinescore.processing.review_aggregator import ReviewAggregator
from dinescore.processing.summary_generator import SUMMARY_UNAVAILABLE, SummaryGenerator, SummaryMode
from dinescore.utils.config import Settings
from dinescore.utils.logger import app_logger


@dataclass
class Comparison:
    first: RestaurantDetail
    second: RestaurantDetail
    comparison: str


class RestaurantService:
    """Entry point for every restaurant operation exposed by the API."""

    def __init__(
        self,
        settings: Settings,
        google_client: GooglePlacesClient,
        assembler: DetailsAssembler,
        summary_generator: SummaryGenerator,
        cache: RestaurantCache,
    ):
        self.settings = settings
        self.google_client = google_client
        self.assembler = assembler
        self.summary_generator = summary_generator
        self.cache = cache

    @classmethod
    def from_settings(cls, settings: Settings) -> "RestaurantService":
        """Wire the production collaborators from configuration."""
        google_client = GooglePlacesClient(settings)
        aggregator = ReviewAggregator(google_client, YelpClient(settings), TripAdvisorClient(settings))
        return cls(
            settings=settings,
            google_client=google_client,
            assembler=DetailsAssembler(settings, google_client, aggregator),
            summary_generator=SummaryGenerator(settings),
            cache=RestaurantCache(settings),
        )

    async def get_restaurant(self, place_id: str) -> RestaurantDetail:
        """Cached restaurant details for a place id.

        Raises PlaceIdValidationError before any I/O for a malformed id and
        PrimaryLookupFailure when the place cannot be resolved.
        """
        place_id = validate_place_id(place_id, self.settings.place_id_prefix)

        cached = await self.cache.get(place_id)
        if cached is not None:
            app_logger.info(f"Using cached restaurant data for {place_id}")
            return cached

        detail = await self.assembler.assemble(place_id)
        try:
            summary = await self.summary_generator.generate_summary(detail.reviews, SummaryMode.BRIEF)
        except SummarizationUnavailable as e:
            app_logger.error(f"❌ Error generating summary for {place_id}: {e}")
            app_logger.warning(f"Restaurant {place_id} will not be cached until its summary is available")
            return detail.model_copy(update={"summary": SUMMARY_UNAVAILABLE})

        detail = detail.model_copy(update={"summary": summary})
        if not await self.cache.put(place_id, detail):
            app_logger.warning(f"Restaurant {place_id} was not cached")
        return detail

    async def search_restaurant(self, query: str) -> RestaurantDetail:
        """Resolve free text (or a place id) to restaurant details."""
        query = query.strip()
        if looks_like_place_id(query, self.settings.place_id_prefix):
            return await self.get_restaurant(query)

        place = await self.google_client.search_by_name(query)
        app_logger.info(f"🔍 Resolved {query!r} to {place.name} ({place.place_id})")
        return await self.get_restaurant(place.place_id)

    async def autocomplete(self, text: str, lat: float, lng: float) -> List[PlaceSuggestion]:
        return await self.google_client.autocomplete(text, lat, lng)

    async def analyze_more(self, reviews: Sequence[Review]) -> str:
        """Detailed analysis of reviews the client already holds."""
        return await self.summary_generator.summarize(reviews, SummaryMode.DETAILED)

    async def compare(self, first_place_id: str, second_place_id: str) -> Comparison:
        first_place_id = validate_place_id(first_place_id, self.settings.place_id_prefix)
        second_place_id = validate_place_id(second_place_id, self.settings.place_id_prefix)

        tasks = [
            asyncio.ensure_future(self.get_restaurant(first_place_id)),
            asyncio.ensure_future(self.get_restaurant(second_place_id)),
        ]
        try:
            first, second = await asyncio.gather(*tasks)
        except BaseException:
            # One lookup failed, stop the other before it touches providers or the cache
            for task in tasks:
                task.cancel()
            raise
        comparison = await self.summary_generator.compare(first.name, first.reviews, second.name, second.reviews)
        return Comparison(first=first, second=second, comparison=comparison)

    async def invalidate(self, place_id: str) -> bool:
        place_id = validate_place_id(place_id, self.settings.place_id_prefix)
        return await self.cache.delete(place_id)

    async def close(self):
        await self.cache.close()
