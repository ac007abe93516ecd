"""
TripAdvisor Content API integration for location ratings and reviews.
"""
from typing import Any, Dict, List, Optional

from dinescore.data_collection.base_client import BaseProviderClient
from dinescore.data_collection.schemas import (
    TripAdvisorDetails,
    TripAdvisorReviewsResponse,
    TripAdvisorSearchResponse,
)
from dinescore.models import Platform, ProviderResult, Review
from dinescore.utils.logger import app_logger

# Address matching is exact on TripAdvisor and rarely lines up with Google's
# formatting, so only the first characters of the address are sent.
COARSE_LOCATION_CHARS = 2


def coarse_location(location: str) -> str:
    return (location or "")[:COARSE_LOCATION_CHARS]


def normalize_tripadvisor_reviews(data: TripAdvisorReviewsResponse, limit: int) -> List[Review]:
    return [
        Review(platform=Platform.TRIPADVISOR, author=r.user.display_name, text=r.text, rating=r.rating)
        for r in data.data[:limit]
    ]


class TripAdvisorClient(BaseProviderClient):
    """Client for the TripAdvisor location search, reviews and details endpoints."""

    platform = Platform.TRIPADVISOR
    base_url = "https://api.content.tripadvisor.com/api/v1"

    @property
    def enabled(self) -> bool:
        return bool(self.settings.tripadvisor_api_key)

    def _with_key(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {**(params or {}), "key": self.settings.tripadvisor_api_key}

    async def fetch_reviews(self, name: str, location: str, max_reviews: Optional[int] = None) -> ProviderResult:
        """Find the location by name, then read its reviews and rating details."""
        if not self.enabled:
            app_logger.warning("TripAdvisor API key not configured")
            return ProviderResult.empty(self.platform)

        limit = self.max_reviews if max_reviews is None else max_reviews
        try:
            payload = await self._get_json(
                "/location/search",
                self._with_key({"searchQuery": name, "address": coarse_location(location)}),
            )
            search = TripAdvisorSearchResponse.model_validate(payload)
            if not search.data:
                app_logger.warning(f"No TripAdvisor results found for {name}")
                return ProviderResult.empty(self.platform)

            location_id = search.data[0].location_id
            payload = await self._get_json(f"/location/{location_id}/reviews", self._with_key())
            reviews = normalize_tripadvisor_reviews(TripAdvisorReviewsResponse.model_validate(payload), limit)
            if not reviews:
                app_logger.warning(f"No reviews found for TripAdvisor location {location_id}")

            payload = await self._get_json(f"/location/{location_id}/details", self._with_key())
            details = TripAdvisorDetails.model_validate(payload)
        except Exception as e:
            app_logger.warning(f"Error in TripAdvisor details for {name}: {e}")
            return ProviderResult.empty(self.platform)

        return ProviderResult(
            platform=self.platform,
            reviews=reviews,
            rating=details.rating,
            review_count=details.num_reviews,
        )
