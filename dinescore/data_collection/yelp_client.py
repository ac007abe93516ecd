"""
Yelp Fusion integration for business ratings and reviews.
"""
from typing import Dict, List, Optional

from dinescore.data_collection.base_client import BaseProviderClient
from dinescore.data_collection.schemas import YelpReviewsResponse, YelpSearchResponse
from dinescore.models import Platform, ProviderResult, Review
from dinescore.utils.logger import app_logger


def normalize_yelp_reviews(data: YelpReviewsResponse, limit: int) -> List[Review]:
    return [
        Review(platform=Platform.YELP, author=r.user.name, text=r.text, rating=r.rating)
        for r in data.reviews[:limit]
    ]


class YelpClient(BaseProviderClient):
    """Client for the Yelp Fusion business search and reviews endpoints."""

    platform = Platform.YELP
    base_url = "https://api.yelp.com/v3"

    @property
    def enabled(self) -> bool:
        return bool(self.settings.yelp_api_key)

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.yelp_api_key}",
            "Accept": "application/json",
        }

    async def fetch_reviews(self, name: str, location: str, max_reviews: Optional[int] = None) -> ProviderResult:
        """Match the restaurant by name and location, then read its reviews."""
        if not self.enabled:
            app_logger.warning("Yelp API key not configured")
            return ProviderResult.empty(self.platform)

        limit = self.max_reviews if max_reviews is None else max_reviews
        try:
            payload = await self._get_json(
                "/businesses/search", {"term": name, "location": location, "limit": 1}
            )
            search = YelpSearchResponse.model_validate(payload)
            if not search.businesses:
                app_logger.warning(f"No Yelp results found for {name} in {location}")
                return ProviderResult.empty(self.platform)

            business = search.businesses[0]
            # The standard plan only exposes a handful of reviews per business
            payload = await self._get_json(f"/businesses/{business.id}/reviews")
            reviews = normalize_yelp_reviews(YelpReviewsResponse.model_validate(payload), limit)
        except Exception as e:
            app_logger.warning(f"Error in Yelp details for {name}: {e}")
            return ProviderResult.empty(self.platform)

        app_logger.info(f"Yelp matched {business.name or name}: {len(reviews)} reviews")
        return ProviderResult(
            platform=self.platform,
            reviews=reviews,
            rating=business.rating,
            review_count=business.review_count,
        )
