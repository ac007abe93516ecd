"""
Google Places integration: primary restaurant lookup, Google reviews and
place autocomplete.
"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from dinescore.data_collection.base_client import BaseProviderClient
from dinescore.data_collection.schemas import (
    GoogleAutocompleteResponse,
    GoogleDetailsResponse,
    GooglePlace,
    GoogleTextSearchResponse,
)
from dinescore.errors import PrimaryLookupFailure, ProviderUnavailable
from dinescore.models import PlaceRecord, PlaceSuggestion, Platform, ProviderResult, Review
from dinescore.utils.logger import app_logger

DETAILS_FIELDS = "name,formatted_address,rating,user_ratings_total,photos"
REVIEW_FIELDS = "rating,user_ratings_total,reviews"
PHOTO_MAX_WIDTH = 400


def normalize_google_reviews(place: GooglePlace, limit: int) -> List[Review]:
    """Map Google review objects onto the common Review shape."""
    return [
        Review(platform=Platform.GOOGLE, author=r.author_name, text=r.text, rating=r.rating)
        for r in place.reviews[:limit]
    ]


def normalize_google_place(place: GooglePlace, place_id: str) -> PlaceRecord:
    return PlaceRecord(
        place_id=place.place_id or place_id,
        name=place.name,
        address=place.formatted_address,
        rating=place.rating,
        review_count=place.user_ratings_total,
        photo_references=[p.photo_reference for p in place.photos],
    )


class GooglePlacesClient(BaseProviderClient):
    """Client for the Google Places web service."""

    platform = Platform.GOOGLE
    base_url = "https://maps.googleapis.com/maps/api/place"

    @property
    def enabled(self) -> bool:
        return bool(self.settings.google_api_key)

    def _with_key(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {**params, "key": self.settings.google_api_key}

    async def _details(self, place_id: str, fields: str) -> GooglePlace:
        payload = await self._get_json(
            "/details/json", self._with_key({"place_id": place_id, "fields": fields})
        )
        data = GoogleDetailsResponse.model_validate(payload)
        if data.status != "OK" or data.result is None:
            raise ProviderUnavailable(self.platform.value, f"status {data.status} {data.error_message or ''}".strip())
        return data.result

    async def lookup_by_id(self, place_id: str) -> PlaceRecord:
        """Fetch the core attributes of a place. Raises PrimaryLookupFailure."""
        if not self.enabled:
            raise PrimaryLookupFailure(place_id, "Places provider is not configured")
        try:
            place = await self._details(place_id, DETAILS_FIELDS)
        except (ProviderUnavailable, ValidationError) as e:
            app_logger.error(f"Failed to fetch restaurant details for {place_id}: {e}")
            raise PrimaryLookupFailure(place_id) from e
        return normalize_google_place(place, place_id)

    async def search_by_name(self, query: str) -> PlaceRecord:
        """Resolve free text to the best matching place. Raises PrimaryLookupFailure."""
        if not self.enabled:
            raise PrimaryLookupFailure(query, "Places provider is not configured")
        try:
            payload = await self._get_json("/textsearch/json", self._with_key({"query": query}))
            data = GoogleTextSearchResponse.model_validate(payload)
        except (ProviderUnavailable, ValidationError) as e:
            app_logger.error(f"Text search failed for {query!r}: {e}")
            raise PrimaryLookupFailure(query) from e

        hits = [r for r in data.results if r.place_id]
        if data.status != "OK" or not hits:
            app_logger.warning(f"No Google results for {query!r} (status {data.status})")
            raise PrimaryLookupFailure(query)
        return normalize_google_place(hits[0], hits[0].place_id)

    async def fetch_reviews(self, place_id: str, max_reviews: Optional[int] = None) -> ProviderResult:
        """Google reviews for a place; degrades to an empty result on any failure."""
        if not self.enabled:
            app_logger.warning("Google API key not configured")
            return ProviderResult.empty(self.platform)

        limit = self.max_reviews if max_reviews is None else max_reviews
        try:
            place = await self._details(place_id, REVIEW_FIELDS)
            reviews = normalize_google_reviews(place, limit)
        except Exception as e:
            app_logger.warning(f"Error in Google reviews for {place_id}: {e}")
            return ProviderResult.empty(self.platform)

        return ProviderResult(
            platform=self.platform,
            reviews=reviews,
            rating=place.rating,
            review_count=place.user_ratings_total,
        )

    async def autocomplete(self, text: str, lat: float, lng: float) -> List[PlaceSuggestion]:
        """Place predictions around a location; empty on failure."""
        if not self.enabled or not text.strip():
            return []
        params = self._with_key({
            "input": text,
            "location": f"{lat},{lng}",
            "radius": self.settings.autocomplete_radius_m,
        })
        try:
            payload = await self._get_json("/autocomplete/json", params)
            data = GoogleAutocompleteResponse.model_validate(payload)
        except Exception as e:
            app_logger.warning(f"Autocomplete failed for {text!r}: {e}")
            return []
        if data.status != "OK":
            return []
        return [PlaceSuggestion(description=p.description, place_id=p.place_id) for p in data.predictions]

    def photo_url(self, photo_reference: str) -> str:
        return (
            f"{self.base_url}/photo?maxwidth={PHOTO_MAX_WIDTH}"
            f"&photoreference={photo_reference}&key={self.settings.google_api_key}"
        )
