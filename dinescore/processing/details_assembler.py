"""
Assembles a RestaurantDetail from the primary place lookup and the fused reviews.
"""
from dinescore.data_collection.google_places_client import GooglePlacesClient
from dinescore.models import Photo, RestaurantDetail
from dinescore.processing.review_aggregator import ReviewAggregator
from dinescore.utils.config import Settings
from dinescore.utils.logger import app_logger


class DetailsAssembler:
    """Builds restaurant details; only a failed primary lookup is fatal."""

    def __init__(self, settings: Settings, google_client: GooglePlacesClient, aggregator: ReviewAggregator):
        self.settings = settings
        self.google_client = google_client
        self.aggregator = aggregator

    async def assemble(self, place_id: str) -> RestaurantDetail:
        """Look up the place and fuse its reviews. Raises PrimaryLookupFailure."""
        place = await self.google_client.lookup_by_id(place_id)
        fused = await self.aggregator.aggregate(
            place.place_id,
            place.name,
            place.address,
            place.rating,
            place.review_count,
        )
        photos = [
            Photo(url=self.google_client.photo_url(ref))
            for ref in place.photo_references[:self.settings.max_photos]
        ]

        app_logger.info(f"🍽️ Assembled {place.name}: {len(fused.reviews)} reviews, {len(photos)} photos")
        return RestaurantDetail(
            place_id=place.place_id,
            name=place.name,
            address=place.address,
            rating=fused.rating,
            reviews_count=fused.reviews_count,
            reviews=fused.reviews,
            photos=photos,
        )
