"""
Review aggregation and weighted rating fusion across the three providers.
"""
import asyncio
from typing import Iterable, List, Optional, Sequence, Tuple

from dinescore.data_collection.google_places_client import GooglePlacesClient
from dinescore.data_collection.tripadvisor_client import TripAdvisorClient
from dinescore.data_collection.yelp_client import YelpClient
from dinescore.models import FusedReviewSet, Platform, ProviderResult, Review
from dinescore.utils.logger import app_logger

RATING_PRECISION = 2


def fuse_ratings(sources: Iterable[Tuple[Optional[float], int]]) -> Tuple[Optional[float], int]:
    """Combine (rating, review_count) pairs into a review-count-weighted rating.

    Returns (rating, total_count). Sources without a rating contribute to the
    total count but not to the weighting. The rating is None when no rated
    source has any reviews.
    """
    sources = list(sources)
    total_count = sum(count for _, count in sources)
    weight_total = sum(count for rating, count in sources if rating is not None)

    if total_count == 0:
        return None, 0
    if weight_total == 0:
        return None, total_count

    fused = sum(rating * (count / weight_total) for rating, count in sources if rating is not None)
    return round(fused, RATING_PRECISION), total_count


def concatenate_reviews(results: Sequence[ProviderResult]) -> List[Review]:
    """Reviews in provider order, each provider's own order preserved."""
    return [review for result in results for review in result.reviews]


class ReviewAggregator:
    """Collects reviews from every provider and fuses them into one rating."""

    def __init__(
        self,
        google_client: GooglePlacesClient,
        yelp_client: YelpClient,
        tripadvisor_client: TripAdvisorClient,
    ):
        self.google_client = google_client
        self.yelp_client = yelp_client
        self.tripadvisor_client = tripadvisor_client

    async def collect(self, place_id: str, name: str, location: str) -> List[ProviderResult]:
        """Query the three providers concurrently, one result per provider."""
        platforms = [Platform.GOOGLE, Platform.YELP, Platform.TRIPADVISOR]
        outcomes = await asyncio.gather(
            self.google_client.fetch_reviews(place_id),
            self.yelp_client.fetch_reviews(name, location),
            self.tripadvisor_client.fetch_reviews(name, location),
            return_exceptions=True,
        )

        results = []
        for platform, outcome in zip(platforms, outcomes):
            if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, Exception):
                app_logger.error(f"{platform.value} client raised instead of degrading: {outcome}")
                outcome = ProviderResult.empty(platform)
            results.append(outcome)
        return results

    async def aggregate(
        self,
        place_id: str,
        name: str,
        location: str,
        primary_rating: Optional[float],
        primary_count: int,
    ) -> FusedReviewSet:
        """Fuse all providers for one restaurant.

        The Google rating and review count come from the primary lookup the
        caller already made; the Google reviews call only supplies review text.
        """
        google, yelp, tripadvisor = await self.collect(place_id, name, location)

        rating, total_count = fuse_ratings([
            (primary_rating, primary_count),
            (yelp.rating, yelp.review_count),
            (tripadvisor.rating, tripadvisor.review_count),
        ])
        reviews = concatenate_reviews([google, yelp, tripadvisor])

        if rating is None:
            app_logger.warning(f"No rated reviews available for {name} ({place_id})")
        else:
            app_logger.info(
                f"⭐ Fused rating for {name}: {rating} from {total_count} reviews "
                f"(Google {primary_count}, Yelp {yelp.review_count}, TripAdvisor {tripadvisor.review_count})"
            )

        return FusedReviewSet(reviews=reviews, rating=rating, reviews_count=total_count)
