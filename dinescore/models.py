"""
Domain models shared by the provider clients, the aggregator and the API.
"""
import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dinescore.errors import PlaceIdValidationError

_PLACE_ID_BODY = re.compile(r"^[A-Za-z0-9_\-]+$")


class Platform(str, Enum):
    """Review providers known to the aggregator."""
    GOOGLE = "Google"
    YELP = "Yelp"
    TRIPADVISOR = "TripAdvisor"


class _CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON for the browser client."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Review(_CamelModel):
    platform: Platform
    author: str = ""
    text: str = ""
    rating: float = Field(..., ge=0.0, le=5.0)


class ProviderResult(_CamelModel):
    """Normalized output of one provider client."""
    platform: Platform
    reviews: List[Review] = Field(default_factory=list)
    rating: Optional[float] = None
    review_count: int = Field(0, ge=0)

    @classmethod
    def empty(cls, platform: Platform) -> "ProviderResult":
        """Zero-value result used whenever a provider degrades."""
        return cls(platform=platform)


class FusedReviewSet(_CamelModel):
    reviews: List[Review] = Field(default_factory=list)
    rating: Optional[float] = None
    reviews_count: int = Field(0, ge=0)


class PlaceRecord(_CamelModel):
    """Core attributes of a restaurant from the primary places provider."""
    place_id: str
    name: str
    address: str = ""
    rating: Optional[float] = None
    review_count: int = Field(0, ge=0)
    photo_references: List[str] = Field(default_factory=list)


class Photo(_CamelModel):
    url: str


class RestaurantDetail(_CamelModel):
    """The unit served to the client and persisted in the cache."""
    place_id: str
    name: str
    address: str = ""
    rating: Optional[float] = None
    reviews_count: int = 0
    reviews: List[Review] = Field(default_factory=list)
    photos: List[Photo] = Field(default_factory=list)
    summary: str = ""


class PlaceSuggestion(_CamelModel):
    description: str
    place_id: str


def looks_like_place_id(identity: str, prefix: str) -> bool:
    """True when the identity carries the place id prefix."""
    return identity.strip().startswith(prefix)


def validate_place_id(place_id: str, prefix: str = "ChIJ") -> str:
    """Return the stripped place id or raise PlaceIdValidationError."""
    candidate = (place_id or "").strip()
    body = candidate[len(prefix):]
    if not candidate.startswith(prefix) or not _PLACE_ID_BODY.match(body):
        raise PlaceIdValidationError(place_id, prefix)
    return candidate
