"""
Response schemas for the three review providers.

Each provider payload is validated against these models before it is
normalized, so a changed or truncated response fails fast as a
pydantic.ValidationError instead of leaking missing values into the
rating arithmetic.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


# Google Places

class GooglePhoto(BaseModel):
    photo_reference: str


class GoogleReview(BaseModel):
    author_name: str = ""
    text: str = ""
    rating: float


class GooglePlace(BaseModel):
    place_id: Optional[str] = None
    name: str = ""
    formatted_address: str = ""
    rating: Optional[float] = None
    user_ratings_total: int = 0
    photos: List[GooglePhoto] = Field(default_factory=list)
    reviews: List[GoogleReview] = Field(default_factory=list)


class GoogleDetailsResponse(BaseModel):
    status: str
    result: Optional[GooglePlace] = None
    error_message: Optional[str] = None


class GoogleTextSearchResponse(BaseModel):
    status: str
    results: List[GooglePlace] = Field(default_factory=list)
    error_message: Optional[str] = None


class GooglePrediction(BaseModel):
    description: str
    place_id: str


class GoogleAutocompleteResponse(BaseModel):
    status: str
    predictions: List[GooglePrediction] = Field(default_factory=list)
    error_message: Optional[str] = None


# Yelp Fusion

class YelpBusiness(BaseModel):
    id: str
    name: str = ""
    rating: Optional[float] = None
    review_count: int = 0


class YelpSearchResponse(BaseModel):
    businesses: List[YelpBusiness] = Field(default_factory=list)


class YelpUser(BaseModel):
    name: str = ""


class YelpReview(BaseModel):
    text: str = ""
    rating: float
    user: YelpUser = Field(default_factory=YelpUser)


class YelpReviewsResponse(BaseModel):
    reviews: List[YelpReview] = Field(default_factory=list)


# TripAdvisor Content API

class TripAdvisorLocation(BaseModel):
    location_id: str
    name: str = ""
    num_reviews: int = 0


class TripAdvisorSearchResponse(BaseModel):
    data: List[TripAdvisorLocation] = Field(default_factory=list)


class TripAdvisorUser(BaseModel):
    username: str = ""
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.username


class TripAdvisorReview(BaseModel):
    text: str = ""
    rating: float
    user: TripAdvisorUser = Field(default_factory=TripAdvisorUser)


class TripAdvisorReviewsResponse(BaseModel):
    data: List[TripAdvisorReview] = Field(default_factory=list)


class TripAdvisorDetails(BaseModel):
    location_id: Optional[str] = None
    name: str = ""
    rating: Optional[float] = None
    num_reviews: int = 0
