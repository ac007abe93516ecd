"""
Provider clients and the restaurant cache.
"""
from .cache_manager import RestaurantCache
from .google_places_client import GooglePlacesClient
from .tripadvisor_client import TripAdvisorClient
from .yelp_client import YelpClient

__all__ = [
    'RestaurantCache',
    'GooglePlacesClient',
    'TripAdvisorClient',
    'YelpClient',
]
