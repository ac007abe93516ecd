"""
DineScore: restaurant ratings and reviews fused from Google, Yelp and TripAdvisor.
"""
__version__ = "1.0.0"
