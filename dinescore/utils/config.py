"""
Configuration management for the DineScore review aggregation service.
"""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    google_api_key: str = Field("", description="Google Places API key")
    yelp_api_key: str = Field("", description="Yelp Fusion API key")
    tripadvisor_api_key: str = Field("", description="TripAdvisor Content API key")
    openai_api_key: str = Field("", description="OpenAI API key")

    # Redis
    redis_url: str = Field("redis://localhost:6379", description="Redis URL")
    cache_ttl_seconds: int = Field(7 * 24 * 3600, description="Lifetime of a cached restaurant")

    # Application
    environment: str = Field("development", description="Environment")
    log_level: str = Field("INFO", description="Log level")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # OpenAI Configuration
    openai_model: str = Field("gpt-3.5-turbo", description="OpenAI model")
    max_tokens: int = Field(800, description="Max tokens")
    temperature: float = Field(0.7, description="Temperature")

    # Provider Configuration
    max_reviews_per_provider: int = Field(25, description="Max reviews kept per provider")
    max_photos: int = Field(5, description="Max photo URLs per restaurant")
    place_id_prefix: str = Field("ChIJ", description="Required prefix of a Google place id")
    request_timeout_seconds: float = Field(10.0, description="Timeout for a single provider request")
    autocomplete_radius_m: int = Field(50000, description="Autocomplete search radius in meters")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
