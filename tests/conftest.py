import pytest

from dinescore.utils.config import Settings
from tests.factories import FakeRedis


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_api_key="google-key",
        yelp_api_key="yelp-key",
        tripadvisor_api_key="tripadvisor-key",
        openai_api_key="",
        max_reviews_per_provider=25,
        cache_ttl_seconds=600,
    )


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
