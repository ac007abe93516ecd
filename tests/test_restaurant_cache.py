import json

import pytest

from dinescore.data_collection.cache_manager import RestaurantCache
from dinescore.models import Photo, Platform, RestaurantDetail
from tests.factories import VALID_PLACE_ID, FakeRedis, make_reviews

DETAIL = RestaurantDetail(
    place_id=VALID_PLACE_ID,
    name="Chez Test",
    address="12 Main St",
    rating=3.67,
    reviews_count=150,
    reviews=make_reviews(Platform.GOOGLE, 2) + make_reviews(Platform.TRIPADVISOR, 1),
    photos=[Photo(url="https://example.com/p.jpg")],
    summary="Guests love the pasta.",
)


@pytest.mark.asyncio
async def test_put_then_get_returns_identical_detail(settings, fake_redis):
    cache = RestaurantCache(settings, redis_client=fake_redis)

    assert await cache.put(VALID_PLACE_ID, DETAIL) is True
    assert await cache.get(VALID_PLACE_ID) == DETAIL


@pytest.mark.asyncio
async def test_put_uses_configured_ttl_and_camel_case_json(settings, fake_redis):
    cache = RestaurantCache(settings, redis_client=fake_redis)

    await cache.put(VALID_PLACE_ID, DETAIL)

    key = f"restaurant:{VALID_PLACE_ID}"
    assert fake_redis.ttls[key] == 600
    stored = json.loads(fake_redis.store[key])
    assert stored["reviewsCount"] == 150
    assert stored["placeId"] == VALID_PLACE_ID


@pytest.mark.asyncio
async def test_miss_and_stats(settings, fake_redis):
    cache = RestaurantCache(settings, redis_client=fake_redis)

    assert await cache.get("ChIJunknown") is None
    await cache.put(VALID_PLACE_ID, DETAIL)
    await cache.get(VALID_PLACE_ID)

    stats = cache.get_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 50.0


@pytest.mark.asyncio
async def test_unreadable_entry_is_a_miss(settings, fake_redis):
    cache = RestaurantCache(settings, redis_client=fake_redis)
    fake_redis.store[f"restaurant:{VALID_PLACE_ID}"] = '{"name": 42'

    assert await cache.get(VALID_PLACE_ID) is None


@pytest.mark.asyncio
async def test_redis_outage_degrades(settings):
    cache = RestaurantCache(settings, redis_client=FakeRedis(fail=True))

    assert await cache.get(VALID_PLACE_ID) is None
    assert await cache.put(VALID_PLACE_ID, DETAIL) is False
    assert await cache.delete(VALID_PLACE_ID) is False


@pytest.mark.asyncio
async def test_delete(settings, fake_redis):
    cache = RestaurantCache(settings, redis_client=fake_redis)
    await cache.put(VALID_PLACE_ID, DETAIL)

    assert await cache.delete(VALID_PLACE_ID) is True
    assert await cache.get(VALID_PLACE_ID) is None
    assert await cache.delete(VALID_PLACE_ID) is False


@pytest.mark.asyncio
async def test_close(settings, fake_redis):
    cache = RestaurantCache(settings, redis_client=fake_redis)

    await cache.close()

    assert fake_redis.closed
