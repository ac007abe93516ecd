#!/usr/bin/env python3
"""
Fetch one restaurant through the full pipeline and print it as JSON.
Runs: cache → Google Places → Yelp + TripAdvisor → OpenAI summary → cache
"""
import argparse
import asyncio
import sys

from dinescore.errors import PlaceIdValidationError, PrimaryLookupFailure
from dinescore.models import looks_like_place_id
from dinescore.processing.restaurant_service import RestaurantService
from dinescore.utils.config import get_settings


def parse_command_line_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Fetch fused restaurant details")
    parser.add_argument("restaurant", help="Google place id (ChIJ...) or restaurant name")
    parser.add_argument("--refresh", action="store_true", help="Invalidate the cached entry first")
    args = parser.parse_args()
    if args.refresh and not looks_like_place_id(args.restaurant, get_settings().place_id_prefix):
        parser.error("--refresh needs a place id")
    return args


async def fetch(restaurant: str, refresh: bool) -> str:
    service = RestaurantService.from_settings(get_settings())
    try:
        if refresh:
            await service.invalidate(restaurant)
        detail = await service.search_restaurant(restaurant)
        return detail.model_dump_json(by_alias=True, indent=2)
    finally:
        await service.close()


def main():
    args = parse_command_line_args()
    try:
        print(asyncio.run(fetch(args.restaurant, args.refresh)))
    except KeyboardInterrupt:
        print("\n⚠️ Interrupted by user")
        sys.exit(1)
    except PlaceIdValidationError as e:
        print(f"❌ {e}")
        sys.exit(2)
    except PrimaryLookupFailure as e:
        print(f"❌ {e}")
        print("\n🔧 Troubleshooting:")
        print("1. Check your .env file has GOOGLE_API_KEY set")
        print("2. Try the restaurant name together with its city")
        sys.exit(1)


if __name__ == "__main__":
    main()
