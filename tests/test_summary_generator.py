from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from dinescore.errors import SummarizationUnavailable
from dinescore.models import Platform, Review
from dinescore.processing.summary_generator import (
    ANALYSIS_UNAVAILABLE,
    COMPARISON_UNAVAILABLE,
    NO_REVIEWS_SUMMARY,
    NOT_ENOUGH_REVIEWS_COMPARISON,
    SUMMARY_UNAVAILABLE,
    SummaryGenerator,
    SummaryMode,
    format_reviews,
)
from tests.factories import make_reviews

REVIEWS = [
    Review(platform=Platform.GOOGLE, author="Ana", text="Great pasta", rating=5),
    Review(platform=Platform.YELP, author="Ben", text="Slow service", rating=3.5),
]


def _mock_openai_response(content):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def _generator(settings, content="  Guests love the pasta.  ", error=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        client.chat.completions.create = AsyncMock(return_value=_mock_openai_response(content))
    return SummaryGenerator(settings, client=client)


def test_format_reviews():
    assert format_reviews(REVIEWS) == "Ana (5★): Great pasta\nBen (3.5★): Slow service"


@pytest.mark.asyncio
async def test_empty_reviews_skip_the_model(settings):
    generator = _generator(settings)

    summary = await generator.summarize([])

    assert summary == NO_REVIEWS_SUMMARY
    generator.client.chat.completions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_brief_summary(settings):
    generator = _generator(settings)

    summary = await generator.summarize(REVIEWS)

    assert summary == "Guests love the pasta."
    kwargs = generator.client.chat.completions.create.await_args.kwargs
    assert kwargs["model"] == settings.openai_model
    assert kwargs["temperature"] == settings.temperature
    system, user = kwargs["messages"]
    assert system["content"] == "You are a helpful assistant that summarizes restaurant reviews."
    assert "Ana (5★): Great pasta" in user["content"]


@pytest.mark.asyncio
async def test_detailed_mode_uses_analysis_prompt(settings):
    generator = _generator(settings, content="Detailed analysis")

    summary = await generator.summarize(REVIEWS, SummaryMode.DETAILED)

    assert summary == "Detailed analysis"
    system = generator.client.chat.completions.create.await_args.kwargs["messages"][0]
    assert "in detail" in system["content"]


@pytest.mark.asyncio
async def test_api_error_returns_placeholder(settings):
    generator = _generator(settings, error=OpenAIError("rate limited"))

    assert await generator.summarize(REVIEWS) == SUMMARY_UNAVAILABLE
    assert await generator.summarize(REVIEWS, SummaryMode.DETAILED) == ANALYSIS_UNAVAILABLE


@pytest.mark.asyncio
async def test_empty_completion_returns_placeholder(settings):
    generator = _generator(settings, content="   ")

    assert await generator.summarize(REVIEWS) == SUMMARY_UNAVAILABLE


@pytest.mark.asyncio
async def test_unconfigured_client_returns_placeholder(settings):
    generator = SummaryGenerator(settings)

    assert generator.client is None
    assert await generator.summarize(REVIEWS) == SUMMARY_UNAVAILABLE


@pytest.mark.asyncio
async def test_compare_two_restaurants(settings):
    generator = _generator(settings, content="Pick Chez Test.")

    result = await generator.compare(
        "Chez Test", make_reviews(Platform.GOOGLE, 2), "Chez Toast", make_reviews(Platform.YELP, 1)
    )

    assert result == "Pick Chez Test."
    user = generator.client.chat.completions.create.await_args.kwargs["messages"][1]["content"]
    assert "Restaurant 1 (Chez Test):" in user
    assert "Restaurant 2 (Chez Toast):" in user


@pytest.mark.asyncio
async def test_compare_without_reviews_skips_the_model(settings):
    generator = _generator(settings)

    assert await generator.compare("A", [], "B", []) == NOT_ENOUGH_REVIEWS_COMPARISON
    generator.client.chat.completions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_compare_failure_returns_placeholder(settings):
    generator = _generator(settings, error=OpenAIError("down"))

    result = await generator.compare("A", make_reviews(Platform.GOOGLE, 1), "B", [])

    assert result == COMPARISON_UNAVAILABLE


@pytest.mark.asyncio
async def test_generate_summary_reports_failure(settings):
    generator = _generator(settings, error=OpenAIError("outage"))

    with pytest.raises(SummarizationUnavailable):
        await generator.generate_summary(REVIEWS)


@pytest.mark.asyncio
async def test_generate_summary_without_reviews_needs_no_model(settings):
    generator = _generator(settings, error=OpenAIError("outage"))

    assert await generator.generate_summary([]) == NO_REVIEWS_SUMMARY
    generator.client.chat.completions.create.assert_not_awaited()
