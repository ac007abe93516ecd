"""
Review summarization and restaurant comparison using OpenAI chat completions.
"""
from enum import Enum
from typing import Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from dinescore.errors import SummarizationUnavailable
from dinescore.models import Review
from dinescore.utils.config import Settings
from dinescore.utils.logger import app_logger

NO_REVIEWS_SUMMARY = "No reviews available to summarize."
NOT_ENOUGH_REVIEWS_COMPARISON = "Not enough reviews are available to compare these restaurants."
SUMMARY_UNAVAILABLE = "Unable to generate a summary at this time."
ANALYSIS_UNAVAILABLE = "Unable to generate a detailed analysis at this time."
COMPARISON_UNAVAILABLE = "Unable to compare restaurants at this time."


class SummaryMode(str, Enum):
    BRIEF = "brief"
    DETAILED = "detailed"


PROMPTS = {
    SummaryMode.BRIEF: {
        "system": "You are a helpful assistant that summarizes restaurant reviews.",
        "user": (
            "You are an assistant that summarizes customer reviews for restaurants. "
            "Based on the following reviews, provide a clear, concise, and overall summary of the "
            "restaurant's performance, including key themes, common feedback, strengths, and weaknesses. "
            "Do not summarize each review individually, but rather provide a holistic view of what "
            "customers are saying overall:\n{reviews}"
        ),
        "unavailable": SUMMARY_UNAVAILABLE,
    },
    SummaryMode.DETAILED: {
        "system": "You are a helpful assistant that analyzes restaurant reviews in detail.",
        "user": (
            "Here are some reviews for a restaurant. Please analyze them in greater detail, highlighting "
            "the most common themes, strengths, weaknesses, and any notable patterns. Answer in plain "
            "text without titles, lists or other formatting:\n\n{reviews}"
        ),
        "unavailable": ANALYSIS_UNAVAILABLE,
    },
}

COMPARE_SYSTEM_PROMPT = "You are an assistant that compares restaurant reviews."
COMPARE_USER_PROMPT = (
    "Compare these two restaurants based on customer feedback. Give a recommendation to the user "
    "based on them. Answer in plain text without any formatting:\n\n{restaurants}"
)


def format_reviews(reviews: Sequence[Review]) -> str:
    """One line per review: author, star rating and text."""
    return "\n".join(f"{r.author} ({r.rating:g}★): {r.text}" for r in reviews)


class SummaryGenerator:
    """Turns review lists into prose.

    summarize and compare never raise; generate_summary lets the caller see a failure.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self.client = client
        if self.client is None and settings.openai_api_key:
            self.client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=settings.request_timeout_seconds * 3,
            )
        if self.client is None:
            app_logger.warning("OpenAI API key not configured, summaries will use placeholders")

    async def _generate(self, system_prompt: str, user_prompt: str) -> str:
        """Single chat completion. Raises SummarizationUnavailable."""
        if self.client is None:
            raise SummarizationUnavailable("OpenAI client not configured")
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
            )
            content = response.choices[0].message.content
        except (OpenAIError, IndexError, AttributeError) as e:
            raise SummarizationUnavailable(f"{type(e).__name__}: {e}") from e
        if not content or not content.strip():
            raise SummarizationUnavailable("empty completion")
        return content.strip()

    async def generate_summary(self, reviews: Sequence[Review], mode: SummaryMode = SummaryMode.BRIEF) -> str:
        """Summarize reviews. Raises SummarizationUnavailable when the model call fails."""
        if not reviews:
            return NO_REVIEWS_SUMMARY

        prompts = PROMPTS[mode]
        summary = await self._generate(prompts["system"], prompts["user"].format(reviews=format_reviews(reviews)))
        app_logger.info(f"✅ {mode.value.capitalize()} summary generated ({len(summary)} chars from {len(reviews)} reviews)")
        return summary

    async def summarize(self, reviews: Sequence[Review], mode: SummaryMode = SummaryMode.BRIEF) -> str:
        """Summarize reviews; placeholder text when the call fails."""
        try:
            return await self.generate_summary(reviews, mode)
        except SummarizationUnavailable as e:
            app_logger.error(f"❌ Error generating {mode.value} summary: {e}")
            return PROMPTS[mode]["unavailable"]

    async def compare(
        self,
        first_name: str,
        first_reviews: Sequence[Review],
        second_name: str,
        second_reviews: Sequence[Review],
    ) -> str:
        """Plain-text recommendation between two restaurants."""
        if not first_reviews and not second_reviews:
            return NOT_ENOUGH_REVIEWS_COMPARISON

        restaurants = (
            f"Restaurant 1 ({first_name}):\n{format_reviews(first_reviews)}\n\n"
            f"Restaurant 2 ({second_name}):\n{format_reviews(second_reviews)}"
        )
        try:
            return await self._generate(COMPARE_SYSTEM_PROMPT, COMPARE_USER_PROMPT.format(restaurants=restaurants))
        except SummarizationUnavailable as e:
            app_logger.error(f"❌ Error comparing {first_name} and {second_name}: {e}")
            return COMPARISON_UNAVAILABLE
