"""Meal analysis orchestration."""

import asyncio
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from meal_estimator.domain.errors import ErrorCode, MealAnalysisError
from meal_estimator.domain.nutrition import AggregateResult
from meal_estimator.services.aggregator import aggregate
from meal_estimator.services.lookup import IngredientLookupService

_SEGMENT_SEPARATORS = re.compile(r"[,\n]+")

_logger = logging.getLogger(__name__)


@dataclass
class AnalysisService:
    """Fan ingredient lookups out and aggregate the results."""

    lookup_service: IngredientLookupService

    async def analyze_ingredients(self, phrases: Sequence[str]) -> AggregateResult:
        """Estimate nutrition for an ordered list of ingredient phrases."""
        phrases = list(phrases)
        if not phrases:
            raise MealAnalysisError(ErrorCode.INPUT_EMPTY, "No meal text provided")

        # gather keeps input order and re-raises the first rate-limit error.
        outcomes = await asyncio.gather(
            *(self.lookup_service.lookup(phrase) for phrase in phrases)
        )
        aggregation = aggregate(phrases, outcomes)
        if aggregation.parsed_count == 0:
            raise MealAnalysisError(
                ErrorCode.INPUT_TOO_VAGUE,
                (
                    "Could not parse meal. "
                    "Please provide more specific ingredients and quantities."
                ),
                {"inputs": phrases},
            )

        _logger.info(
            "Meal analysis: phrases=%s parsed=%s confidence=%s",
            len(phrases),
            aggregation.parsed_count,
            aggregation.result.confidence,
        )
        return aggregation.result

    async def analyze_text(self, meal_text: str) -> AggregateResult:
        """Split raw meal text on commas and newlines, then analyze it."""
        phrases = split_meal_text(meal_text)
        if not phrases:
            raise MealAnalysisError(
                ErrorCode.INPUT_EMPTY,
                "No meal text provided",
                {"originalInput": meal_text},
            )
        return await self.analyze_ingredients(phrases)


def split_meal_text(meal_text: str) -> list[str]:
    """Naively segment meal text into trimmed, non-empty phrases."""
    segments = (segment.strip() for segment in _SEGMENT_SEPARATORS.split(meal_text))
    return [segment for segment in segments if segment]
