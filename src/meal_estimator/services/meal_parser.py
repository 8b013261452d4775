"""Meal text segmentation using LLMs."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from meal_estimator.domain.errors import MealParserError
from meal_estimator.domain.parsing import ParsedIngredients, ParsedMeal

_logger = logging.getLogger(__name__)

INGREDIENTS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "ingredients": {
            "type": "array",
            "items": {"type": "string"},
        }
    },
    "required": ["ingredients"],
    "additionalProperties": False,
}

PARSER_INSTRUCTIONS = (
    "Convert the meal description into a list of ingredient lines. "
    "Each line holds one food with a realistic quantity, in grams for solid "
    "foods and in ml or spoons for liquids, oils and sauces. "
    "Break compound dishes into their components and keep any quantity "
    "the user gave."
)


class MealParser(Protocol):
    """Interface for turning meal text into ingredient phrases."""

    async def parse(self, meal_text: str) -> ParsedMeal:
        """Split a meal description into ordered ingredient phrases."""


class MealParserClient(Protocol):
    """Interface for LLM structured parsing."""

    async def parse(
        self,
        *,
        model: str,
        instructions: str,
        meal_text: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return structured ingredient data."""


@dataclass
class LlmMealParser(MealParser):
    """Parser that asks an LLM for an ingredient list."""

    client: MealParserClient
    model: str

    async def parse(self, meal_text: str) -> ParsedMeal:
        """Parse a free-text meal description into ingredient phrases."""
        trimmed = meal_text.strip()
        if not trimmed:
            raise MealParserError("EMPTY_INPUT", "No meal description provided")

        raw = await self.client.parse(
            model=self.model,
            instructions=PARSER_INSTRUCTIONS,
            meal_text=trimmed,
            schema=INGREDIENTS_SCHEMA,
        )
        try:
            parsed = ParsedIngredients.model_validate(raw)
        except ValidationError:
            _logger.warning("Meal parser returned an invalid payload: %s", raw)
            return ParsedMeal(ingredients=[trimmed], raw_input=trimmed)

        ingredients = [item.strip() for item in parsed.ingredients if item.strip()]
        if not ingredients:
            _logger.warning("Meal parser returned no ingredients")
            return ParsedMeal(ingredients=[trimmed], raw_input=trimmed)
        return ParsedMeal(ingredients=ingredients, raw_input=trimmed)
