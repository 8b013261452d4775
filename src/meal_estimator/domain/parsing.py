"""Models for meal text segmentation."""

from dataclasses import dataclass

from pydantic import BaseModel


class ParsedIngredients(BaseModel):
    """Structured output expected from the LLM parser."""

    ingredients: list[str]


@dataclass(frozen=True)
class ParsedMeal:
    """Meal text split into ingredient phrases."""

    ingredients: list[str]
    raw_input: str
