"""Normalize Edamam records into breakdown rows."""

import math

from meal_estimator.domain.edamam import EdamamNutrient, EdamamNutritionResponse
from meal_estimator.domain.nutrition import IngredientBreakdown

_OK_STATUS = "OK"


def round_whole(value: float) -> float:
    """Round half up to the nearest integer."""
    return float(math.floor(value + 0.5))


def round_tenth(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def round_hundredth(value: float) -> float:
    """Round half up to two decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def normalize_record(
    record: EdamamNutritionResponse, phrase: str
) -> list[IngredientBreakdown]:
    """Flatten the OK sub-items of a record into rows for ``phrase``.

    Sub-items with any other status, or without a nutrients block, are
    dropped. Missing nutrient quantities count as zero.
    """
    rows: list[IngredientBreakdown] = []
    for ingredient in record.ingredients:
        for parsed in ingredient.parsed:
            if parsed.status != _OK_STATUS or parsed.nutrients is None:
                continue
            nutrients = parsed.nutrients
            rows.append(
                IngredientBreakdown(
                    input=phrase,
                    food=parsed.food or phrase,
                    weight_g=round_whole(parsed.weight or 0.0),
                    calories=round_whole(_quantity(nutrients.ENERC_KCAL)),
                    protein_g=round_tenth(_quantity(nutrients.PROCNT)),
                    carbs_g=round_tenth(_quantity(nutrients.CHOCDF)),
                    fat_g=round_tenth(_quantity(nutrients.FAT)),
                )
            )
    return rows


def _quantity(nutrient: EdamamNutrient | None) -> float:
    if nutrient is None or nutrient.quantity is None:
        return 0.0
    return float(nutrient.quantity)
