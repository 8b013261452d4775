"""Aggregate per-ingredient lookups into a single estimate."""

from collections.abc import Sequence
from dataclasses import dataclass

from meal_estimator.domain.nutrition import (
    AggregateResult,
    IngredientBreakdown,
    LookupOutcome,
    LookupSuccess,
    Macros,
)
from meal_estimator.services.normalizer import (
    normalize_record,
    round_hundredth,
    round_tenth,
    round_whole,
)

LOW_CONFIDENCE_THRESHOLD = 0.5
LOW_CONFIDENCE_WARNING = "Low confidence estimate - consider adding more detail"


@dataclass(frozen=True)
class Aggregation:
    """Aggregate result plus the number of parsed sub-items."""

    result: AggregateResult
    parsed_count: int


def aggregate(
    phrases: Sequence[str], outcomes: Sequence[LookupOutcome]
) -> Aggregation:
    """Combine lookup outcomes, aligned 1:1 with ``phrases``."""
    if len(phrases) != len(outcomes):
        raise ValueError("phrases and outcomes must have the same length")

    breakdown: list[IngredientBreakdown] = []
    failed_inputs: list[str] = []
    parsed_foods: list[str] = []
    parsed_count = 0
    calories = protein = carbs = fat = weight = 0.0

    for phrase, outcome in zip(phrases, outcomes, strict=True):
        rows = (
            normalize_record(outcome.record, phrase)
            if isinstance(outcome, LookupSuccess)
            else []
        )
        if not rows:
            failed_inputs.append(phrase)
            breakdown.append(_zero_row(phrase))
            continue
        for row in rows:
            breakdown.append(row)
            calories += row.calories
            protein += row.protein_g
            carbs += row.carbs_g
            fat += row.fat_g
            weight += row.weight_g
            parsed_count += 1
            parsed_foods.append(row.food)

    warnings: list[str] = []
    if failed_inputs:
        warnings.append(f"Could not parse: {', '.join(failed_inputs)}")

    # Rows are already rounded; totals are rounded again.
    macros = Macros(
        calories=round_whole(calories),
        protein_g=round_tenth(protein),
        carbs_g=round_tenth(carbs),
        fat_g=round_tenth(fat),
    )
    confidence = compute_confidence(parsed_count, len(phrases), macros)
    if confidence < LOW_CONFIDENCE_THRESHOLD:
        warnings.append(LOW_CONFIDENCE_WARNING)

    result = AggregateResult(
        macros=macros,
        total_weight_g=round_whole(weight),
        normalized_text=", ".join(parsed_foods) if parsed_foods else ", ".join(phrases),
        breakdown=breakdown,
        confidence=confidence,
        warnings=warnings,
    )
    return Aggregation(result=result, parsed_count=parsed_count)


def compute_confidence(parsed_count: int, input_count: int, macros: Macros) -> float:
    """Score an estimate from its success rate and macro completeness.

    The success rate is scaled by 0.5 when no macro total is positive, up
    to 1.0 when all four are, then clamped to 1 and rounded to 2 decimals.
    """
    if input_count <= 0:
        return 0.0
    success_rate = parsed_count / input_count
    has_macros = sum(
        value > 0
        for value in (macros.calories, macros.protein_g, macros.carbs_g, macros.fat_g)
    )
    return round_hundredth(min(1.0, success_rate * (0.5 + has_macros / 8)))


def _zero_row(phrase: str) -> IngredientBreakdown:
    return IngredientBreakdown(
        input=phrase,
        food=phrase,
        weight_g=0.0,
        calories=0.0,
        protein_g=0.0,
        carbs_g=0.0,
        fat_g=0.0,
    )
