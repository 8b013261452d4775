"""Nutrition domain models."""

from dataclasses import dataclass, field

from meal_estimator.domain.edamam import EdamamNutritionResponse


@dataclass(frozen=True)
class Macros:
    """Macronutrient totals."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class IngredientBreakdown:
    """One line of the itemized estimate."""

    input: str
    food: str
    weight_g: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class LookupSuccess:
    """Provider answered with a parseable nutrition record."""

    record: EdamamNutritionResponse


@dataclass(frozen=True)
class LookupFailure:
    """Provider lookup failed for a single phrase."""

    reason: str = ""


LookupOutcome = LookupSuccess | LookupFailure


@dataclass(frozen=True)
class AggregateResult:
    """Combined nutrition estimate for a batch of ingredient phrases."""

    macros: Macros
    total_weight_g: float
    normalized_text: str
    breakdown: list[IngredientBreakdown]
    confidence: float
    warnings: list[str] = field(default_factory=list)
