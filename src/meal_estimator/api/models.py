"""Request and response models for the meal analysis API."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from meal_estimator.domain.nutrition import AggregateResult, IngredientBreakdown

MealText = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1),
]


class AnalyzeRequest(BaseModel):
    """Body of POST /v1/meals/analyze."""

    model_config = ConfigDict(populate_by_name=True)

    text: MealText = Field(description="Free-text meal description")
    meal_type: Literal["breakfast", "lunch", "dinner", "snack"] | None = Field(
        default=None, alias="mealType"
    )
    timestamp: datetime | None = None


class MacrosPayload(BaseModel):
    """Macro totals in the response."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


class BreakdownPayload(BaseModel):
    """Itemized line in the response."""

    input: str
    food: str
    weight_g: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @classmethod
    def from_domain(cls, row: IngredientBreakdown) -> "BreakdownPayload":
        """Build a payload row from a breakdown row."""
        return cls(
            input=row.input,
            food=row.food,
            weight_g=row.weight_g,
            calories=row.calories,
            protein_g=row.protein_g,
            carbs_g=row.carbs_g,
            fat_g=row.fat_g,
        )


class AnalyzeResponse(BaseModel):
    """Successful meal analysis payload."""

    model_config = ConfigDict(populate_by_name=True)

    normalized_text: str = Field(alias="normalizedText")
    parsed_ingredients: list[str] | None = Field(
        default=None, alias="parsedIngredients"
    )
    breakdown: list[BreakdownPayload]
    macros: MacrosPayload
    total_weight_g: float = Field(alias="totalWeight_g")
    source: str
    confidence: float
    warnings: list[str]

    @classmethod
    def from_result(
        cls,
        result: AggregateResult,
        *,
        source: str,
        parsed_ingredients: list[str] | None = None,
    ) -> "AnalyzeResponse":
        """Build the API payload from an aggregate result."""
        return cls(
            normalized_text=result.normalized_text,
            parsed_ingredients=parsed_ingredients,
            breakdown=[BreakdownPayload.from_domain(row) for row in result.breakdown],
            macros=MacrosPayload(
                calories=result.macros.calories,
                protein_g=result.macros.protein_g,
                carbs_g=result.macros.carbs_g,
                fat_g=result.macros.fat_g,
            ),
            total_weight_g=result.total_weight_g,
            source=source,
            confidence=result.confidence,
            warnings=list(result.warnings),
        )


class ErrorBody(BaseModel):
    """Error code, message and optional details."""

    code: str
    message: str
    details: dict[str, object] | None = None


class ErrorResponse(BaseModel):
    """Error payload."""

    error: ErrorBody
