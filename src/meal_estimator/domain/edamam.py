"""Models for Edamam nutrition-data payloads."""

from pydantic import BaseModel, ConfigDict, Field


class EdamamNutrient(BaseModel):
    """Single nutrient quantity reported by Edamam."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    label: str | None = None
    quantity: float | None = Field(default=None, ge=0)
    unit: str | None = None


class EdamamNutrients(BaseModel):
    """Macro nutrients of a parsed sub-item, keyed by Edamam nutrient code."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    ENERC_KCAL: EdamamNutrient | None = None
    PROCNT: EdamamNutrient | None = None
    CHOCDF: EdamamNutrient | None = None
    FAT: EdamamNutrient | None = None


class EdamamParsedFood(BaseModel):
    """One food entity Edamam parsed out of an ingredient line."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    food: str | None = None
    food_id: str | None = Field(default=None, alias="foodId")
    quantity: float | None = Field(default=None, ge=0)
    measure: str | None = None
    weight: float | None = Field(default=None, ge=0)
    nutrients: EdamamNutrients | None = None
    status: str | None = None


class EdamamIngredient(BaseModel):
    """Ingredient line echoed back by Edamam with its parsed foods."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    text: str | None = None
    parsed: list[EdamamParsedFood] = Field(default_factory=list)


class EdamamNutritionResponse(BaseModel):
    """Structured response from the nutrition-data endpoint."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    uri: str | None = None
    ingredients: list[EdamamIngredient] = Field(default_factory=list)
