"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest

from meal_estimator.adapters.edamam_client import EdamamClient
from meal_estimator.config import Settings
from meal_estimator.containers import AppContainer
from meal_estimator.services.analysis import AnalysisService
from meal_estimator.services.lookup import IngredientLookupService
from meal_estimator.services.meal_parser import LlmMealParser, MealParserClient


def edamam_payload(  # noqa: PLR0913
    food: str,
    *,
    calories: float | None,
    protein: float | None,
    carbs: float | None,
    fat: float | None,
    weight: float | None,
    status: str = "OK",
) -> dict[str, object]:
    """Build a nutrition-data payload with a single parsed food."""
    nutrients: dict[str, object] = {}
    for code, value in (
        ("ENERC_KCAL", calories),
        ("PROCNT", protein),
        ("CHOCDF", carbs),
        ("FAT", fat),
    ):
        if value is not None:
            nutrients[code] = {"label": code, "quantity": value, "unit": "g"}
    return {
        "uri": "http://www.edamam.com/ontologies/edamam.owl#recipe_test",
        "ingredients": [
            {
                "text": food,
                "parsed": [
                    {
                        "quantity": 1,
                        "measure": "gram",
                        "food": food,
                        "foodId": f"food_{food.replace(' ', '_')}",
                        "weight": weight,
                        "nutrients": nutrients,
                        "status": status,
                    }
                ],
            }
        ],
    }


EGGS_PAYLOAD = edamam_payload(
    "egg", calories=140, protein=12, carbs=1, fat=10, weight=100
)
BREAD_PAYLOAD = edamam_payload(
    "white bread", calories=180, protein=6, carbs=34, fat=2, weight=70
)
CHICKEN_PAYLOAD = edamam_payload(
    "chicken", calories=300, protein=46.5, carbs=0.4, fat=12.8, weight=150
)


def http_status_error(status_code: int) -> httpx.HTTPStatusError:
    """Build the error httpx raises for a non-success response."""
    request = httpx.Request("GET", "https://api.test/api/nutrition-data")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        f"HTTP {status_code}", request=request, response=response
    )


@dataclass
class FakeEdamamClient(EdamamClient):
    """Fake Edamam client with per-ingredient responses.

    Unknown ingredients answer with a 555 status error. Values that are
    exceptions are raised instead of returned.
    """

    responses: dict[str, object] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    completed: list[str] = field(default_factory=list)

    async def analyze_ingredient(self, ingredient: str) -> dict[str, object]:
        self.calls.append(ingredient)
        delay = self.delays.get(ingredient)
        if delay:
            await asyncio.sleep(delay)
        self.completed.append(ingredient)
        response = self.responses.get(ingredient, http_status_error(555))
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class FakeMealParserClient(MealParserClient):
    """Fake LLM client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {"ingredients": ["2 large eggs", "70g white bread"]}
    )
    error: Exception | None = None
    requests: list[dict[str, object]] = field(default_factory=list)

    async def parse(
        self,
        *,
        model: str,
        instructions: str,
        meal_text: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.requests.append({"model": model, "meal_text": meal_text})
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        edamam_app_id="test-app-id",
        edamam_app_key="test-app-key",
        openai_api_key=None,
    )


@pytest.fixture
def edamam_client() -> FakeEdamamClient:
    return FakeEdamamClient(
        responses={
            "2 large eggs": EGGS_PAYLOAD,
            "70g white bread": BREAD_PAYLOAD,
            "150g chicken": CHICKEN_PAYLOAD,
        }
    )


@pytest.fixture
def analysis_service(edamam_client: FakeEdamamClient) -> AnalysisService:
    return AnalysisService(lookup_service=IngredientLookupService(edamam_client))


def build_test_container(
    settings: Settings,
    edamam_client: FakeEdamamClient,
    meal_parser_client: FakeMealParserClient | None = None,
) -> AppContainer:
    """Wire a container around fake clients."""
    meal_parser = None
    if meal_parser_client is not None:
        meal_parser = LlmMealParser(
            client=meal_parser_client, model=settings.openai_model
        )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        edamam_client=edamam_client,
        meal_parser=meal_parser,
        analysis_service=AnalysisService(
            lookup_service=IngredientLookupService(edamam_client)
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def container(
    settings: Settings, edamam_client: FakeEdamamClient
) -> AppContainer:
    return build_test_container(settings, edamam_client)
