"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meal_estimator.adapters.edamam_client import EdamamClient, HttpxEdamamClient
from meal_estimator.adapters.openai_meal_parser_client import OpenAIMealParserClient
from meal_estimator.config import Settings
from meal_estimator.services.analysis import AnalysisService
from meal_estimator.services.lookup import IngredientLookupService
from meal_estimator.services.meal_parser import LlmMealParser, MealParser


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    edamam_client: EdamamClient
    meal_parser: MealParser | None
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    edamam_client = HttpxEdamamClient.create(
        app_id=resolved_settings.edamam_app_id,
        app_key=resolved_settings.edamam_app_key,
        base_url=resolved_settings.edamam_base_url,
        nutrition_type=resolved_settings.edamam_nutrition_type,
        timeout_seconds=resolved_settings.lookup_timeout_seconds,
    )
    analysis_service = AnalysisService(
        lookup_service=IngredientLookupService(edamam_client),
    )
    meal_parser: MealParser | None = None
    if resolved_settings.openai_api_key:
        meal_parser = LlmMealParser(
            client=OpenAIMealParserClient.create(resolved_settings.openai_api_key),
            model=resolved_settings.openai_model,
        )

    async def close_resources() -> None:
        await edamam_client.close()

    return AppContainer(
        settings=resolved_settings,
        edamam_client=edamam_client,
        meal_parser=meal_parser,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
