"""Per-ingredient nutrition lookups against Edamam."""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from meal_estimator.adapters.edamam_client import EdamamClient
from meal_estimator.domain.edamam import EdamamNutritionResponse
from meal_estimator.domain.errors import ErrorCode, MealAnalysisError
from meal_estimator.domain.nutrition import (
    LookupFailure,
    LookupOutcome,
    LookupSuccess,
)

_RATE_LIMIT_STATUS = 429

_logger = logging.getLogger(__name__)


@dataclass
class IngredientLookupService:
    """Look up one ingredient phrase and classify the outcome.

    Ordinary provider failures are returned as ``LookupFailure`` so a batch
    can carry on without them. A rate-limit response is the exception: it
    raises ``MealAnalysisError`` with ``PROVIDER_RATE_LIMIT``, which aborts
    the batch the phrase belongs to.
    """

    edamam_client: EdamamClient

    async def lookup(self, phrase: str) -> LookupOutcome:
        """Query the provider for a single ingredient phrase."""
        try:
            payload = await self.edamam_client.analyze_ingredient(phrase)
            record = EdamamNutritionResponse.model_validate(payload)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == _RATE_LIMIT_STATUS:
                raise MealAnalysisError(
                    ErrorCode.PROVIDER_RATE_LIMIT,
                    "Rate limit exceeded. Please try again later.",
                ) from exc
            return _failure(phrase, exc)
        except (httpx.HTTPError, ValidationError, ValueError) as exc:
            return _failure(phrase, exc)
        return LookupSuccess(record=record)


def _failure(phrase: str, exc: Exception) -> LookupFailure:
    """Log a failed lookup and build its outcome."""
    status_code = _status_code_from_exception(exc)
    _logger.warning(
        "Ingredient lookup failed: ingredient=%s status=%s error=%s",
        phrase,
        status_code,
        type(exc).__name__,
    )
    return LookupFailure(reason=f"status={status_code}")


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
