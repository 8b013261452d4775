"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meal_estimator.api.models import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from meal_estimator.app_logging import configure_logging
from meal_estimator.config import parse_cors_origins
from meal_estimator.containers import AppContainer
from meal_estimator.domain.errors import ErrorCode, MealAnalysisError, MealParserError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            ErrorCode.INPUT_EMPTY, _validation_message(exc), status_code=400
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(tz=UTC).isoformat()}

    @app.post(
        "/v1/meals/analyze",
        response_model=AnalyzeResponse,
        response_model_exclude_none=True,
    )
    async def analyze_meal(
        body: AnalyzeRequest, request: Request
    ) -> AnalyzeResponse | JSONResponse:
        """Estimate macros for a free-text meal description."""
        state_container: AppContainer = request.app.state.container
        started = time.perf_counter()
        used_llm = False
        ingredients: list[str] = []
        try:
            if state_container.meal_parser is not None:
                try:
                    parsed = await state_container.meal_parser.parse(body.text)
                    ingredients = parsed.ingredients
                    used_llm = True
                    logger.info(
                        "Meal parser produced %s ingredients", len(ingredients)
                    )
                except MealParserError as exc:
                    logger.warning(
                        "Meal parser failed, using raw input: code=%s", exc.code
                    )
                    ingredients = [body.text]
                result = await state_container.analysis_service.analyze_ingredients(
                    ingredients
                )
            else:
                result = await state_container.analysis_service.analyze_text(
                    body.text
                )
        except MealAnalysisError as exc:
            logger.info(
                "Meal analysis failed: status=%s error=%s latency_ms=%s",
                exc.http_status,
                exc.code,
                _latency_ms(started),
            )
            return _error_response(
                exc.code,
                exc.message,
                status_code=exc.http_status,
                details=exc.details,
            )
        except Exception:
            logger.exception(
                "Meal analysis failed: status=500 error=%s latency_ms=%s",
                ErrorCode.INTERNAL_ERROR,
                _latency_ms(started),
            )
            return _error_response(
                ErrorCode.INTERNAL_ERROR,
                "An unexpected error occurred",
                status_code=500,
            )

        logger.info(
            "Meal analysis completed: status=200 latency_ms=%s confidence=%s llm=%s",
            _latency_ms(started),
            result.confidence,
            used_llm,
        )
        return AnalyzeResponse.from_result(
            result,
            source="gpt+edamam" if used_llm else "edamam",
            parsed_ingredients=ingredients if used_llm else None,
        )

    return app


def _error_response(
    code: ErrorCode,
    message: str,
    *,
    status_code: int,
    details: dict[str, object] | None = None,
) -> JSONResponse:
    """Serialize an error payload."""
    payload = ErrorResponse.model_validate(
        {"error": {"code": code, "message": message, "details": details or None}}
    )
    return JSONResponse(
        status_code=status_code, content=payload.model_dump(exclude_none=True)
    )


def _validation_message(exc: RequestValidationError) -> str:
    """Return a user-facing message for the first validation error."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if "text" in first.get("loc", ()):
        return "Meal text is required"
    return str(first.get("msg") or "Invalid request")


def _latency_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
