"""Error types surfaced to API callers."""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error codes returned in error payloads."""

    INPUT_EMPTY = "INPUT_EMPTY"
    INPUT_TOO_VAGUE = "INPUT_TOO_VAGUE"
    PROVIDER_RATE_LIMIT = "PROVIDER_RATE_LIMIT"
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
    PROVIDER_PARSE_FAILED = "PROVIDER_PARSE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_HTTP_STATUS = {
    ErrorCode.INPUT_EMPTY: 400,
    ErrorCode.INPUT_TOO_VAGUE: 400,
    ErrorCode.PROVIDER_PARSE_FAILED: 422,
    ErrorCode.PROVIDER_RATE_LIMIT: 429,
    ErrorCode.PROVIDER_UNAVAILABLE: 503,
}


class MealAnalysisError(Exception):
    """Request-level failure of a meal analysis."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    @property
    def http_status(self) -> int:
        """HTTP status code used when the error reaches the API."""
        return _HTTP_STATUS.get(self.code, 500)


class MealParserError(Exception):
    """Failure of the meal text parser."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
