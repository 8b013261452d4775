"""OpenAI Responses API client for meal parsing."""

import json
from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from meal_estimator.domain.errors import MealParserError
from meal_estimator.services.meal_parser import MealParserClient


@dataclass
class OpenAIMealParserClient(MealParserClient):
    """Meal parser client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    temperature: float = 0.3
    max_output_tokens: int = 500

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMealParserClient":
        """Create an OpenAI meal parser client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def parse(
        self,
        *,
        model: str,
        instructions: str,
        meal_text: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": meal_text}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_ingredients",
                    "strict": True,
                    "schema": schema,
                }
            },
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
            "store": False,
        }
        try:
            response = await self.client.responses.create(**request_payload)
        except openai.RateLimitError as exc:
            raise MealParserError(
                "RATE_LIMIT", "Rate limit exceeded. Please try again."
            ) from exc
        except openai.APIError as exc:
            raise MealParserError("API_ERROR", f"OpenAI API error: {exc}") from exc

        output_text = response.output_text
        if not output_text:
            raise MealParserError("EMPTY_RESPONSE", "No response from OpenAI")
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise MealParserError(
                "INVALID_RESPONSE", "OpenAI returned malformed JSON"
            ) from exc
