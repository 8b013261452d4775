"""Edamam Nutrition Analysis API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class EdamamClient(Protocol):
    """Interface for Edamam nutrition-data lookups."""

    async def analyze_ingredient(self, ingredient: str) -> dict[str, object]:
        """Analyze one ingredient line and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient
    nutrition_type: str = "cooking"
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls,
        app_id: str,
        app_key: str,
        base_url: str,
        nutrition_type: str = "cooking",
        timeout_seconds: float = 15.0,
    ) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            nutrition_type=nutrition_type,
            timeout_seconds=timeout_seconds,
        )

    async def analyze_ingredient(self, ingredient: str) -> dict[str, object]:
        """Analyze a single ingredient line."""
        url = f"{self.base_url}/api/nutrition-data"
        response = await self.http_client.get(
            url,
            params={
                "app_id": self.app_id,
                "app_key": self.app_key,
                "ingr": ingredient,
                "nutrition-type": self.nutrition_type,
            },
            headers={"Accept": "application/json"},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
