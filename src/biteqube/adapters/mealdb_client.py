"""TheMealDB API client."""

from dataclasses import dataclass

import httpx

from biteqube.services.recipes import MealDbClient


@dataclass
class HttpxMealDbClient(MealDbClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxMealDbClient":
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def search_by_name(self, name: str) -> list[dict[str, object]]:
        data = await self._get("search.php", {"s": name})
        return data.get("meals") or []

    async def random_meal(self) -> dict[str, object] | None:
        data = await self._get("random.php")
        meals = data.get("meals") or []
        return meals[0] if meals else None

    async def get_meal(self, meal_id: str) -> dict[str, object] | None:
        data = await self._get("lookup.php", {"i": meal_id})
        meals = data.get("meals") or []
        return meals[0] if meals else None

    async def filter_by_category(self, category: str) -> list[dict[str, object]]:
        data = await self._get("filter.php", {"c": category})
        return data.get("meals") or []

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(
        self, path: str, params: dict[str, str] | None = None
    ) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}/{path}", params=params, timeout=15
        )
        response.raise_for_status()
        data = response.json()
        return data if isinstance(data, dict) else {}
