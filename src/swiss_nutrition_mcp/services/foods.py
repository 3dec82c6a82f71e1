"""Food search and category browsing."""

import logging
from dataclasses import dataclass

from swiss_nutrition_mcp.adapters.blv_client import NutritionApiClient
from swiss_nutrition_mcp.domain.language import DEFAULT_LANGUAGE

_logger = logging.getLogger(__name__)


@dataclass
class FoodService:
    """Passthrough queries over the food catalogue."""

    api_client: NutritionApiClient
    default_limit: int = 20

    async def search_foods(
        self,
        query: str,
        language: str = DEFAULT_LANGUAGE,
        food_type: bool | None = None,
        category: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, object]]:
        """Search foods by name; no match is an empty list, not an error."""
        foods = await self.api_client.search_foods(
            query,
            food_type=food_type,
            category=category,
            lang=language,
            limit=limit or self.default_limit,
        )
        _logger.debug("Food search: query=%s results=%s", query, len(foods or []))
        return foods or []

    async def get_categorized_foods(
        self,
        query: str | None = None,
        language: str = DEFAULT_LANGUAGE,
        food_type: bool | None = None,
        category: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, object]]:
        """Return per-category match counts for a search."""
        return await self.api_client.get_categorized_foods(
            query,
            food_type=food_type,
            category=category,
            lang=language,
            limit=limit or self.default_limit,
        )

    async def get_top_categories(
        self, language: str = DEFAULT_LANGUAGE
    ) -> list[dict[str, object]]:
        return await self.api_client.get_top_categories(language)

    async def get_subcategories(
        self, category_id: int, language: str = DEFAULT_LANGUAGE
    ) -> list[dict[str, object]]:
        return await self.api_client.get_subcategories(category_id, language)
