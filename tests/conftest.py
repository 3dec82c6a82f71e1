"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from swiss_nutrition_mcp.adapters.blv_client import NutritionApiClient
from swiss_nutrition_mcp.config import Settings
from swiss_nutrition_mcp.containers import AppContainer
from swiss_nutrition_mcp.domain.errors import NotFoundError, NutritionError
from swiss_nutrition_mcp.services.foods import FoodService
from swiss_nutrition_mcp.services.language import (
    InMemoryLanguagePreferenceStore,
    LanguageService,
)
from swiss_nutrition_mcp.services.nutrition import NutritionService
from swiss_nutrition_mcp.services.recipes import RecipeService

PROTEIN = 10
FAT = 20
SODIUM = 30


def make_value(
    component_id: int,
    value: object,
    unit: object = "g",
    *,
    name: str | None = None,
    value_id: int | None = None,
) -> dict[str, object]:
    """Build a value payload shaped like the API's /values items."""
    return {
        "id": value_id if value_id is not None else component_id * 1000,
        "value": value,
        "component": {
            "id": component_id,
            "name": name or f"Component {component_id}",
            "code": f"C{component_id}",
            "group": 1,
            "unit": 1,
        },
        "unit": unit,
    }


@dataclass
class FakeNutritionApiClient(NutritionApiClient):
    """Fake Swiss Nutrition API with in-memory responses."""

    sets: list[dict[str, object]] = field(
        default_factory=lambda: [
            {"id": 1, "name": "Macronutrients", "code": "MACRO"},
            {"id": 2, "name": "Vitamins", "code": "VIT"},
        ]
    )
    foods: dict[int, dict[str, object]] = field(default_factory=dict)
    values: dict[int, list[dict[str, object]]] = field(default_factory=dict)
    dbids: dict[int, int] = field(default_factory=dict)
    ingredients: dict[int, list[dict[str, object]]] = field(default_factory=dict)
    value_failures: dict[int, NutritionError] = field(default_factory=dict)
    search_results: list[dict[str, object]] = field(default_factory=list)
    calls: list[tuple[str, tuple[object, ...]]] = field(default_factory=list)

    def add_food(
        self, dbid: int, name: str, values: list[dict[str, object]], **extra: object
    ) -> None:
        self.foods[dbid] = {"id": dbid, "name": name, "isrecipe": False, **extra}
        self.values[dbid] = values

    async def get_sets(self, lang: str = "en") -> list[dict[str, object]]:
        self.calls.append(("get_sets", (lang,)))
        return self.sets

    async def get_food_values(
        self, dbid: int, component_set_id: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        self.calls.append(("get_food_values", (dbid, component_set_id, lang)))
        if dbid in self.value_failures:
            raise self.value_failures[dbid]
        return self.values.get(dbid, [])

    async def get_top_categories(self, lang: str = "en") -> list[dict[str, object]]:
        self.calls.append(("get_top_categories", (lang,)))
        return [{"letter": "A", "description": "Fruits", "classification": "F"}]

    async def get_subcategories(
        self, category_id: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        self.calls.append(("get_subcategories", (category_id, lang)))
        return [{"id": category_id * 10, "name": "Berries"}]

    async def search_foods(  # noqa: PLR0913
        self,
        search: str | None = None,
        *,
        food_type: bool | None = None,
        category: int | None = None,
        lang: str = "en",
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, object]]:
        self.calls.append(("search_foods", (search, food_type, category, lang, limit)))
        return self.search_results[:limit]

    async def get_categorized_foods(  # noqa: PLR0913
        self,
        search: str | None = None,
        *,
        food_type: bool | None = None,
        category: int | None = None,
        lang: str = "en",
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, object]]:
        self.calls.append(("get_categorized_foods", (search, category, lang)))
        return [{"categoryId": category, "categoryName": "Fruits", "numberOfFoods": 3}]

    async def get_food_dbid(self, food_id: int) -> int:
        self.calls.append(("get_food_dbid", (food_id,)))
        if food_id not in self.dbids:
            raise NotFoundError(f"Swiss Nutrition API error (404): food {food_id}")
        return self.dbids[food_id]

    async def get_food(self, dbid: int, lang: str = "en") -> dict[str, object]:
        self.calls.append(("get_food", (dbid, lang)))
        if dbid not in self.foods:
            raise NotFoundError(f"Swiss Nutrition API error (404): food {dbid}")
        return self.foods[dbid]

    async def get_ingredients(
        self, dbid: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        self.calls.append(("get_ingredients", (dbid, lang)))
        return self.ingredients.get(dbid, [])

    def called(self, name: str) -> list[tuple[object, ...]]:
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def api_client() -> FakeNutritionApiClient:
    return FakeNutritionApiClient()


@pytest.fixture
def nutrition_service(api_client: FakeNutritionApiClient) -> NutritionService:
    return NutritionService(api_client)


@pytest.fixture
def recipe_service(
    api_client: FakeNutritionApiClient, nutrition_service: NutritionService
) -> RecipeService:
    return RecipeService(api_client=api_client, nutrition_service=nutrition_service)


@pytest.fixture
def language_service() -> LanguageService:
    return LanguageService(InMemoryLanguagePreferenceStore())


@pytest.fixture
def container(
    settings: Settings,
    api_client: FakeNutritionApiClient,
    nutrition_service: NutritionService,
    recipe_service: RecipeService,
    language_service: LanguageService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        api_client=api_client,
        food_service=FoodService(api_client),
        nutrition_service=nutrition_service,
        recipe_service=recipe_service,
        language_service=language_service,
        close_resources=close_resources,
    )
