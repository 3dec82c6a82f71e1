"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from swiss_nutrition_mcp.adapters.blv_client import (
    HttpxNutritionApiClient,
    NutritionApiClient,
)
from swiss_nutrition_mcp.config import Settings
from swiss_nutrition_mcp.services.foods import FoodService
from swiss_nutrition_mcp.services.language import (
    InMemoryLanguagePreferenceStore,
    LanguageService,
)
from swiss_nutrition_mcp.services.nutrition import NutritionService
from swiss_nutrition_mcp.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    api_client: NutritionApiClient
    food_service: FoodService
    nutrition_service: NutritionService
    recipe_service: RecipeService
    language_service: LanguageService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_client = HttpxNutritionApiClient.create(
        base_url=resolved_settings.nutrition_api_base_url,
        timeout_seconds=resolved_settings.nutrition_api_timeout_seconds,
    )
    nutrition_service = NutritionService(
        api_client=api_client,
        debug=resolved_settings.debug,
    )
    recipe_service = RecipeService(
        api_client=api_client,
        nutrition_service=nutrition_service,
    )
    language_service = LanguageService(
        store=InMemoryLanguagePreferenceStore(),
        default_language=resolved_settings.default_language,
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        api_client=api_client,
        food_service=FoodService(api_client),
        nutrition_service=nutrition_service,
        recipe_service=recipe_service,
        language_service=language_service,
        close_resources=close_resources,
    )
