"""MCP server exposing the Swiss Nutrition Database as tools and resources."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated
from urllib.parse import unquote

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ResourceError, ToolError
from pydantic import BaseModel, ConfigDict, Field

from swiss_nutrition_mcp.api.payloads import (
    comparison_payload,
    component_set_payload,
    recipe_nutrition_payload,
    to_json_text,
    value_payload,
)
from swiss_nutrition_mcp.containers import AppContainer
from swiss_nutrition_mcp.domain.errors import NutritionError
from swiss_nutrition_mcp.domain.language import Language
from swiss_nutrition_mcp.domain.nutrition import Ingredient
from swiss_nutrition_mcp.services.i18n import translate
from swiss_nutrition_mcp.services.language import detect_language

_logger = logging.getLogger(__name__)

LanguageArg = Annotated[
    Language | None,
    Field(description="Language for results; defaults to the stored preference"),
]


class IngredientInput(BaseModel):
    """Recipe ingredient argument."""

    model_config = ConfigDict(populate_by_name=True)

    food_id: int = Field(
        alias="foodId", gt=0, description="Database ID of the ingredient"
    )
    amount: float = Field(ge=0, description="Amount of the ingredient, in grams")
    unit: str = Field(description="Unit of measurement")

    def to_domain(self) -> Ingredient:
        return Ingredient(food_id=self.food_id, amount=self.amount, unit=self.unit)


@contextmanager
def surface_errors(operation: str, *, resource: bool = False) -> Iterator[None]:
    """Re-raise classified failures as MCP errors prefixed with their kind."""
    try:
        yield
    except NutritionError as exc:
        _logger.warning("%s failed: %s", operation, exc)
        message = f"{exc.kind}: {exc.message}"
        if resource:
            raise ResourceError(message) from exc
        raise ToolError(message) from exc


def create_server(container: AppContainer) -> FastMCP:
    """Create the MCP server with every tool and resource registered."""
    server = FastMCP(container.settings.server_name)
    register_tools(server, container)
    register_resources(server, container)
    return server


def register_tools(server: FastMCP, container: AppContainer) -> None:  # noqa: PLR0915
    """Register the nutrition tools."""
    foods = container.food_service
    nutrition = container.nutrition_service
    recipes = container.recipe_service
    languages = container.language_service

    @server.tool(description=translate("tool.searchFoods.description"))
    async def search_foods(
        query: Annotated[str, Field(description="Search term")],
        language: LanguageArg = None,
        foodType: Annotated[  # noqa: N803
            bool | None,
            Field(description="True for generic foods, false for branded foods"),
        ] = None,
        category: Annotated[
            int | None, Field(description="Top level category ID")
        ] = None,
        limit: Annotated[
            int | None, Field(gt=0, description="Maximum number of results")
        ] = None,
    ) -> str:
        with surface_errors("search_foods"):
            result = await foods.search_foods(
                query,
                languages.resolve(language),
                food_type=foodType,
                category=category,
                limit=limit,
            )
        return to_json_text(result)

    @server.tool(description=translate("tool.getFoodDetails.description"))
    async def get_food_details(
        foodId: Annotated[  # noqa: N803
            int, Field(gt=0, description="Database ID of the food")
        ],
        language: LanguageArg = None,
    ) -> str:
        with surface_errors("get_food_details"):
            result = await nutrition.get_food_details(
                foodId, languages.resolve(language)
            )
        return to_json_text(result)

    @server.tool(description="List the component sets (nutrient groups)")
    async def get_component_sets(language: LanguageArg = None) -> str:
        with surface_errors("get_component_sets"):
            sets = await nutrition.get_component_sets(languages.resolve(language))
        return to_json_text([component_set_payload(s) for s in sets])

    @server.tool(description="List the top level food categories")
    async def get_top_categories(language: LanguageArg = None) -> str:
        with surface_errors("get_top_categories"):
            result = await foods.get_top_categories(languages.resolve(language))
        return to_json_text(result)

    @server.tool(description="List the subcategories of a top level category")
    async def get_subcategories(
        categoryId: Annotated[  # noqa: N803
            int, Field(description="Top level category ID")
        ],
        language: LanguageArg = None,
    ) -> str:
        with surface_errors("get_subcategories"):
            result = await foods.get_subcategories(
                categoryId, languages.resolve(language)
            )
        return to_json_text(result)

    @server.tool(description="Get nutritional values for a specific food")
    async def get_nutritional_values(
        foodId: Annotated[  # noqa: N803
            int, Field(gt=0, description="Database ID of the food")
        ],
        componentSetId: Annotated[  # noqa: N803
            int, Field(description="Component set ID")
        ],
        language: LanguageArg = None,
    ) -> str:
        with surface_errors("get_nutritional_values"):
            values = await nutrition.get_nutritional_values(
                foodId, componentSetId, languages.resolve(language)
            )
        return to_json_text([value_payload(v) for v in values])

    @server.tool(description="Compare nutritional values between multiple foods")
    async def compare_nutritional_values(
        foodIds: Annotated[  # noqa: N803
            list[int], Field(description="Food database IDs to compare")
        ],
        componentSetId: Annotated[  # noqa: N803
            int, Field(description="Component set ID")
        ],
        language: LanguageArg = None,
    ) -> str:
        with surface_errors("compare_nutritional_values"):
            comparison = await nutrition.compare_nutritional_values(
                foodIds, componentSetId, languages.resolve(language)
            )
        return to_json_text(comparison_payload(comparison))

    @server.tool(description="Get ingredients for a specific recipe")
    async def get_ingredients(
        recipeId: Annotated[  # noqa: N803
            int, Field(gt=0, description="Database ID of the recipe")
        ],
        language: LanguageArg = None,
    ) -> str:
        with surface_errors("get_ingredients"):
            result = await recipes.get_ingredients(
                recipeId, languages.resolve(language)
            )
        return to_json_text(result)

    @server.tool(description=translate("tool.calculateRecipeNutrition.description"))
    async def calculate_recipe_nutrition(
        ingredients: Annotated[
            list[IngredientInput], Field(description="List of ingredients with amounts")
        ],
        language: LanguageArg = None,
    ) -> str:
        with surface_errors("calculate_recipe_nutrition"):
            result = await recipes.calculate_recipe_nutrition(
                [item.to_domain() for item in ingredients],
                languages.resolve(language),
            )
        return to_json_text(recipe_nutrition_payload(result))

    @server.tool(description="Set the preferred language for results")
    async def set_language_preference(
        userId: Annotated[  # noqa: N803
            str, Field(min_length=1, description="User identifier")
        ],
        language: Annotated[Language, Field(description="Preferred language")],
    ) -> str:
        with surface_errors("set_language_preference"):
            languages.set_preference(userId, language)
        return f"Language preference set to {language} for user {userId}"

    @server.tool(name="detect_language", description="Detect language from text input")
    async def detect_language_tool(
        text: Annotated[
            str,
            Field(min_length=1, description="Text to analyze for language detection"),
        ],
    ) -> str:
        return to_json_text({"detectedLanguage": detect_language(text)})


def register_resources(server: FastMCP, container: AppContainer) -> None:
    """Register the nutrition:// resource templates."""
    foods = container.food_service
    nutrition = container.nutrition_service
    recipes = container.recipe_service
    languages = container.language_service

    @server.resource(
        "nutrition://food/{food_id}",
        name="Food details by ID",
        description="Get detailed information about a food by its database ID",
        mime_type="application/json",
    )
    async def food_resource(food_id: int) -> str:
        with surface_errors(f"nutrition://food/{food_id}", resource=True):
            food = await nutrition.get_food_details(food_id, languages.get_preference())
        return to_json_text(food)

    @server.resource(
        "nutrition://search/{query}",
        name="Food search results",
        description="Get foods matching a search query",
        mime_type="application/json",
    )
    async def search_resource(query: str) -> str:
        with surface_errors(f"nutrition://search/{query}", resource=True):
            result = await foods.search_foods(
                unquote(query), languages.get_preference()
            )
        return to_json_text(result)

    @server.resource(
        "nutrition://category/{category_id}",
        name="Foods in category",
        description="Get foods in a specific category",
        mime_type="application/json",
    )
    async def category_resource(category_id: int) -> str:
        with surface_errors(f"nutrition://category/{category_id}", resource=True):
            result = await foods.get_categorized_foods(
                category=category_id, language=languages.get_preference()
            )
        return to_json_text(result)

    @server.resource(
        "nutrition://recipe/{recipe_id}",
        name="Recipe details by ID",
        description="Get detailed information about a recipe by its database ID",
        mime_type="application/json",
    )
    async def recipe_resource(recipe_id: int) -> str:
        with surface_errors(f"nutrition://recipe/{recipe_id}", resource=True):
            recipe = await recipes.get_recipe(recipe_id, languages.get_preference())
        return to_json_text(recipe)

    @server.resource(
        "nutrition://recipe/{recipe_id}/ingredients",
        name="Recipe ingredients",
        description="Get the ingredients of a recipe by its database ID",
        mime_type="application/json",
    )
    async def recipe_ingredients_resource(recipe_id: int) -> str:
        uri = f"nutrition://recipe/{recipe_id}/ingredients"
        with surface_errors(uri, resource=True):
            result = await recipes.get_ingredients(
                recipe_id, languages.get_preference()
            )
        return to_json_text(result)

    @server.resource(
        "nutrition://recipe/{recipe_id}/nutrition",
        name="Recipe nutritional values",
        description="Get the nutritional values of a recipe by its database ID",
        mime_type="application/json",
    )
    async def recipe_nutrition_resource(recipe_id: int) -> str:
        uri = f"nutrition://recipe/{recipe_id}/nutrition"
        with surface_errors(uri, resource=True):
            result = await recipes.calculate_recipe_from_id(
                recipe_id, languages.get_preference()
            )
        return to_json_text(recipe_nutrition_payload(result))
