"""Recipe ingredients and nutrition totals."""

import asyncio
import logging
from dataclasses import dataclass

from swiss_nutrition_mcp.adapters.blv_client import NutritionApiClient
from swiss_nutrition_mcp.domain.errors import (
    InvalidInputError,
    NotFoundError,
    NutritionError,
    UpstreamError,
)
from swiss_nutrition_mcp.domain.language import DEFAULT_LANGUAGE
from swiss_nutrition_mcp.domain.nutrition import (
    Ingredient,
    IngredientDetail,
    NutrientComponent,
    RecipeNutrition,
    TotalsEntry,
    unit_label,
)
from swiss_nutrition_mcp.services.i18n import format_value_with_unit
from swiss_nutrition_mcp.services.nutrition import NutritionService

# Source values are published per 100 g (or 100 ml).
REFERENCE_QUANTITY = 100

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolved:
    """Ingredient whose nutrient values were fetched."""

    detail: IngredientDetail


@dataclass(frozen=True)
class Failed:
    """Ingredient whose lookup failed."""

    ingredient: Ingredient
    error: NutritionError


ResolutionOutcome = Resolved | Failed


@dataclass
class _RunningTotal:
    component: NutrientComponent
    value: float
    unit: str


@dataclass
class RecipeService:
    """Service that resolves recipe ingredients and sums their nutrients."""

    api_client: NutritionApiClient
    nutrition_service: NutritionService

    async def get_ingredients(
        self, recipe_id: int, language: str = DEFAULT_LANGUAGE
    ) -> list[dict[str, object]]:
        """Return the raw ingredient list of a recipe."""
        dbid = await self.nutrition_service.resolve_dbid(recipe_id)
        ingredients = await self.api_client.get_ingredients(dbid, language)
        if not ingredients:
            raise NotFoundError(
                f"No ingredients found for recipe ID {recipe_id}", food_id=recipe_id
            )
        return ingredients

    async def get_recipe(
        self, recipe_id: int, language: str = DEFAULT_LANGUAGE
    ) -> dict[str, object]:
        """Return a recipe record, rejecting foods that are not recipes."""
        recipe = await self.api_client.get_food(recipe_id, language)
        if not recipe:
            raise NotFoundError(f"Recipe ID {recipe_id} not found", food_id=recipe_id)
        if not recipe.get("isrecipe"):
            raise InvalidInputError(f"Food ID {recipe_id} is not a recipe")
        return recipe

    async def calculate_recipe_from_id(
        self, recipe_id: int, language: str = DEFAULT_LANGUAGE
    ) -> RecipeNutrition:
        """Sum the nutrients of a stored recipe's ingredients."""
        raw_ingredients = await self.get_ingredients(recipe_id, language)
        ingredients = [_ingredient_from_payload(item) for item in raw_ingredients]
        return await self.calculate_recipe_nutrition(ingredients, language)

    async def calculate_recipe_nutrition(
        self, ingredients: list[Ingredient], language: str = DEFAULT_LANGUAGE
    ) -> RecipeNutrition:
        """Resolve every ingredient and merge their scaled nutrients.

        The first component set listed by the database is used. Totals are
        keyed and sorted by component id; a component keeps the unit of the
        first ingredient that reports it. Zero and unparseable values are
        skipped.
        """
        if not ingredients:
            raise InvalidInputError(
                "At least one ingredient is required for recipe analysis"
            )

        component_sets = await self.nutrition_service.get_component_sets(language)
        if not component_sets:
            raise UpstreamError("Failed to retrieve component sets")
        component_set_id = component_sets[0].id

        outcomes = await asyncio.gather(
            *(
                self._resolve_ingredient(ingredient, component_set_id, language)
                for ingredient in ingredients
            )
        )
        details = _unwrap_outcomes(outcomes)
        totals = merge_totals(details, language)
        _logger.info(
            "Recipe nutrition: ingredients=%s components=%s set=%s",
            len(details),
            len(totals),
            component_set_id,
        )
        return RecipeNutrition(ingredients=details, total_values=totals)

    async def _resolve_ingredient(
        self, ingredient: Ingredient, component_set_id: int, language: str
    ) -> ResolutionOutcome:
        try:
            food = await self.nutrition_service.resolve(
                ingredient.food_id, component_set_id, language
            )
        except NutritionError as exc:
            return Failed(ingredient=ingredient, error=exc)
        return Resolved(
            detail=IngredientDetail(
                name=food.name,
                amount=ingredient.amount,
                unit=ingredient.unit,
                nutritional_values=food.values,
            )
        )


def _unwrap_outcomes(outcomes: list[ResolutionOutcome]) -> list[IngredientDetail]:
    """Return details in input order, raising for the first failed ingredient."""
    details: list[IngredientDetail] = []
    for outcome in outcomes:
        if isinstance(outcome, Failed):
            food_id = outcome.ingredient.food_id
            _logger.warning("Ingredient %s failed: %s", food_id, outcome.error)
            raise type(outcome.error)(
                f"Error processing ingredient {food_id}: {outcome.error.message}",
                food_id=food_id,
            ) from outcome.error
        details.append(outcome.detail)
    return details


def merge_totals(details: list[IngredientDetail], language: str) -> list[TotalsEntry]:
    """Scale each ingredient's values by its amount and sum them per component."""
    running: dict[int, _RunningTotal] = {}
    for detail in details:
        scale = detail.amount / REFERENCE_QUANTITY
        for value in detail.nutritional_values:
            if value.magnitude is None or value.magnitude == 0:
                continue
            contribution = value.magnitude * scale
            total = running.get(value.component.id)
            if total is None:
                running[value.component.id] = _RunningTotal(
                    component=value.component,
                    value=contribution,
                    unit=unit_label(value.unit),
                )
            else:
                total.value += contribution

    return [
        TotalsEntry(
            component=total.component,
            value=total.value,
            formatted_value=format_value_with_unit(total.value, total.unit, language),
            unit=total.unit,
        )
        for _, total in sorted(running.items())
    ]


def _ingredient_from_payload(payload: dict[str, object]) -> Ingredient:
    food = payload.get("foodid")
    food_id = food.get("id") if isinstance(food, dict) else food
    if food_id is None:
        raise UpstreamError(
            "Swiss Nutrition API error (n/a): ingredient without food id"
        )
    try:
        return Ingredient(
            food_id=int(food_id),
            amount=float(payload.get("amount") or 0),
            unit=str(payload.get("unit") or ""),
        )
    except (TypeError, ValueError) as exc:
        raise UpstreamError(
            f"Swiss Nutrition API error (n/a): unexpected ingredient {payload!r}"
        ) from exc
