"""Nutrition service integrating the Swiss Nutrition Database."""

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
    ComparisonCell,
    ComparisonRow,
    ComponentSet,
    FoodNutrients,
    NutrientComponent,
    NutrientValue,
    NutritionComparison,
    parse_magnitude,
    parse_unit,
    unit_label,
)
from swiss_nutrition_mcp.services.i18n import format_value_with_unit, translate

_MIN_COMPARED_FOODS = 2

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Service for food and nutrient lookups."""

    api_client: NutritionApiClient
    debug: bool = False

    async def resolve_dbid(self, food_id: int) -> int:
        """Translate a public food id to a DBID, keeping the id if that fails.

        Some callers already pass internal ids, so a failed translation is
        not an error.
        """
        try:
            return await self.api_client.get_food_dbid(food_id)
        except NutritionError as exc:
            _logger.debug(
                "DBID lookup failed for food %s, using it as-is: %s", food_id, exc
            )
            return food_id

    async def get_component_sets(
        self, language: str = DEFAULT_LANGUAGE
    ) -> list[ComponentSet]:
        """Return the component sets in the order the database lists them."""
        payload = await self.api_client.get_sets(language)
        return [_component_set(item) for item in payload or []]

    async def get_food_details(
        self, food_id: int, language: str = DEFAULT_LANGUAGE
    ) -> dict[str, object]:
        """Return the raw food record for a public or internal id."""
        dbid = await self.resolve_dbid(food_id)
        food = await self.api_client.get_food(dbid, language)
        if not food:
            raise NotFoundError(translate("error.notFound", language), food_id=food_id)
        return food

    async def get_nutritional_values(
        self,
        food_id: int,
        component_set_id: int,
        language: str = DEFAULT_LANGUAGE,
    ) -> list[NutrientValue]:
        """Return a food's nutrient values for one component set."""
        dbid = await self.resolve_dbid(food_id)
        return await self._values_for_dbid(food_id, dbid, component_set_id, language)

    async def resolve(
        self,
        food_id: int,
        component_set_id: int,
        language: str = DEFAULT_LANGUAGE,
    ) -> FoodNutrients:
        """Return a food's display name with its values for a component set.

        The food record and its values are fetched concurrently once the DBID
        is known.
        """
        dbid = await self.resolve_dbid(food_id)
        food, values = await asyncio.gather(
            self.api_client.get_food(dbid, language),
            self._values_for_dbid(food_id, dbid, component_set_id, language),
        )
        if not food:
            raise NotFoundError(translate("error.notFound", language), food_id=food_id)
        if self.debug:
            _logger.info(
                "Resolved food %s (DBID %s): %s values", food_id, dbid, len(values)
            )
        return FoodNutrients(name=str(food.get("name", "")), values=values)

    async def compare_nutritional_values(
        self,
        food_ids: list[int],
        component_set_id: int,
        language: str = DEFAULT_LANGUAGE,
    ) -> NutritionComparison:
        """Lay out the values of several foods side by side per component."""
        if len(food_ids) < _MIN_COMPARED_FOODS:
            raise InvalidInputError("At least two food IDs are required for comparison")

        foods = await asyncio.gather(
            *(self.get_food_details(food_id, language) for food_id in food_ids)
        )
        value_lists = await asyncio.gather(
            *(
                self.get_nutritional_values(food_id, component_set_id, language)
                for food_id in food_ids
            )
        )

        components: dict[int, NutrientComponent] = {}
        by_food: list[dict[int, NutrientValue]] = []
        for values in value_lists:
            indexed: dict[int, NutrientValue] = {}
            for value in values:
                components.setdefault(value.component.id, value.component)
                indexed[value.component.id] = value
            by_food.append(indexed)

        rows = [
            ComparisonRow(
                component=components[component_id],
                cells=[
                    _comparison_cell(indexed.get(component_id), language)
                    for indexed in by_food
                ],
            )
            for component_id in sorted(components)
        ]
        return NutritionComparison(foods=list(foods), rows=rows)

    async def _values_for_dbid(
        self,
        food_id: int,
        dbid: int,
        component_set_id: int,
        language: str,
    ) -> list[NutrientValue]:
        payload = await self.api_client.get_food_values(
            dbid, component_set_id, language
        )
        if not payload:
            raise NotFoundError(
                f"No nutritional values found for food ID {food_id} "
                f"with component set ID {component_set_id}",
                food_id=food_id,
            )
        return [parse_nutrient_value(item) for item in payload]


def parse_nutrient_value(payload: dict[str, object]) -> NutrientValue:
    """Build a nutrient value from its API representation."""
    component = payload.get("component")
    if not isinstance(component, dict) or component.get("id") is None:
        raise UpstreamError(
            "Swiss Nutrition API error (n/a): "
            f"value {payload.get('id')} has no component"
        )
    try:
        component_id = int(component["id"])
    except (TypeError, ValueError) as exc:
        raise UpstreamError(
            "Swiss Nutrition API error (n/a): "
            f"unexpected component id {component['id']!r}"
        ) from exc
    raw_value = payload.get("value")
    return NutrientValue(
        id=payload.get("id"),
        component=NutrientComponent(
            id=component_id,
            name=str(component.get("name", "")),
            code=component.get("code"),
        ),
        magnitude=parse_magnitude(raw_value),
        raw_value=raw_value,
        unit=parse_unit(payload.get("unit")),
    )


def _component_set(payload: dict[str, object]) -> ComponentSet:
    try:
        set_id = int(payload["id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamError(
            f"Swiss Nutrition API error (n/a): unexpected component set {payload!r}"
        ) from exc
    return ComponentSet(
        id=set_id,
        name=str(payload.get("name", "")),
        code=payload.get("code"),
    )


def _comparison_cell(value: NutrientValue | None, language: str) -> ComparisonCell:
    if value is None or value.magnitude is None:
        return ComparisonCell(value=None, formatted_value="-")
    return ComparisonCell(
        value=value.magnitude,
        formatted_value=format_value_with_unit(
            value.magnitude, unit_label(value.unit), language
        ),
    )
