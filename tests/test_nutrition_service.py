"""Tests for nutrition service."""

import asyncio

import pytest

from swiss_nutrition_mcp.domain.errors import (
    InvalidInputError,
    NotFoundError,
    UpstreamError,
)
from swiss_nutrition_mcp.domain.nutrition import NamedUnit, PlainUnit
from swiss_nutrition_mcp.services.nutrition import (
    NutritionService,
    parse_nutrient_value,
)
from tests.conftest import FAT, PROTEIN, SODIUM, FakeNutritionApiClient, make_value


def test_resolve_returns_name_and_values() -> None:
    client = FakeNutritionApiClient(dbids={11: 1100})
    client.add_food(
        1100, "Emmentaler", [make_value(PROTEIN, "28.7"), make_value(FAT, 31)]
    )
    service = NutritionService(client)

    food = asyncio.run(service.resolve(11, component_set_id=1, language="fr"))

    assert food.name == "Emmentaler"
    assert [v.magnitude for v in food.values] == [28.7, 31.0]
    assert client.called("get_food_values") == [(1100, 1, "fr")]


def test_resolve_fetches_food_and_values_concurrently() -> None:
    in_flight = 0
    max_in_flight = 0

    class _TrackingClient(FakeNutritionApiClient):
        async def _track(self) -> None:
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        async def get_food(self, dbid: int, lang: str = "en") -> dict[str, object]:
            await self._track()
            return await super().get_food(dbid, lang)

        async def get_food_values(
            self, dbid: int, component_set_id: int, lang: str = "en"
        ) -> list[dict[str, object]]:
            await self._track()
            return await super().get_food_values(dbid, component_set_id, lang)

    client = _TrackingClient()
    client.add_food(16, "Butter", [make_value(FAT, 82)])
    service = NutritionService(client)

    food = asyncio.run(service.resolve(16, component_set_id=1))

    assert food.name == "Butter"
    assert max_in_flight == 2


def test_resolve_falls_back_to_given_id_when_translation_fails() -> None:
    client = FakeNutritionApiClient()
    client.add_food(12, "Gruyère", [make_value(PROTEIN, 27)])
    service = NutritionService(client)

    food = asyncio.run(service.resolve(12, component_set_id=1))

    assert food.name == "Gruyère"
    assert client.called("get_food_dbid") == [(12,)]
    assert client.called("get_food") == [(12, "en")]


def test_resolve_without_values_is_not_found() -> None:
    client = FakeNutritionApiClient()
    client.add_food(13, "Water", [])
    service = NutritionService(client)

    with pytest.raises(NotFoundError, match="food ID 13 with component set ID 2"):
        asyncio.run(service.resolve(13, component_set_id=2))


def test_resolve_propagates_upstream_errors() -> None:
    client = FakeNutritionApiClient(
        value_failures={14: UpstreamError("Swiss Nutrition API error (500): boom")}
    )
    client.add_food(14, "Bread", [make_value(PROTEIN, 8)])
    service = NutritionService(client)

    with pytest.raises(UpstreamError, match="500"):
        asyncio.run(service.resolve(14, component_set_id=1))


def test_resolve_malformed_component_id_is_upstream_error() -> None:
    client = FakeNutritionApiClient()
    value = make_value(PROTEIN, 3)
    value["component"] = {"id": "abc", "name": "Protein"}
    client.add_food(17, "Tofu", [value])
    service = NutritionService(client)

    with pytest.raises(UpstreamError, match="unexpected component id 'abc'"):
        asyncio.run(service.resolve(17, component_set_id=1))


def test_get_component_sets_keeps_source_order() -> None:
    client = FakeNutritionApiClient()
    service = NutritionService(client)

    sets = asyncio.run(service.get_component_sets("it"))

    assert [s.id for s in sets] == [1, 2]
    assert sets[0].name == "Macronutrients"
    assert client.called("get_sets") == [("it",)]


def test_get_component_sets_without_id_is_upstream_error() -> None:
    client = FakeNutritionApiClient(sets=[{"name": "Macro"}])
    service = NutritionService(client)

    with pytest.raises(UpstreamError, match="unexpected component set"):
        asyncio.run(service.get_component_sets())


def test_get_food_details_translates_the_id() -> None:
    client = FakeNutritionApiClient(dbids={15: 1500})
    client.add_food(1500, "Yogurt", [])
    service = NutritionService(client)

    food = asyncio.run(service.get_food_details(15))

    assert food["name"] == "Yogurt"


def test_compare_builds_rows_per_component() -> None:
    client = FakeNutritionApiClient()
    client.add_food(1, "Apple", [make_value(FAT, 0.2), make_value(PROTEIN, 0.3)])
    client.add_food(
        2, "Banana", [make_value(PROTEIN, "1.1"), make_value(SODIUM, 1, "mg")]
    )
    service = NutritionService(client)

    comparison = asyncio.run(service.compare_nutritional_values([1, 2], 1))

    assert [f["name"] for f in comparison.foods] == ["Apple", "Banana"]
    assert [row.component.id for row in comparison.rows] == [PROTEIN, FAT, SODIUM]
    protein, fat, sodium = comparison.rows
    assert [c.value for c in protein.cells] == [0.3, 1.1]
    assert fat.cells[1].value is None
    assert fat.cells[1].formatted_value == "-"
    assert sodium.cells[1].formatted_value == "1 mg"


def test_compare_requires_two_foods() -> None:
    service = NutritionService(FakeNutritionApiClient())

    with pytest.raises(InvalidInputError):
        asyncio.run(service.compare_nutritional_values([1], 1))


def test_parse_nutrient_value_handles_both_unit_forms() -> None:
    plain = parse_nutrient_value(make_value(PROTEIN, 3, "g"))
    named = parse_nutrient_value(
        make_value(PROTEIN, 3, {"id": 2, "name": "mg", "code": "MG"})
    )

    assert plain.unit == PlainUnit("g")
    assert named.unit == NamedUnit(name="mg", id=2, code="MG")


def test_parse_nutrient_value_requires_a_component() -> None:
    with pytest.raises(UpstreamError):
        parse_nutrient_value({"id": 1, "value": 3, "unit": "g"})
