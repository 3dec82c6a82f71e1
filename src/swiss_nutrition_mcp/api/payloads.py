"""JSON payloads returned to MCP clients."""

import json

from swiss_nutrition_mcp.domain.nutrition import (
    ComponentSet,
    IngredientDetail,
    NutrientComponent,
    NutrientValue,
    NutritionComparison,
    RecipeNutrition,
    TotalsEntry,
    unit_label,
)


def to_json_text(payload: object) -> str:
    """Serialize a payload the way tool results are shown to clients."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def component_payload(component: NutrientComponent) -> dict[str, object]:
    payload: dict[str, object] = {"id": component.id, "name": component.name}
    if component.code is not None:
        payload["code"] = component.code
    return payload


def component_set_payload(component_set: ComponentSet) -> dict[str, object]:
    return {
        "id": component_set.id,
        "name": component_set.name,
        "code": component_set.code,
    }


def value_payload(value: NutrientValue) -> dict[str, object]:
    return {
        "id": value.id,
        "value": value.raw_value,
        "component": component_payload(value.component),
        "unit": unit_label(value.unit),
    }


def ingredient_detail_payload(detail: IngredientDetail) -> dict[str, object]:
    return {
        "name": detail.name,
        "amount": detail.amount,
        "unit": detail.unit,
        "nutritionalValues": [value_payload(v) for v in detail.nutritional_values],
    }


def totals_entry_payload(entry: TotalsEntry) -> dict[str, object]:
    return {
        "component": component_payload(entry.component),
        "value": entry.value,
        "formattedValue": entry.formatted_value,
        "unit": entry.unit,
    }


def recipe_nutrition_payload(result: RecipeNutrition) -> dict[str, object]:
    """Shape a recipe calculation as {ingredients, totalValues}."""
    return {
        "ingredients": [ingredient_detail_payload(d) for d in result.ingredients],
        "totalValues": [totals_entry_payload(e) for e in result.total_values],
    }


def comparison_payload(comparison: NutritionComparison) -> dict[str, object]:
    """Shape a comparison as the foods plus one row per component."""
    return {
        "foods": comparison.foods,
        "comparisonTable": [
            {
                "component": component_payload(row.component),
                "values": [
                    {"value": cell.value, "formattedValue": cell.formatted_value}
                    for cell in row.cells
                ],
            }
            for row in comparison.rows
        ],
    }
