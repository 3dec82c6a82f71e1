"""Nutrition domain models."""

import math
import re
from dataclasses import dataclass

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class NutrientComponent:
    """A nutrient category such as protein or sodium."""

    id: int
    name: str
    code: str | None = None


@dataclass(frozen=True)
class PlainUnit:
    """Unit delivered as a bare label."""

    label: str


@dataclass(frozen=True)
class NamedUnit:
    """Unit delivered as a structured object."""

    name: str
    id: int | None = None
    code: str | None = None


Unit = PlainUnit | NamedUnit


def unit_label(unit: Unit) -> str:
    """Return the display string for either unit form."""
    match unit:
        case PlainUnit(label=label):
            return label
        case NamedUnit(name=name):
            return name
    raise TypeError(f"Unsupported unit: {unit!r}")


def parse_unit(raw: object) -> Unit:
    """Build a unit from its wire form, a string or an object with a name."""
    if isinstance(raw, dict):
        return NamedUnit(
            name=str(raw.get("name") or ""),
            id=raw.get("id"),
            code=raw.get("code"),
        )
    if raw is None:
        return PlainUnit("")
    return PlainUnit(str(raw))


def parse_magnitude(raw: object) -> float | None:
    """Parse a measured magnitude, returning None when it is absent.

    Strings are read up to the first non-numeric character, so "12.5 g"
    gives 12.5 while "n/a" gives None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        number = float(raw)
    elif isinstance(raw, str):
        match = _LEADING_NUMBER.match(raw)
        if match is None:
            return None
        number = float(match.group(1))
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class NutrientValue:
    """One measured value of one component for one food."""

    id: int | None
    component: NutrientComponent
    magnitude: float | None
    raw_value: object
    unit: Unit


@dataclass(frozen=True)
class ComponentSet:
    """A named group of components queried together."""

    id: int
    name: str
    code: str | None = None


@dataclass(frozen=True)
class FoodNutrients:
    """A food's display name with its nutrient values for one component set."""

    name: str
    values: list[NutrientValue]


@dataclass(frozen=True)
class Ingredient:
    """Recipe ingredient requested by a caller."""

    food_id: int
    amount: float
    unit: str


@dataclass(frozen=True)
class IngredientDetail:
    """Resolved ingredient with its per-100-unit nutrient values."""

    name: str
    amount: float
    unit: str
    nutritional_values: list[NutrientValue]


@dataclass(frozen=True)
class TotalsEntry:
    """Recipe total for one nutrient component."""

    component: NutrientComponent
    value: float
    formatted_value: str
    unit: str


@dataclass(frozen=True)
class RecipeNutrition:
    """Per-ingredient details and merged totals for a recipe."""

    ingredients: list[IngredientDetail]
    total_values: list[TotalsEntry]


@dataclass(frozen=True)
class ComparisonCell:
    """One food's value for one component in a comparison table."""

    value: float | None
    formatted_value: str


@dataclass(frozen=True)
class ComparisonRow:
    """One component across every compared food, in request order."""

    component: NutrientComponent
    cells: list[ComparisonCell]


@dataclass(frozen=True)
class NutritionComparison:
    """Foods compared side by side."""

    foods: list[dict[str, object]]
    rows: list[ComparisonRow]
