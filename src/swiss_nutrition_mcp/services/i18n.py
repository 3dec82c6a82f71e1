"""Translations and locale-aware number formatting."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from swiss_nutrition_mcp.domain.language import DEFAULT_LANGUAGE

TRANSLATIONS: dict[str, dict[str, str]] = {
    "error.api": {
        "en": "Swiss Nutrition Database API error",
        "de": "Schweizer Nährwertdatenbank API-Fehler",
        "fr": "Erreur de l'API de la base de données suisse sur les nutriments",
        "it": "Errore dell'API della banca dati svizzera dei nutrienti",
    },
    "error.notFound": {
        "en": "Food not found",
        "de": "Lebensmittel nicht gefunden",
        "fr": "Aliment non trouvé",
        "it": "Cibo non trovato",
    },
    "search.noResults": {
        "en": "No foods found matching your search criteria",
        "de": "Keine Lebensmittel gefunden, die Ihren Suchkriterien entsprechen",
        "fr": (
            "Aucun aliment correspondant à vos critères de recherche "
            "n'a été trouvé"
        ),
        "it": "Nessun cibo trovato corrispondente ai tuoi criteri di ricerca",
    },
    "category.fruits": {
        "en": "Fruits",
        "de": "Früchte",
        "fr": "Fruits",
        "it": "Frutta",
    },
    "category.vegetables": {
        "en": "Vegetables",
        "de": "Gemüse",
        "fr": "Légumes",
        "it": "Verdura",
    },
    "category.dairy": {
        "en": "Dairy products",
        "de": "Milchprodukte",
        "fr": "Produits laitiers",
        "it": "Latticini",
    },
    "category.meat": {"en": "Meat", "de": "Fleisch", "fr": "Viande", "it": "Carne"},
    "category.fish": {"en": "Fish", "de": "Fisch", "fr": "Poisson", "it": "Pesce"},
    "category.grains": {
        "en": "Grains and cereals",
        "de": "Getreide und Cerealien",
        "fr": "Grains et céréales",
        "it": "Grani e cereali",
    },
    "nutrient.energy": {
        "en": "Energy",
        "de": "Energie",
        "fr": "Énergie",
        "it": "Energia",
    },
    "nutrient.protein": {
        "en": "Protein",
        "de": "Protein",
        "fr": "Protéines",
        "it": "Proteine",
    },
    "nutrient.fat": {
        "en": "Fat",
        "de": "Fett",
        "fr": "Matières grasses",
        "it": "Grassi",
    },
    "nutrient.carbohydrates": {
        "en": "Carbohydrates",
        "de": "Kohlenhydrate",
        "fr": "Glucides",
        "it": "Carboidrati",
    },
    "nutrient.fiber": {
        "en": "Dietary fiber",
        "de": "Ballaststoffe",
        "fr": "Fibres alimentaires",
        "it": "Fibre alimentari",
    },
    "nutrient.sodium": {"en": "Sodium", "de": "Natrium", "fr": "Sodium", "it": "Sodio"},
    "unit.gram": {"en": "gram", "de": "Gramm", "fr": "gramme", "it": "grammo"},
    "unit.kilogram": {
        "en": "kilogram",
        "de": "Kilogramm",
        "fr": "kilogramme",
        "it": "chilogrammo",
    },
    "unit.milligram": {
        "en": "milligram",
        "de": "Milligramm",
        "fr": "milligramme",
        "it": "milligrammo",
    },
    "unit.microgram": {
        "en": "microgram",
        "de": "Mikrogramm",
        "fr": "microgramme",
        "it": "microgrammo",
    },
    "unit.kilocalorie": {"en": "kcal", "de": "kcal", "fr": "kcal", "it": "kcal"},
    "unit.kilojoule": {"en": "kJ", "de": "kJ", "fr": "kJ", "it": "kJ"},
    "tool.searchFoods.description": {
        "en": "Search for foods in the Swiss Nutrition Database",
        "de": "Suche nach Lebensmitteln in der Schweizer Nährwertdatenbank",
        "fr": "Recherche d'aliments dans la base de données suisse sur les nutriments",
        "it": "Cerca alimenti nella banca dati svizzera dei nutrienti",
    },
    "tool.getFoodDetails.description": {
        "en": "Get detailed information about a specific food",
        "de": "Detaillierte Informationen zu einem bestimmten Lebensmittel erhalten",
        "fr": "Obtenir des informations détaillées sur un aliment spécifique",
        "it": "Ottieni informazioni dettagliate su un alimento specifico",
    },
    "tool.calculateRecipeNutrition.description": {
        "en": "Calculate nutritional values for a recipe",
        "de": "Nährwerte für ein Rezept berechnen",
        "fr": "Calculer les valeurs nutritionnelles d'une recette",
        "it": "Calcola i valori nutrizionali per una ricetta",
    },
}


@dataclass(frozen=True)
class _NumberFormat:
    group: str
    decimal: str


# Swiss locales for de/fr/it, matching what the database publishes.
_NUMBER_FORMATS: dict[str, _NumberFormat] = {
    "en": _NumberFormat(group=",", decimal="."),
    "de": _NumberFormat(group="\u2019", decimal="."),
    "fr": _NumberFormat(group="\u202f", decimal=","),
    "it": _NumberFormat(group="\u2019", decimal="."),
}

_MAX_FRACTION_DIGITS = 3


def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Return the message for a key, falling back to English, then the key."""
    translation = TRANSLATIONS.get(key)
    if translation is None:
        return key
    return translation.get(language) or translation[DEFAULT_LANGUAGE]


def format_number(value: float, language: str = DEFAULT_LANGUAGE) -> str:
    """Format a number with at most three fraction digits and grouping."""
    number_format = _NUMBER_FORMATS.get(language, _NUMBER_FORMATS[DEFAULT_LANGUAGE])
    quantized = Decimal(repr(float(value))).quantize(
        Decimal(1).scaleb(-_MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP
    )
    sign = "-" if quantized.is_signed() else ""
    integer_part, _, fraction_part = f"{abs(quantized):f}".partition(".")
    fraction_part = fraction_part.rstrip("0")

    groups: list[str] = []
    while len(integer_part) > 3:  # noqa: PLR2004
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)

    formatted = number_format.group.join(groups)
    if fraction_part:
        formatted = f"{formatted}{number_format.decimal}{fraction_part}"
    return f"{sign}{formatted}"


def format_value_with_unit(
    value: float, unit: str, language: str = DEFAULT_LANGUAGE
) -> str:
    """Format a value followed by its unit, translating well-known unit names."""
    unit_key = f"unit.{unit.lower()}"
    if unit_key in TRANSLATIONS:
        unit = translate(unit_key, language)
    return f"{format_number(value, language)} {unit}"
