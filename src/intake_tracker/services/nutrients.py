"""Normalization of FDC nutrient lists down to the tracked macros."""

from intake_tracker.domain.foods import NutrientValue

ENERGY = "Energy"
PROTEIN = "Protein"
CARBOHYDRATE = "Carbohydrate, by difference"
TOTAL_FAT = "Total lipid (fat)"

_NUTRIENT_IDS = {
    1008: ENERGY,
    1003: PROTEIN,
    1005: CARBOHYDRATE,
    1004: TOTAL_FAT,
}

_DEFAULT_UNITS = {
    ENERGY: "KCAL",
    PROTEIN: "G",
    CARBOHYDRATE: "G",
    TOTAL_FAT: "G",
}

MACRO_FIELDS = {
    ENERGY: "calories",
    PROTEIN: "protein",
    CARBOHYDRATE: "carbohydrates",
    TOTAL_FAT: "fats",
}


def normalize_nutrients(
    food_nutrients: list[dict[str, object]],
) -> dict[str, NutrientValue]:
    """Keep the four tracked macros, first occurrence of each name wins.

    Accepts both the food detail shape (``nutrient.id`` + ``amount``) and the
    search shape (``nutrientId`` + ``value``).
    """
    values: dict[str, NutrientValue] = {}
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        name = _NUTRIENT_IDS.get(nutrient_id)
        if name is None or name in values:
            continue
        amount = nutrient.get("amount")
        if amount is None:
            amount = nutrient.get("value")
        if not isinstance(amount, int | float) or isinstance(amount, bool):
            continue
        unit_name = nutrient_info.get("unitName") or nutrient.get("unitName")
        values[name] = NutrientValue(
            name=name,
            value=float(amount),
            unit_name=str(unit_name or _DEFAULT_UNITS[name]),
        )
    return values
