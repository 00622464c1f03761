"""Supabase repository for the food cache."""

from dataclasses import dataclass

from supabase import Client

from intake_tracker.adapters.supabase_support import execute
from intake_tracker.domain.foods import CachedFood, NutrientValue
from intake_tracker.services.food_cache import FoodCacheRepository


@dataclass
class SupabaseFoodCacheRepository(FoodCacheRepository):
    """Supabase implementation for cached FDC foods."""

    client: Client

    def get(self, fdc_id: int) -> CachedFood | None:
        """Return the cached food with its nutrients in one request."""
        response = execute(
            self.client.table("food_cache")
            .select(
                "fdc_id, description, brand_name, serving_size_unit, "
                "serving_size, has_real_serving, "
                "food_nutrients(nutrient_name, value, unit_name)"
            )
            .eq("fdc_id", fdc_id)
            .limit(1),
            f"read food {fdc_id} from cache",
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def put(self, food: CachedFood) -> None:
        """Insert the food and its nutrients in a single transaction.

        The ``cache_food`` SQL function ignores rows that already exist.
        """
        execute(
            self.client.rpc(
                "cache_food",
                {
                    "p_food": {
                        "fdc_id": food.fdc_id,
                        "description": food.description,
                        "brand_name": food.brand_name,
                        "serving_size_unit": food.serving_size_unit,
                        "serving_size": food.serving_size,
                        "has_real_serving": food.has_real_serving,
                    },
                    "p_nutrients": [
                        {
                            "nutrient_name": nutrient.name,
                            "value": nutrient.value,
                            "unit_name": nutrient.unit_name,
                        }
                        for nutrient in food.nutrients
                    ],
                },
            ),
            f"cache food {food.fdc_id}",
        )


def _parse_food(row: dict[str, object]) -> CachedFood:
    return CachedFood(
        fdc_id=int(row["fdc_id"]),
        description=str(row.get("description") or ""),
        brand_name=row.get("brand_name"),
        serving_size_unit=str(row.get("serving_size_unit") or "g"),
        serving_size=float(row.get("serving_size") or 100.0),
        has_real_serving=bool(row.get("has_real_serving")),
        nutrients=[
            NutrientValue(
                name=str(nutrient["nutrient_name"]),
                value=float(nutrient.get("value", 0.0)),
                unit_name=str(nutrient.get("unit_name") or ""),
            )
            for nutrient in row.get("food_nutrients") or []
        ],
    )
