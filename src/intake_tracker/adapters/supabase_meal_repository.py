"""Supabase repository for meals and logged foods."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from intake_tracker.adapters.supabase_support import execute
from intake_tracker.domain.errors import StoreError
from intake_tracker.domain.meals import MealNutrientRow, MealShell
from intake_tracker.services.meal_shells import MealShellRepository
from intake_tracker.services.meals import MealRepository

_MEAL_COLUMNS = "id, user_id, meal_date, meal_type"
_JOINED_COLUMNS = (
    "id, meal_date, meal_type, "
    "meal_foods(food_id, quantity, "
    "food_cache(description, brand_name, "
    "food_nutrients(nutrient_name, value, unit_name)))"
)


@dataclass
class SupabaseMealRepository(MealShellRepository, MealRepository):
    """Supabase implementation for meal shells and meal food entries."""

    client: Client

    def list_meals(self, user_id: UUID, meal_date: date) -> list[MealShell]:
        """Return the user's meals for a date."""
        response = execute(
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("meal_date", meal_date.isoformat()),
            "list meals",
        )
        return [_parse_meal(row) for row in response.data or []]

    def insert_meals(
        self, user_id: UUID, meal_date: date, meal_types: list[str]
    ) -> None:
        """Insert meals with ON CONFLICT DO NOTHING on (user, date, type)."""
        execute(
            self.client.table("meals").upsert(
                [
                    {
                        "user_id": str(user_id),
                        "meal_date": meal_date.isoformat(),
                        "meal_type": meal_type,
                    }
                    for meal_type in meal_types
                ],
                on_conflict="user_id,meal_date,meal_type",
                ignore_duplicates=True,
            ),
            "create meals",
        )

    def get_meal(self, meal_id: UUID, user_id: UUID) -> MealShell | None:
        """Return the meal if it belongs to the user."""
        response = execute(
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "read meal",
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_daily_rows(self, user_id: UUID, meal_date: date) -> list[MealNutrientRow]:
        """Return the joined rows for a day in a single request."""
        response = execute(
            self.client.table("meals")
            .select(_JOINED_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("meal_date", meal_date.isoformat()),
            "read daily meals",
        )
        return _flatten(response.data or [])

    def list_meal_rows(self, meal_id: UUID, user_id: UUID) -> list[MealNutrientRow]:
        """Return the joined rows for one meal in a single request."""
        response = execute(
            self.client.table("meals")
            .select(_JOINED_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id)),
            "read meal foods",
        )
        return _flatten(response.data or [])

    def add_food_quantity(self, meal_id: UUID, fdc_id: int, quantity: float) -> float:
        """Upsert the entry, adding to the existing quantity in one statement."""
        response = execute(
            self.client.rpc(
                "log_meal_food",
                {
                    "p_meal_id": str(meal_id),
                    "p_food_id": fdc_id,
                    "p_quantity": quantity,
                },
            ),
            "log meal food",
        )
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if isinstance(data, dict):
            data = data.get("quantity", data.get("log_meal_food"))
        if not isinstance(data, int | float):
            raise StoreError("Failed to log meal food")
        return float(data)

    def delete_food(self, meal_id: UUID, fdc_id: int) -> bool:
        """Delete a meal food entry."""
        response = execute(
            self.client.table("meal_foods")
            .delete()
            .eq("meal_id", str(meal_id))
            .eq("food_id", fdc_id),
            "delete meal food",
        )
        return bool(response.data)

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> MealShell | None:
        """Delete a user's meal; entries go with it via ON DELETE CASCADE."""
        response = execute(
            self.client.table("meals")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id)),
            "delete meal",
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])


def _parse_meal(row: dict[str, object]) -> MealShell:
    return MealShell(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_date=date.fromisoformat(str(row["meal_date"])),
        meal_type=str(row["meal_type"]),
    )


def _flatten(meals: list[dict[str, object]]) -> list[MealNutrientRow]:
    """Turn embedded meal resources into LEFT JOIN style rows."""
    rows: list[MealNutrientRow] = []
    for meal in meals:
        base = {
            "meal_id": UUID(str(meal["id"])),
            "meal_type": str(meal["meal_type"]),
            "meal_date": date.fromisoformat(str(meal["meal_date"])),
        }
        entries = meal.get("meal_foods") or []
        if not entries:
            rows.append(MealNutrientRow(**base))
            continue
        for entry in entries:
            food = entry.get("food_cache") or {}
            food_columns = {
                "fdc_id": int(entry["food_id"]),
                "description": food.get("description"),
                "brand_name": food.get("brand_name"),
                "quantity": float(entry.get("quantity") or 0.0),
            }
            nutrients = food.get("food_nutrients") or []
            if not nutrients:
                rows.append(MealNutrientRow(**base, **food_columns))
                continue
            for nutrient in nutrients:
                value = nutrient.get("value")
                rows.append(
                    MealNutrientRow(
                        **base,
                        **food_columns,
                        nutrient_name=nutrient.get("nutrient_name"),
                        value=float(value) if value is not None else None,
                    )
                )
    return rows
