"""Meal nutrient aggregation and food logging."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from intake_tracker.domain.errors import ForbiddenError, NotFoundError, ValidationError
from intake_tracker.domain.meals import (
    DailyView,
    FoodMacros,
    LoggedFood,
    MacroTotals,
    MealNutrientRow,
    MealShell,
    MealView,
)
from intake_tracker.services.foods import FoodResolver
from intake_tracker.services.meal_shells import MealShellManager, meal_order
from intake_tracker.services.nutrients import MACRO_FIELDS

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals and their logged foods.

    Every query is scoped by the owning user.
    """

    def get_meal(self, meal_id: UUID, user_id: UUID) -> MealShell | None:
        """Return the meal if it belongs to the user."""

    def list_daily_rows(self, user_id: UUID, meal_date: date) -> list[MealNutrientRow]:
        """Return the meal x food x nutrient join for a user and date.

        Rows are read in a single snapshot. Meals without foods yield one row
        with empty food columns.
        """

    def list_meal_rows(self, meal_id: UUID, user_id: UUID) -> list[MealNutrientRow]:
        """Return the food x nutrient join for a single meal of the user."""

    def add_food_quantity(self, meal_id: UUID, fdc_id: int, quantity: float) -> float:
        """Add grams to a meal's food entry, creating it if needed.

        Returns the accumulated quantity.
        """

    def delete_food(self, meal_id: UUID, fdc_id: int) -> bool:
        """Delete a food entry; return false when no entry matched."""

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> MealShell | None:
        """Delete a user's meal with its entries and return it."""


@dataclass
class MealService:
    """Builds daily meal views and records logged foods."""

    repository: MealRepository
    shell_manager: MealShellManager
    food_resolver: FoodResolver

    def compute_daily_view(self, user_id: UUID, meal_date: date) -> DailyView:
        """Return all four meals of the day with scaled macros and totals."""
        shells = self.shell_manager.ensure_shells(user_id, meal_date)
        rows = self.repository.list_daily_rows(user_id, meal_date)
        meals = aggregate_meals(rows, shells)
        return DailyView(
            date=meal_date,
            meals=meals,
            daily_totals=_sum_totals([meal.totals for meal in meals]),
        )

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealView:
        """Return a single meal of the user with scaled macros."""
        rows = self.repository.list_meal_rows(meal_id, user_id)
        meals = aggregate_meals(rows)
        if not meals:
            raise NotFoundError(
                "Meal not found or you don't have permission to access it"
            )
        return meals[0]

    async def log_food(
        self, user_id: UUID, meal_id: UUID, fdc_id: int, quantity: float
    ) -> LoggedFood:
        """Log grams of a food to a meal, accumulating repeated logs."""
        _validate_log_request(fdc_id, quantity)
        self._require_owned_meal(
            user_id, meal_id, "You don't have permission to add food to this meal"
        )
        resolution = await self.food_resolver.resolve(fdc_id)
        total = self.repository.add_food_quantity(meal_id, fdc_id, quantity)
        _logger.info(
            "Logged food: meal_id=%s fdc_id=%s quantity=%s total=%s source=%s",
            meal_id,
            fdc_id,
            quantity,
            total,
            resolution.source,
        )
        return LoggedFood(
            meal_id=meal_id, fdc_id=fdc_id, quantity=total, resolution=resolution
        )

    def delete_food(self, user_id: UUID, meal_id: UUID, fdc_id: int) -> None:
        """Remove a food from a meal."""
        self._require_owned_meal(
            user_id, meal_id, "You don't have permission to modify this meal"
        )
        if not self.repository.delete_food(meal_id, fdc_id):
            raise NotFoundError("Food not found in this meal")

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> MealShell:
        """Delete a meal and everything logged to it."""
        deleted = self.repository.delete_meal(meal_id, user_id)
        if deleted is None:
            raise NotFoundError(
                "Meal not found or you don't have permission to delete it"
            )
        return deleted

    def _require_owned_meal(self, user_id: UUID, meal_id: UUID, message: str) -> None:
        if self.repository.get_meal(meal_id, user_id) is None:
            raise ForbiddenError(message)


@dataclass
class _FoodAccumulator:
    fdc_id: int
    description: str | None
    brand: str | None
    quantity: float
    values: dict[str, float] = field(
        default_factory=lambda: dict.fromkeys(MACRO_FIELDS.values(), 0.0)
    )


@dataclass
class _MealAccumulator:
    id: UUID
    type: str
    date: date
    foods: dict[int, _FoodAccumulator] = field(default_factory=dict)


def aggregate_meals(
    rows: list[MealNutrientRow], shells: list[MealShell] | None = None
) -> list[MealView]:
    """Group joined rows into meals and foods with quantity-scaled macros.

    Shells seed the result so meals with nothing logged still appear. Meals
    come back in breakfast, lunch, dinner, snack order.
    """
    meals: dict[UUID, _MealAccumulator] = {}
    for shell in shells or []:
        meals[shell.id] = _MealAccumulator(
            id=shell.id, type=shell.meal_type, date=shell.meal_date
        )

    for row in rows:
        meal = meals.get(row.meal_id)
        if meal is None:
            meal = _MealAccumulator(
                id=row.meal_id, type=row.meal_type, date=row.meal_date
            )
            meals[row.meal_id] = meal
        if row.fdc_id is None:
            continue

        food = meal.foods.get(row.fdc_id)
        if food is None:
            food = _FoodAccumulator(
                fdc_id=row.fdc_id,
                description=row.description,
                brand=row.brand_name,
                quantity=row.quantity or 0.0,
            )
            meal.foods[row.fdc_id] = food

        macro_field = MACRO_FIELDS.get(row.nutrient_name or "")
        if macro_field is None or row.value is None:
            continue
        food.values[macro_field] += scale_nutrient(row.value, food.quantity)

    ordered = sorted(meals.values(), key=lambda meal: meal_order(meal.type))
    return [_to_meal_view(meal) for meal in ordered]


def scale_nutrient(value_per_100g: float, quantity: float) -> float:
    """Scale a per-100 g nutrient value to a logged quantity in grams."""
    return (value_per_100g / 100) * quantity


def _to_meal_view(meal: _MealAccumulator) -> MealView:
    foods = [
        FoodMacros(
            fdc_id=food.fdc_id,
            description=food.description,
            brand=food.brand,
            quantity=food.quantity,
            calories=food.values["calories"],
            protein=food.values["protein"],
            carbohydrates=food.values["carbohydrates"],
            fats=food.values["fats"],
        )
        for food in meal.foods.values()
    ]
    totals = _sum_totals(
        [
            MacroTotals(
                calories=food.calories,
                protein=food.protein,
                carbohydrates=food.carbohydrates,
                fats=food.fats,
            )
            for food in foods
        ]
    )
    return MealView(
        id=meal.id, type=meal.type, date=meal.date, foods=foods, totals=totals
    )


def _sum_totals(items: list[MacroTotals]) -> MacroTotals:
    total = MacroTotals(0.0, 0.0, 0.0, 0.0)
    for item in items:
        total = MacroTotals(
            calories=total.calories + item.calories,
            protein=total.protein + item.protein,
            carbohydrates=total.carbohydrates + item.carbohydrates,
            fats=total.fats + item.fats,
        )
    return total


def _validate_log_request(fdc_id: int, quantity: float) -> None:
    if isinstance(fdc_id, bool) or not isinstance(fdc_id, int) or fdc_id <= 0:
        raise ValidationError("fdcId must be a positive integer")
    if (
        isinstance(quantity, bool)
        or not isinstance(quantity, int | float)
        or not math.isfinite(quantity)
        or quantity <= 0
    ):
        raise ValidationError("Quantity must be a positive number")
