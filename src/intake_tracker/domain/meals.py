"""Domain models for meals and their nutrient totals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from intake_tracker.domain.foods import FoodResolution

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class MealShell:
    """A meal slot for a user on a given date."""

    id: UUID
    user_id: UUID
    meal_date: date
    meal_type: str


@dataclass(frozen=True)
class MealNutrientRow:
    """One row of the meal x logged food x nutrient join.

    Food columns are ``None`` for a meal with no logged foods, and nutrient
    columns are ``None`` for a food with no cached nutrients.
    """

    meal_id: UUID
    meal_type: str
    meal_date: date
    fdc_id: int | None = None
    description: str | None = None
    brand_name: str | None = None
    quantity: float | None = None
    nutrient_name: str | None = None
    value: float | None = None


@dataclass(frozen=True)
class MacroTotals:
    """Macro totals scaled to logged quantities."""

    calories: float
    protein: float
    carbohydrates: float
    fats: float


@dataclass(frozen=True)
class FoodMacros:
    """Logged food with macros scaled to its quantity."""

    fdc_id: int
    description: str | None
    brand: str | None
    quantity: float
    calories: float
    protein: float
    carbohydrates: float
    fats: float


@dataclass(frozen=True)
class MealView:
    """A meal with its foods and totals."""

    id: UUID
    type: str
    date: date
    foods: list[FoodMacros]
    totals: MacroTotals


@dataclass(frozen=True)
class DailyView:
    """All four meals of a day plus the day's totals."""

    date: date
    meals: list[MealView]
    daily_totals: MacroTotals


@dataclass(frozen=True)
class LoggedFood:
    """Result of logging a food to a meal."""

    meal_id: UUID
    fdc_id: int
    quantity: float
    resolution: FoodResolution
