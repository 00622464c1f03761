"""Guarantees the four daily meal slots exist for a user."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from intake_tracker.domain.meals import MEAL_TYPES, MealShell

_logger = logging.getLogger(__name__)


class MealShellRepository(Protocol):
    """Persistence interface for meal shells."""

    def list_meals(self, user_id: UUID, meal_date: date) -> list[MealShell]:
        """Return the user's meals for a date."""

    def insert_meals(
        self, user_id: UUID, meal_date: date, meal_types: list[str]
    ) -> None:
        """Insert meals, skipping any (user, date, type) that already exists."""


@dataclass
class MealShellManager:
    """Creates missing meal shells idempotently."""

    repository: MealShellRepository

    def ensure_shells(self, user_id: UUID, meal_date: date) -> list[MealShell]:
        """Return the four meals for the date, creating any that are missing."""
        existing = self.repository.list_meals(user_id, meal_date)
        present = {meal.meal_type for meal in existing}
        missing = [meal_type for meal_type in MEAL_TYPES if meal_type not in present]
        if not missing:
            return sort_meals(existing)

        _logger.info(
            "Creating meal shells: user_id=%s date=%s types=%s",
            user_id,
            meal_date,
            ",".join(missing),
        )
        self.repository.insert_meals(user_id, meal_date, missing)
        # Re-read: a concurrent caller may have created some of them first.
        return sort_meals(self.repository.list_meals(user_id, meal_date))


def sort_meals(meals: list[MealShell]) -> list[MealShell]:
    """Order meals breakfast, lunch, dinner, snack."""
    return sorted(meals, key=lambda meal: meal_order(meal.meal_type))


def meal_order(meal_type: str) -> int:
    """Position of a meal type in display order; unknown types sort last."""
    if meal_type in MEAL_TYPES:
        return MEAL_TYPES.index(meal_type)
    return len(MEAL_TYPES)
