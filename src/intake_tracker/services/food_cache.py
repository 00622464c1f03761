"""Persistence interface for the food cache."""

from typing import Protocol

from intake_tracker.domain.foods import CachedFood


class FoodCacheRepository(Protocol):
    """System of record for previously resolved foods."""

    def get(self, fdc_id: int) -> CachedFood | None:
        """Return the cached food with its nutrients, if present."""

    def put(self, food: CachedFood) -> None:
        """Store a food and its nutrients atomically.

        Storing an id that already exists leaves the existing entry as is and
        never duplicates nutrient rows.
        """
