"""Food resolution against the cache and USDA FDC."""

import logging
from dataclasses import dataclass, field

from intake_tracker.adapters.fdc_client import FdcClient
from intake_tracker.domain.errors import ValidationError
from intake_tracker.domain.foods import (
    SOURCE_API,
    SOURCE_CACHE,
    CachedFood,
    FoodResolution,
    FoodSearchResult,
)
from intake_tracker.services.food_cache import FoodCacheRepository
from intake_tracker.services.nutrients import normalize_nutrients
from intake_tracker.services.single_flight import SingleFlight

DEFAULT_SERVING_SIZE_UNIT = "g"
DEFAULT_SERVING_SIZE = 100.0

_logger = logging.getLogger(__name__)


@dataclass
class FoodResolver:
    """Cache-aside lookups of FDC foods.

    Resolved foods are persisted in the food cache and served from there on
    every later lookup. Concurrent misses for the same id share a single
    upstream call.
    """

    fdc_client: FdcClient
    repository: FoodCacheRepository
    in_flight: SingleFlight = field(default_factory=SingleFlight)

    async def resolve(self, fdc_id: int) -> FoodResolution:
        """Return the food from the cache, fetching and caching it on a miss."""
        cached = self.repository.get(fdc_id)
        if cached is not None:
            return FoodResolution(source=SOURCE_CACHE, food=cached)
        return await self.in_flight.do(fdc_id, lambda: self._fetch_and_store(fdc_id))

    async def search(self, query: str, limit: int = 25) -> list[FoodSearchResult]:
        """Search FDC foods. Results are passed through and never cached."""
        cleaned = query.strip()
        if not cleaned:
            raise ValidationError("Query parameter is required")
        payload = await self.fdc_client.search_foods(cleaned, page_size=limit)
        return [
            FoodSearchResult(
                fdc_id=int(food["fdcId"]),
                description=str(food.get("description") or ""),
                brand_name=str(food.get("brandName") or ""),
                nutrients={
                    name: nutrient.value
                    for name, nutrient in normalize_nutrients(
                        food.get("foodNutrients") or []
                    ).items()
                },
            )
            for food in payload.get("foods") or []
        ]

    async def _fetch_and_store(self, fdc_id: int) -> FoodResolution:
        # Another worker may have filled the cache since the first check.
        cached = self.repository.get(fdc_id)
        if cached is not None:
            return FoodResolution(source=SOURCE_CACHE, food=cached)

        _logger.info("Food cache miss: fdc_id=%s", fdc_id)
        payload = await self.fdc_client.get_food(fdc_id)
        food = food_from_payload(fdc_id, payload)
        self.repository.put(food)
        return FoodResolution(source=SOURCE_API, food=food)


def food_from_payload(fdc_id: int, payload: dict[str, object]) -> CachedFood:
    """Build the canonical cache record from an FDC food payload."""
    nutrients = normalize_nutrients(payload.get("foodNutrients") or [])
    serving_size = payload.get("servingSize")
    serving_size_unit = payload.get("servingSizeUnit") or DEFAULT_SERVING_SIZE_UNIT
    return CachedFood(
        fdc_id=fdc_id,
        description=str(payload.get("description") or ""),
        brand_name=payload.get("brandName") or None,
        serving_size_unit=str(serving_size_unit),
        serving_size=float(serving_size) if serving_size else DEFAULT_SERVING_SIZE,
        has_real_serving=bool(serving_size),
        nutrients=list(nutrients.values()),
    )
