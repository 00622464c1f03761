"""Food search and lookup endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Path, Query, Request

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer

router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("/search")
async def search_foods(
    request: Request,
    food: str = Query(default=""),
    limit: int = Query(default=25, ge=1, le=200),
) -> list[dict[str, object]]:
    """Search FDC foods; results are not cached."""
    container: AppContainer = request.app.state.container
    results = await container.food_resolver.search(food, limit=limit)
    return [
        {
            "fdc_id": result.fdc_id,
            "description": result.description,
            "brand_name": result.brand_name,
            "food_nutrients": result.nutrients,
        }
        for result in results
    ]


@router.get("/{fdc_id}")
async def get_food(
    request: Request, fdc_id: int = Path(gt=0)
) -> dict[str, object]:
    """Resolve a food through the cache, tagging where it came from."""
    container: AppContainer = request.app.state.container
    resolution = await container.food_resolver.resolve(fdc_id)
    return {"source": resolution.source, "data": resolution.food}
