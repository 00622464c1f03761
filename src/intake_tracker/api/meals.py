"""Meal view, food logging and deletion endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Path, Request

from intake_tracker.api.auth import require_user
from intake_tracker.api.models import LogFoodRequest  # noqa: TC001

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.get("/meal/{meal_id}")
def get_meal(
    meal_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return one meal of the user with scaled macros."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.get_meal(user_id, meal_id)
    return asdict(meal)


@router.get("/{meal_date}")
def get_meals_by_date(
    meal_date: date, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the four meals of a day with per-food, per-meal and daily totals."""
    container: AppContainer = request.app.state.container
    view = container.meal_service.compute_daily_view(user_id, meal_date)
    return {"date": view.date, "meals": view.meals, "daily_totals": view.daily_totals}


@router.post("/log-food")
async def log_food(
    payload: LogFoodRequest, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Log grams of a food to one of the user's meals."""
    container: AppContainer = request.app.state.container
    logged = await container.meal_service.log_food(
        user_id, payload.meal_id, payload.fdc_id, payload.quantity
    )
    return {
        "message": "Food logged successfully!",
        "meal_id": logged.meal_id,
        "fdc_id": logged.fdc_id,
        "quantity": logged.quantity,
        "food": {"source": logged.resolution.source, "data": logged.resolution.food},
    }


@router.delete("/delete-food/{meal_id}/{fdc_id}")
def delete_food(
    meal_id: UUID,
    request: Request,
    fdc_id: int = Path(gt=0),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Remove a food from one of the user's meals."""
    container: AppContainer = request.app.state.container
    container.meal_service.delete_food(user_id, meal_id, fdc_id)
    return {
        "message": f"Food with ID {fdc_id} deleted successfully from meal {meal_id}",
        "deleted_food_id": fdc_id,
    }


@router.delete("/delete-meal/{meal_id}")
def delete_meal(
    meal_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Delete one of the user's meals together with its logged foods."""
    container: AppContainer = request.app.state.container
    deleted = container.meal_service.delete_meal(user_id, meal_id)
    return {
        "message": f"Meal {meal_id} was deleted",
        "deleted_meal_type": deleted.meal_type,
        "deleted_meal_date": deleted.meal_date,
    }
