"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from intake_tracker.adapters.fdc_client import HttpxFdcClient
from intake_tracker.adapters.supabase_auth import Authenticator, SupabaseAuthenticator
from intake_tracker.adapters.supabase_food_cache_repository import (
    SupabaseFoodCacheRepository,
)
from intake_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from intake_tracker.config import Settings
from intake_tracker.services.foods import FoodResolver
from intake_tracker.services.meal_shells import MealShellManager
from intake_tracker.services.meals import MealService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    authenticator: Authenticator
    food_resolver: FoodResolver
    meal_shell_manager: MealShellManager
    meal_service: MealService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_cache_repository = SupabaseFoodCacheRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
    )
    food_resolver = FoodResolver(
        fdc_client=fdc_client,
        repository=food_cache_repository,
    )
    meal_shell_manager = MealShellManager(meal_repository)
    meal_service = MealService(
        repository=meal_repository,
        shell_manager=meal_shell_manager,
        food_resolver=food_resolver,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        authenticator=SupabaseAuthenticator(supabase_client),
        food_resolver=food_resolver,
        meal_shell_manager=meal_shell_manager,
        meal_service=meal_service,
        close_resources=close_resources,
    )
