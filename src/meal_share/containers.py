"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import Client, create_client

from meal_share.adapters.s3_image_store import S3ImageStore
from meal_share.adapters.sqlite_meal_repository import SqliteMealRepository
from meal_share.adapters.supabase_image_store import SupabaseImageStore
from meal_share.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_share.config import Settings
from meal_share.services.meals import ImageStore, MealRepository, MealService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_service: MealService
    close_resources: Callable[[], None]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    closers: list[Callable[[], None]] = []

    supabase_client: Client | None = None
    if resolved_settings.uses_supabase:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )

    def close_resources() -> None:
        for close in closers:
            close()

    try:
        repository = _build_repository(resolved_settings, supabase_client, closers)
        image_store = _build_image_store(resolved_settings, supabase_client, closers)
    except Exception:
        close_resources()
        raise

    meal_service = MealService(repository=repository, image_store=image_store)

    return AppContainer(
        settings=resolved_settings,
        meal_service=meal_service,
        close_resources=close_resources,
    )


def _build_repository(
    settings: Settings,
    supabase_client: Client | None,
    closers: list[Callable[[], None]],
) -> MealRepository:
    if settings.record_store_backend == "sqlite":
        sqlite_repository = SqliteMealRepository.create(settings.sqlite_path)
        closers.append(sqlite_repository.close)
        return sqlite_repository
    return SupabaseMealRepository(supabase_client)


def _build_image_store(
    settings: Settings,
    supabase_client: Client | None,
    closers: list[Callable[[], None]],
) -> ImageStore:
    if settings.image_store_backend == "supabase":
        return SupabaseImageStore(client=supabase_client, bucket=settings.supabase_bucket)
    s3_store = S3ImageStore.create(
        bucket=settings.aws_bucket_name,
        region=settings.aws_region,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
    )
    closers.append(s3_store.close)
    return s3_store
