"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from meal_share.config import Settings
from meal_share.containers import AppContainer
from meal_share.domain.errors import (
    DuplicateSlugError,
    ImageExistsError,
    ImageStoreError,
    StoreError,
)
from meal_share.domain.meals import Meal, MealDraft, NewMeal
from meal_share.services.meals import ImageStore, MealRepository, MealService


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: list[Meal] = field(default_factory=list)
    create_calls: list[NewMeal] = field(default_factory=list)
    fail_with: StoreError | None = None

    def list_meals(self) -> list[Meal]:
        if self.fail_with:
            raise self.fail_with
        return list(self.meals)

    def get_meal_by_slug(self, slug: str) -> Meal | None:
        if self.fail_with:
            raise self.fail_with
        for meal in self.meals:
            if meal.slug == slug:
                return meal
        return None

    def create_meal(self, meal: NewMeal) -> None:
        self.create_calls.append(meal)
        if self.fail_with:
            raise self.fail_with
        if any(existing.slug == meal.slug for existing in self.meals):
            raise DuplicateSlugError(meal.slug)
        self.meals.append(
            Meal(
                id=len(self.meals) + 1,
                title=meal.title,
                slug=meal.slug,
                summary=meal.summary,
                instructions=meal.instructions,
                creator=meal.creator,
                creator_email=meal.creator_email,
                image=meal.image,
            )
        )


@dataclass
class InMemoryImageStore(ImageStore):
    """In-memory image store that keeps uploaded objects and never overwrites."""

    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)
    fail: bool = False

    def upload(self, key: str, payload: bytes, content_type: str) -> None:
        if self.fail:
            raise ImageStoreError(f"Failed to upload image {key!r}: bucket missing")
        if key in self.objects:
            raise ImageExistsError(key)
        self.objects[key] = (payload, content_type)


def make_draft(**overrides: object) -> MealDraft:
    """Return a valid draft, optionally overriding fields."""
    values: dict[str, object] = {
        "title": "Spicy Thai Curry!",
        "summary": "A fragrant weeknight curry.",
        "instructions": "Step 1\nStep 2",
        "creator": "Ada Cook",
        "creator_email": "ada@example.com",
        "image_bytes": b"\xff\xd8\xff\xe0fake-jpeg",
        "image_file_name": "curry.jpg",
        "image_content_type": "image/jpeg",
    }
    values.update(overrides)
    return MealDraft(**values)


def make_meal(meal_id: int = 1, slug: str = "pad-thai", **overrides: object) -> Meal:
    """Return a stored meal, optionally overriding fields."""
    values: dict[str, object] = {
        "id": meal_id,
        "title": "Pad Thai",
        "slug": slug,
        "summary": "Stir-fried noodles.",
        "instructions": "Soak noodles.\nFry everything.",
        "creator": "Bo Chef",
        "creator_email": "bo@example.com",
        "image": f"{slug}.png",
    }
    values.update(overrides)
    return Meal(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        record_store_backend="supabase",
        image_store_backend="s3",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        aws_bucket_name="meal-images-bucket",
        aws_access_key_id="test-access-key",
        aws_secret_access_key="test-secret-key",
        image_base_url="https://meal-images-bucket.s3.eu-north-1.amazonaws.com",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def image_store() -> InMemoryImageStore:
    return InMemoryImageStore()


@pytest.fixture
def container(
    settings: Settings,
    meal_repository: InMemoryMealRepository,
    image_store: InMemoryImageStore,
) -> AppContainer:
    meal_service = MealService(repository=meal_repository, image_store=image_store)

    def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        meal_service=meal_service,
        close_resources=close_resources,
    )

