"""Meal feed, lookup and submission service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_share.domain.errors import (
    DuplicateSlugError,
    MealListingError,
    StoreError,
    ValidationError,
)
from meal_share.domain.meals import Meal, MealDraft, NewMeal
from meal_share.services.sanitizer import derive_slug, image_key, sanitize_markup

logger = logging.getLogger(__name__)

_REQUIRED_TEXT_FIELDS = ("title", "summary", "instructions", "creator", "creator_email")


class MealRepository(Protocol):
    """Persistence interface for meal rows."""

    def list_meals(self) -> list[Meal]:
        """Return every stored meal in store order."""

    def get_meal_by_slug(self, slug: str) -> Meal | None:
        """Return the meal with the given slug, if present."""

    def create_meal(self, meal: NewMeal) -> None:
        """Insert a meal row; the store assigns its id."""


class ImageStore(Protocol):
    """Object storage interface for meal images."""

    def upload(self, key: str, payload: bytes, content_type: str) -> None:
        """Store the payload under the given key."""


@dataclass
class MealService:
    """Application service that coordinates image upload and meal persistence."""

    repository: MealRepository
    image_store: ImageStore

    def list_meals(self) -> list[Meal]:
        """Return all meals for the community feed."""
        try:
            return self.repository.list_meals()
        except StoreError as exc:
            raise MealListingError("Loading meals failed") from exc

    def get_meal(self, slug: str) -> Meal | None:
        """Return a meal by slug, or None when nothing matches."""
        return self.repository.get_meal_by_slug(slug)

    def save_meal(self, draft: MealDraft) -> NewMeal:
        """Upload the draft's image, then insert the meal row.

        Nothing is written when validation fails, when the slug is already
        taken, or when the upload fails. When the insert fails the uploaded
        image stays in the bucket.
        """
        _validate_draft(draft)
        slug = derive_slug(draft.title)
        instructions = sanitize_markup(draft.instructions)
        key = image_key(slug, draft.image_file_name)

        # The image key is derived from the slug; an existing meal owns it.
        if self.repository.get_meal_by_slug(slug) is not None:
            raise DuplicateSlugError(slug)

        self.image_store.upload(key, draft.image_bytes, draft.image_content_type)

        meal = NewMeal(
            title=draft.title,
            slug=slug,
            summary=draft.summary,
            instructions=instructions,
            creator=draft.creator,
            creator_email=draft.creator_email,
            image=key,
        )
        try:
            self.repository.create_meal(meal)
        except StoreError:
            logger.warning(
                "Meal insert failed after image upload; image left in store",
                extra={"slug": slug, "image_key": key},
            )
            raise
        logger.info("Saved meal", extra={"slug": slug})
        return meal


def _validate_draft(draft: MealDraft) -> None:
    missing = [
        name
        for name in _REQUIRED_TEXT_FIELDS
        if not str(getattr(draft, name) or "").strip()
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    if "@" not in draft.creator_email:
        raise ValidationError("Creator email is not a valid address")
    if not draft.image_bytes:
        raise ValidationError("An image is required")
    if not draft.image_file_name:
        raise ValidationError("Image file name is required")
