"""Supabase repository for shared meals."""

from dataclasses import dataclass

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from meal_share.domain.errors import DuplicateSlugError, RecordStoreError
from meal_share.domain.meals import Meal, NewMeal
from meal_share.services.meals import MealRepository

_UNIQUE_VIOLATION = "23505"
_COLUMNS = "id, title, slug, summary, instructions, creator, creator_email, image"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for the meals table."""

    client: Client
    table_name: str = "meals"
    page_size: int = 1000

    def list_meals(self) -> list[Meal]:
        """Return all meal rows, reading the table page by page.

        PostgREST caps a single response at its max-rows setting, so rows are
        fetched in id order until a short page comes back.
        """
        meals: list[Meal] = []
        start = 0
        while True:
            try:
                response = (
                    self.client.table(self.table_name)
                    .select(_COLUMNS)
                    .order("id")
                    .range(start, start + self.page_size - 1)
                    .execute()
                )
            except (APIError, httpx.HTTPError) as exc:
                raise RecordStoreError(f"Failed to list meals: {exc}") from exc
            rows = response.data or []
            meals.extend(_parse_meal(row) for row in rows)
            if len(rows) < self.page_size:
                return meals
            start += self.page_size

    def get_meal_by_slug(self, slug: str) -> Meal | None:
        """Return a meal row by slug."""
        try:
            response = (
                self.client.table(self.table_name)
                .select(_COLUMNS)
                .eq("slug", slug)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise RecordStoreError(f"Failed to load meal {slug!r}: {exc}") from exc
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal(self, meal: NewMeal) -> None:
        """Insert a meal row."""
        try:
            response = (
                self.client.table(self.table_name)
                .insert(
                    {
                        "title": meal.title,
                        "slug": meal.slug,
                        "summary": meal.summary,
                        "instructions": meal.instructions,
                        "creator": meal.creator,
                        "creator_email": meal.creator_email,
                        "image": meal.image,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateSlugError(meal.slug) from exc
            raise RecordStoreError(f"Failed to create meal: {exc}") from exc
        except httpx.HTTPError as exc:
            raise RecordStoreError(f"Failed to create meal: {exc}") from exc
        if not response.data:
            raise RecordStoreError("Failed to create meal")


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=int(row["id"]),
        title=str(row.get("title", "")),
        slug=str(row.get("slug", "")),
        summary=str(row.get("summary") or ""),
        instructions=str(row.get("instructions") or ""),
        creator=str(row.get("creator") or ""),
        creator_email=str(row.get("creator_email") or ""),
        image=str(row.get("image") or ""),
    )
