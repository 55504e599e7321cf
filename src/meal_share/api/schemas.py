"""Pydantic response models for the meals API."""

from pydantic import BaseModel

from meal_share.domain.meals import Meal, NewMeal


class MealResponse(BaseModel):
    """Meal as shown in the feed and on detail pages."""

    id: int | None = None
    title: str
    slug: str
    summary: str
    instructions: str
    instructions_html: str
    creator: str
    creator_email: str
    image: str
    image_url: str

    @classmethod
    def from_meal(cls, meal: Meal | NewMeal, image_base_url: str) -> "MealResponse":
        """Build a response, composing the image URL and display instructions."""
        return cls(
            id=getattr(meal, "id", None),
            title=meal.title,
            slug=meal.slug,
            summary=meal.summary,
            instructions=meal.instructions,
            instructions_html=format_instructions(meal.instructions),
            creator=meal.creator,
            creator_email=meal.creator_email,
            image=meal.image,
            image_url=image_url(image_base_url, meal.image),
        )


class MealListResponse(BaseModel):
    """Community meal feed."""

    meals: list[MealResponse]


def format_instructions(instructions: str) -> str:
    """Render stored instructions with HTML line breaks."""
    return instructions.replace("\r\n", "\n").replace("\n", "<br />")


def image_url(base_url: str, key: str) -> str:
    """Compose the public URL of a stored image."""
    if not base_url:
        return key
    return f"{base_url.rstrip('/')}/{key}"
