"""Domain models for shared meals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NewMeal:
    """Meal row ready for insertion; the store assigns the id."""

    title: str
    slug: str
    summary: str
    instructions: str
    creator: str
    creator_email: str
    image: str


@dataclass(frozen=True)
class Meal:
    """Persisted meal."""

    id: int
    title: str
    slug: str
    summary: str
    instructions: str
    creator: str
    creator_email: str
    image: str


@dataclass(frozen=True)
class MealDraft:
    """Unsaved meal submission with its raw image upload."""

    title: str
    summary: str
    instructions: str
    creator: str
    creator_email: str
    image_bytes: bytes
    image_file_name: str
    image_content_type: str
