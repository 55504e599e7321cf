"""SQLite repository for shared meals."""

import sqlite3
import threading
from dataclasses import dataclass, field

from meal_share.domain.errors import DuplicateSlugError, RecordStoreError
from meal_share.domain.meals import Meal, NewMeal
from meal_share.services.meals import MealRepository

_SCHEMA = """
CREATE TABLE IF NOT EXISTS meals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    slug TEXT NOT NULL UNIQUE,
    title TEXT NOT NULL,
    image TEXT NOT NULL,
    summary TEXT NOT NULL,
    instructions TEXT NOT NULL,
    creator TEXT NOT NULL,
    creator_email TEXT NOT NULL
)
"""

_INSERT = """
INSERT INTO meals (title, summary, instructions, creator, creator_email, image, slug)
VALUES (:title, :summary, :instructions, :creator, :creator_email, :image, :slug)
"""


@dataclass
class SqliteMealRepository(MealRepository):
    """SQLite implementation for the meals table."""

    connection: sqlite3.Connection
    _write_lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def create(cls, path: str) -> "SqliteMealRepository":
        """Open the database file and make sure the meals table exists."""
        connection = sqlite3.connect(path, check_same_thread=False)
        connection.row_factory = sqlite3.Row
        with connection:
            connection.execute(_SCHEMA)
        return cls(connection=connection)

    def list_meals(self) -> list[Meal]:
        """Return all meal rows."""
        try:
            rows = self.connection.execute("SELECT * FROM meals").fetchall()
        except sqlite3.Error as exc:
            raise RecordStoreError(f"Failed to list meals: {exc}") from exc
        return [_parse_meal(row) for row in rows]

    def get_meal_by_slug(self, slug: str) -> Meal | None:
        """Return a meal row by slug."""
        try:
            row = self.connection.execute(
                "SELECT * FROM meals WHERE slug = ?", (slug,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise RecordStoreError(f"Failed to load meal {slug!r}: {exc}") from exc
        if row is None:
            return None
        return _parse_meal(row)

    def create_meal(self, meal: NewMeal) -> None:
        """Insert a meal row."""
        params = {
            "title": meal.title,
            "summary": meal.summary,
            "instructions": meal.instructions,
            "creator": meal.creator,
            "creator_email": meal.creator_email,
            "image": meal.image,
            "slug": meal.slug,
        }
        try:
            with self._write_lock, self.connection:
                self.connection.execute(_INSERT, params)
        except sqlite3.IntegrityError as exc:
            if "meals.slug" in str(exc):
                raise DuplicateSlugError(meal.slug) from exc
            raise RecordStoreError(f"Failed to create meal: {exc}") from exc
        except sqlite3.Error as exc:
            raise RecordStoreError(f"Failed to create meal: {exc}") from exc

    def close(self) -> None:
        """Close the database connection."""
        self.connection.close()


def _parse_meal(row: sqlite3.Row) -> Meal:
    return Meal(
        id=row["id"],
        title=row["title"],
        slug=row["slug"],
        summary=row["summary"],
        instructions=row["instructions"],
        creator=row["creator"],
        creator_email=row["creator_email"],
        image=row["image"],
    )
