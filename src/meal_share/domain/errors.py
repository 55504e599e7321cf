"""Error taxonomy for meal persistence."""


class MealShareError(Exception):
    """Base class for application errors."""


class ValidationError(MealShareError):
    """Raised when a draft is malformed, before any I/O happens."""


class StoreError(MealShareError):
    """Raised when a blob or record store operation fails."""


class ImageStoreError(StoreError):
    """Raised when an image upload fails."""


class RecordStoreError(StoreError):
    """Raised when a record store query or insert fails."""


class DuplicateSlugError(RecordStoreError):
    """Raised when a meal with the same slug already exists."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"A meal with slug {slug!r} already exists")
        self.slug = slug


class MealListingError(StoreError):
    """Raised when the meal feed cannot be loaded."""


class ImageExistsError(ImageStoreError):
    """Raised when an image is already stored under the target key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"An image is already stored under {key!r}")
        self.key = key
