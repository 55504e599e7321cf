"""Supabase Storage image storage."""

from dataclasses import dataclass

from supabase import Client

from meal_share.domain.errors import ImageExistsError, ImageStoreError
from meal_share.services.meals import ImageStore


@dataclass
class SupabaseImageStore(ImageStore):
    """Image store backed by a Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, key: str, payload: bytes, content_type: str) -> None:
        """Upload the image; an object already stored under the key is kept."""
        try:
            self.client.storage.from_(self.bucket).upload(
                path=key,
                file=payload,
                file_options={"content-type": content_type},
            )
        except Exception as exc:
            if _is_duplicate(exc):
                raise ImageExistsError(key) from exc
            raise ImageStoreError(f"Failed to upload image {key!r}: {exc}") from exc


def _is_duplicate(exc: Exception) -> bool:
    # Storage answers {"statusCode": "409", "error": "Duplicate", ...}
    return (
        str(getattr(exc, "status", "")) == "409"
        or getattr(exc, "code", None) == "Duplicate"
    )
