"""Amazon S3 image storage."""

from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from meal_share.domain.errors import ImageExistsError, ImageStoreError
from meal_share.services.meals import ImageStore

_EXISTING_OBJECT_CODES = {"PreconditionFailed", "ConditionalRequestConflict"}


@dataclass
class S3ImageStore(ImageStore):
    """Image store that writes objects into an S3 bucket."""

    client: Any
    bucket: str

    @classmethod
    def create(
        cls,
        bucket: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ) -> "S3ImageStore":
        """Create a store with its own S3 client."""
        kwargs: dict[str, Any] = {"service_name": "s3", "region_name": region}
        if access_key_id and secret_access_key:
            kwargs.update(
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
            )
        return cls(client=boto3.client(**kwargs), bucket=bucket)

    def upload(self, key: str, payload: bytes, content_type: str) -> None:
        """Put the image object into the bucket unless the key is taken."""
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=payload,
                ContentType=content_type,
                IfNoneMatch="*",
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _EXISTING_OBJECT_CODES:
                raise ImageExistsError(key) from exc
            raise ImageStoreError(f"Failed to upload image {key!r}: {exc}") from exc
        except BotoCoreError as exc:
            raise ImageStoreError(f"Failed to upload image {key!r}: {exc}") from exc

    def close(self) -> None:
        """Close the underlying S3 client."""
        self.client.close()
