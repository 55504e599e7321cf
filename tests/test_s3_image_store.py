"""Tests for the S3 image store."""

from dataclasses import dataclass, field

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from meal_share.adapters.s3_image_store import S3ImageStore
from meal_share.domain.errors import ImageExistsError, ImageStoreError


@dataclass
class FakeS3Client:
    calls: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None
    closed: bool = False

    def put_object(self, **kwargs) -> dict[str, object]:  # type: ignore[no-untyped-def]
        if self.error:
            raise self.error
        self.calls.append(kwargs)
        return {"ETag": '"etag"'}

    def close(self) -> None:
        self.closed = True


def test_s3_image_store_puts_object() -> None:
    client = FakeS3Client()
    store = S3ImageStore(client=client, bucket="meal-images-bucket")

    store.upload("spicy-thai-curry.jpg", b"jpeg", "image/jpeg")

    assert client.calls == [
        {
            "Bucket": "meal-images-bucket",
            "Key": "spicy-thai-curry.jpg",
            "Body": b"jpeg",
            "ContentType": "image/jpeg",
            "IfNoneMatch": "*",
        }
    ]


@pytest.mark.parametrize("code", ["PreconditionFailed", "ConditionalRequestConflict"])
def test_s3_image_store_refuses_existing_key(code: str) -> None:
    error = ClientError(
        {
            "Error": {"Code": code, "Message": "At least one precondition failed"},
            "ResponseMetadata": {"HTTPStatusCode": 412},
        },
        "PutObject",
    )
    store = S3ImageStore(client=FakeS3Client(error=error), bucket="meal-images-bucket")

    with pytest.raises(ImageExistsError) as exc_info:
        store.upload("spicy-thai-curry.jpg", b"REPLACEMENT", "image/jpeg")

    assert exc_info.value.key == "spicy-thai-curry.jpg"
    assert exc_info.value.__cause__ is error


@pytest.mark.parametrize(
    "error",
    [
        ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
            "PutObject",
        ),
        ClientError(
            {"Error": {"Code": "NoSuchBucket", "Message": "missing"}}, "PutObject"
        ),
        EndpointConnectionError(endpoint_url="https://s3.eu-north-1.amazonaws.com"),
    ],
)
def test_s3_image_store_wraps_errors(error: Exception) -> None:
    store = S3ImageStore(client=FakeS3Client(error=error), bucket="meal-images-bucket")

    with pytest.raises(ImageStoreError) as exc_info:
        store.upload("spicy-thai-curry.jpg", b"jpeg", "image/jpeg")

    assert exc_info.value.__cause__ is error
    assert not isinstance(exc_info.value, ImageExistsError)


def test_s3_image_store_create_builds_client() -> None:
    store = S3ImageStore.create(
        bucket="meal-images-bucket",
        region="eu-north-1",
        access_key_id="test-access-key",
        secret_access_key="test-secret-key",
    )

    assert store.bucket == "meal-images-bucket"
    assert store.client.meta.region_name == "eu-north-1"
    store.close()


def test_s3_image_store_close_closes_client() -> None:
    client = FakeS3Client()

    S3ImageStore(client=client, bucket="meal-images-bucket").close()

    assert client.closed
