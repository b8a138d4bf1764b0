"""S3 operations.

Low-level helpers that work with S3 client.
Returns Result types for error handling.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError

from site_teardown.lib.aws import classify_client_error
from site_teardown.lib.errors import AwsError, FailedKey
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import ObjectPage, ResourceKind

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

# DeleteObjects accepts at most this many keys per request
MAX_BATCH_SIZE = 1000


def bucket_exists(s3: S3Client, bucket: str) -> Result[None, AwsError]:
    """Ok(None) if the bucket is reachable, otherwise the classified error."""
    try:
        s3.head_bucket(Bucket=bucket)
        return Ok(None)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.BUCKET, bucket))


def list_objects_page(
    s3: S3Client,
    bucket: str,
    continuation_token: str | None = None,
    page_size: int | None = None,
) -> Result[ObjectPage, AwsError]:
    """Fetch a single ListObjectsV2 page."""
    kwargs: dict[str, Any] = {"Bucket": bucket}
    if continuation_token:
        kwargs["ContinuationToken"] = continuation_token
    if page_size:
        kwargs["MaxKeys"] = page_size

    logger.debug("list_objects_v2 %s", kwargs)
    try:
        response = s3.list_objects_v2(**kwargs)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.BUCKET, bucket))
    return Ok(ObjectPage.from_response(response))


def delete_objects_batch(
    s3: S3Client, bucket: str, keys: tuple[str, ...]
) -> Result[tuple[FailedKey, ...], AwsError]:
    """Delete up to MAX_BATCH_SIZE keys in one request.

    Ok carries the keys S3 reported as failed; an empty tuple means every
    key was removed.
    """
    if len(keys) > MAX_BATCH_SIZE:
        raise ValueError(f"DeleteObjects takes at most {MAX_BATCH_SIZE} keys, got {len(keys)}")

    try:
        response = s3.delete_objects(
            Bucket=bucket,
            Delete={"Objects": [{"Key": k} for k in keys], "Quiet": True},
        )
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.BUCKET, bucket))

    return Ok(
        tuple(
            FailedKey(
                key=item.get("Key", ""),
                code=item.get("Code", "Unknown"),
                message=item.get("Message", ""),
            )
            for item in response.get("Errors", [])
        )
    )


def delete_bucket(s3: S3Client, bucket: str) -> Result[None, AwsError]:
    """Delete an (already empty) bucket."""
    try:
        s3.delete_bucket(Bucket=bucket)
        return Ok(None)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.BUCKET, bucket))
