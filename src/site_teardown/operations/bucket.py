"""Bucket operations - drain every object, then delete the bucket."""

import logging
from dataclasses import dataclass

from site_teardown.lib import s3 as s3_ops
from site_teardown.lib.aws import AwsContext
from site_teardown.lib.confirm import Confirm
from site_teardown.lib.errors import BucketError, FailedKey, PartialDeleteError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import BucketTarget, DeletionOutcome, Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DrainReport:
    """Result of emptying a bucket."""

    bucket: str
    pages: int
    deleted: int


def empty_bucket(
    ctx: AwsContext, bucket: str, page_size: int | None = None
) -> Result[DrainReport, BucketError]:
    """Delete every object in the bucket, one DeleteObjects call per listed page.

    The listing is followed until S3 reports it is no longer truncated. Keys
    S3 refuses to delete are collected across all pages and returned as a
    PartialDeleteError once the listing is exhausted.
    """
    token: str | None = None
    pages = 0
    deleted = 0
    failed: list[FailedKey] = []

    while True:
        match s3_ops.list_objects_page(ctx.s3, bucket, token, page_size):
            case Err() as e:
                return e
            case Ok(page):
                pass
        pages += 1

        if page.keys:
            match s3_ops.delete_objects_batch(ctx.s3, bucket, page.keys):
                case Err() as e:
                    return e
                case Ok(failures):
                    failed.extend(failures)
                    deleted += len(page.keys) - len(failures)
            logger.info("Deleted %d objects from %s", len(page.keys) - len(failures), bucket)

        if not page.is_truncated:
            break
        token = page.continuation_token

    if failed:
        logger.warning("%d objects in %s could not be deleted", len(failed), bucket)
        return Err(PartialDeleteError(bucket, tuple(failed)))

    return Ok(DrainReport(bucket=bucket, pages=pages, deleted=deleted))


def delete_bucket(
    ctx: AwsContext,
    bucket: str,
    confirm: Confirm,
    page_size: int | None = None,
) -> Result[DeletionOutcome, BucketError]:
    """Empty and delete a bucket behind a single confirmation.

    A missing bucket is an error: the operator named it explicitly.
    """
    target = BucketTarget(bucket)
    logger.info("Checking S3 bucket: %s", bucket)

    match s3_ops.bucket_exists(ctx.s3, bucket):
        case Err() as e:
            return e
        case Ok(_):
            pass

    if not confirm(f'Delete all contents and the bucket "{bucket}"?'):
        return Ok(DeletionOutcome.of(target, Outcome.DECLINED))

    match empty_bucket(ctx, bucket, page_size):
        case Err() as e:
            return e
        case Ok(report):
            pass

    match s3_ops.delete_bucket(ctx.s3, bucket):
        case Err() as e:
            return e
        case Ok(_):
            pass

    logger.info('S3 bucket "%s" deleted.', bucket)
    return Ok(DeletionOutcome.of(target, Outcome.DELETED, f"{report.deleted} objects removed"))
