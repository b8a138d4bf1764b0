"""CloudFront operations.

Every mutating call takes the ETag from the previous read or write and
returns the one to use next.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from botocore.exceptions import ClientError

from site_teardown.lib.aws import classify_client_error
from site_teardown.lib.errors import AwsError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import DistributionSnapshot, ResourceKind

if TYPE_CHECKING:
    from mypy_boto3_cloudfront import CloudFrontClient

logger = logging.getLogger(__name__)


def get_distribution(
    cloudfront: CloudFrontClient, distribution_id: str
) -> Result[DistributionSnapshot, AwsError]:
    """Fetch config and ETag."""
    try:
        response = cloudfront.get_distribution(Id=distribution_id)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.DISTRIBUTION, distribution_id))
    snapshot = DistributionSnapshot.from_response(distribution_id, response)
    logger.debug(
        "Distribution %s enabled=%s etag=%s", distribution_id, snapshot.enabled, snapshot.etag
    )
    return Ok(snapshot)


def disable_distribution(
    cloudfront: CloudFrontClient, snapshot: DistributionSnapshot
) -> Result[DistributionSnapshot, AwsError]:
    """Push the config with Enabled=False. Ok carries the post-update snapshot."""
    try:
        response = cloudfront.update_distribution(
            Id=snapshot.id,
            IfMatch=snapshot.etag,
            DistributionConfig=snapshot.disabled_config(),
        )
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.DISTRIBUTION, snapshot.id))
    updated = DistributionSnapshot.from_response(snapshot.id, response)
    logger.debug("Distribution %s etag %s -> %s", snapshot.id, snapshot.etag, updated.etag)
    return Ok(updated)


def delete_distribution(
    cloudfront: CloudFrontClient, distribution_id: str, etag: str
) -> Result[None, AwsError]:
    try:
        cloudfront.delete_distribution(Id=distribution_id, IfMatch=etag)
        return Ok(None)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.DISTRIBUTION, distribution_id))
