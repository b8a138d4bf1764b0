"""Route 53 operations.

Low-level helpers that work with Route 53 client.
Returns Result types for error handling.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError

from site_teardown.lib.aws import classify_client_error
from site_teardown.lib.errors import AwsError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import RecordSet, ResourceKind, normalize_zone_id

if TYPE_CHECKING:
    from mypy_boto3_route53 import Route53Client

logger = logging.getLogger(__name__)


def list_record_sets(
    route53: Route53Client, zone_id: str, page_size: int | None = None
) -> Result[list[RecordSet], AwsError]:
    """List every record set in the zone, following pagination to the end."""
    zone_id = normalize_zone_id(zone_id)
    kwargs: dict[str, Any] = {"HostedZoneId": zone_id}
    if page_size:
        kwargs["MaxItems"] = str(page_size)

    records: list[RecordSet] = []
    while True:
        try:
            response = route53.list_resource_record_sets(**kwargs)
        except ClientError as e:
            return Err(classify_client_error(e, ResourceKind.HOSTED_ZONE, zone_id))

        records.extend(RecordSet.from_route53(zone_id, r) for r in response["ResourceRecordSets"])

        if not response.get("IsTruncated"):
            break

        kwargs["StartRecordName"] = response["NextRecordName"]
        kwargs["StartRecordType"] = response["NextRecordType"]
        if "NextRecordIdentifier" in response:
            kwargs["StartRecordIdentifier"] = response["NextRecordIdentifier"]
        else:
            kwargs.pop("StartRecordIdentifier", None)

    logger.debug("Zone %s has %d record sets", zone_id, len(records))
    return Ok(records)


def delete_record_set(route53: Route53Client, record: RecordSet) -> Result[None, AwsError]:
    """Submit a single-change DELETE batch for one record set."""
    try:
        route53.change_resource_record_sets(
            HostedZoneId=record.zone_id,
            ChangeBatch={"Changes": [{"Action": "DELETE", "ResourceRecordSet": record.payload}]},
        )
        return Ok(None)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.HOSTED_ZONE, record.zone_id))


def delete_hosted_zone(route53: Route53Client, zone_id: str) -> Result[None, AwsError]:
    zone_id = normalize_zone_id(zone_id)
    try:
        route53.delete_hosted_zone(Id=zone_id)
        return Ok(None)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.HOSTED_ZONE, zone_id))
