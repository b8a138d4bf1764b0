"""ACM operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError

from site_teardown.lib.aws import classify_client_error
from site_teardown.lib.errors import AwsError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import ResourceKind

if TYPE_CHECKING:
    from mypy_boto3_acm import ACMClient


def describe_certificate(acm: ACMClient, arn: str) -> Result[dict[str, Any], AwsError]:
    try:
        return Ok(acm.describe_certificate(CertificateArn=arn)["Certificate"])
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.CERTIFICATE, arn))


def delete_certificate(acm: ACMClient, arn: str) -> Result[None, AwsError]:
    try:
        acm.delete_certificate(CertificateArn=arn)
        return Ok(None)
    except ClientError as e:
        return Err(classify_client_error(e, ResourceKind.CERTIFICATE, arn))
