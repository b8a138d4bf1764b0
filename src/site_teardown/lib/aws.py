"""AWS session and client management.

AwsContext is created once at CLI entry and passed to every finalizer.
Uses cached_property for lazy client initialization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import ClientError

from site_teardown.lib.errors import (
    AccessDeniedError,
    AwsCallError,
    AwsError,
    ConflictError,
    InvalidChangeBatchError,
    NotEmptyError,
    NotFoundError,
    PreconditionFailedError,
    ResourceInUseError,
)
from site_teardown.models import ResourceKind

if TYPE_CHECKING:
    from mypy_boto3_acm import ACMClient
    from mypy_boto3_cloudfront import CloudFrontClient
    from mypy_boto3_route53 import Route53Client
    from mypy_boto3_s3 import S3Client

# CloudFront only accepts ACM certificates issued in us-east-1
CERTIFICATE_REGION = "us-east-1"


@dataclass
class AwsContext:
    """AWS session and clients. Created once at CLI entry.

    Credentials fall back to the default boto3 chain (env, profile, instance
    role) when neither keys nor a profile are given.

    Example:
        ctx = AwsContext(region="eu-west-1", profile="ops")
        ctx.s3.list_objects_v2(...)
        ctx.cloudfront.get_distribution(...)
    """

    region: str
    profile: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = field(default=None, repr=False)
    certificate_region: str = CERTIFICATE_REGION

    @cached_property
    def session(self) -> boto3.Session:
        """Boto3 session configured with region and credentials."""
        return boto3.Session(
            region_name=self.region,
            profile_name=self.profile,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
        )

    @cached_property
    def s3(self) -> S3Client:
        """S3 client."""
        return self.session.client("s3")

    @cached_property
    def cloudfront(self) -> CloudFrontClient:
        """CloudFront client (global service)."""
        return self.session.client("cloudfront")

    @cached_property
    def acm(self) -> ACMClient:
        """ACM client, pinned to the certificate region."""
        return self.session.client("acm", region_name=self.certificate_region)

    @cached_property
    def route53(self) -> Route53Client:
        """Route 53 client (global service)."""
        return self.session.client("route53")


# =============================================================================
# ClientError classification
# =============================================================================

_NOT_FOUND = {
    "404",
    "NoSuchBucket",
    "NoSuchDistribution",
    "ResourceNotFoundException",
    "NoSuchHostedZone",
}
_ACCESS_DENIED = {"403", "AccessDenied", "AccessDeniedException"}
# CloudFront answers a stale IfMatch with 412 PreconditionFailed
_CONFLICT = {"PreconditionFailed", "InvalidIfMatchVersion"}
_PRECONDITION = {"DistributionNotDisabled"}
_NOT_EMPTY = {"BucketNotEmpty", "HostedZoneNotEmpty"}
_IN_USE = {"ResourceInUseException"}


def error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "Unknown")


def classify_client_error(e: ClientError, kind: ResourceKind, identifier: str) -> AwsError:
    """Map a botocore ClientError onto the error taxonomy."""
    code = error_code(e)
    reason = e.response.get("Error", {}).get("Message") or str(e)

    if code in _NOT_FOUND:
        return NotFoundError(kind, identifier)
    if code in _ACCESS_DENIED:
        return AccessDeniedError(kind, identifier, reason)
    if code in _CONFLICT:
        return ConflictError(kind, identifier, reason)
    if code in _PRECONDITION:
        return PreconditionFailedError(kind, identifier, reason)
    if code in _NOT_EMPTY:
        return NotEmptyError(kind, identifier, reason)
    if code in _IN_USE:
        return ResourceInUseError(kind, identifier, reason)
    if code == "InvalidChangeBatch":
        return InvalidChangeBatchError(identifier, reason)
    return AwsCallError(kind, identifier, code, reason)
