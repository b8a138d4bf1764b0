"""site-teardown data models.

Transient descriptors of remote state. Nothing here is persisted; every value
is built at finalizer entry and discarded when the finalizer returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Self

# Record types that exist by construction of a hosted zone and cannot be
# deleted individually.
INTRINSIC_RECORD_TYPES = frozenset({"NS", "SOA"})

HOSTED_ZONE_PREFIX = "/hostedzone/"


class Arn(str):
    """AWS ARN - a string subclass with parsed component access."""

    def __new__(cls, value: str) -> Self:
        parts = value.split(":")
        if len(parts) < 6 or parts[0] != "arn":
            raise ValueError(f"Invalid ARN: {value}")
        return super().__new__(cls, value)

    @property
    def service(self) -> str:
        return self.split(":")[2]

    @property
    def region(self) -> str:
        return self.split(":")[3]

    @property
    def resource(self) -> str:
        return ":".join(self.split(":")[5:])


class ResourceKind(StrEnum):
    """The five resource kinds this tool knows how to finalize."""

    BUCKET = "bucket"
    DISTRIBUTION = "distribution"
    CERTIFICATE = "certificate"
    HOSTED_ZONE = "hosted-zone"
    RECORD = "record"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. 'Hosted zone'."""
        return self.value.replace("-", " ").capitalize()


class Outcome(StrEnum):
    """Terminal state of one finalizer invocation."""

    SKIPPED = "skipped"
    DELETED = "deleted"
    DECLINED = "declined"
    NOT_FOUND = "not-found"


def fqdn(name: str) -> str:
    """Absolute, lower-cased DNS name with its trailing dot."""
    name = name.strip().lower()
    return name if name.endswith(".") else f"{name}."


def normalize_zone_id(zone_id: str) -> str:
    """Strip the `/hostedzone/` prefix Route 53 puts on zone ids."""
    zone_id = zone_id.strip()
    if zone_id.startswith(HOSTED_ZONE_PREFIX):
        return zone_id[len(HOSTED_ZONE_PREFIX) :]
    return zone_id


# =============================================================================
# Targets
# =============================================================================


@dataclass(frozen=True)
class BucketTarget:
    name: str

    kind = ResourceKind.BUCKET

    @property
    def identifier(self) -> str:
        return self.name


@dataclass(frozen=True)
class DistributionTarget:
    id: str

    kind = ResourceKind.DISTRIBUTION

    @property
    def identifier(self) -> str:
        return self.id


@dataclass(frozen=True)
class CertificateTarget:
    arn: Arn

    kind = ResourceKind.CERTIFICATE

    def __post_init__(self) -> None:
        # Rejects malformed ARNs before any remote call is made
        object.__setattr__(self, "arn", Arn(self.arn))

    @property
    def identifier(self) -> str:
        return str(self.arn)


@dataclass(frozen=True)
class HostedZoneTarget:
    id: str

    kind = ResourceKind.HOSTED_ZONE

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", normalize_zone_id(self.id))

    @property
    def identifier(self) -> str:
        return self.id


@dataclass(frozen=True)
class DomainRecordTarget:
    zone_id: str
    name: str
    record_type: str

    kind = ResourceKind.RECORD

    def __post_init__(self) -> None:
        object.__setattr__(self, "zone_id", normalize_zone_id(self.zone_id))
        object.__setattr__(self, "name", fqdn(self.name))
        object.__setattr__(self, "record_type", self.record_type.upper())

    @property
    def identifier(self) -> str:
        return f"{self.zone_id}/{self.name}/{self.record_type}"


type ResourceTarget = (
    BucketTarget | DistributionTarget | CertificateTarget | HostedZoneTarget | DomainRecordTarget
)


@dataclass(frozen=True)
class Targets:
    """Identifier bundle collected from the operator. Any field may be absent."""

    bucket_name: str | None = None
    hosted_zone_id: str | None = None
    distribution_id: str | None = None
    certificate_arn: str | None = None
    domain_name: str | None = None

    @classmethod
    def from_inputs(cls, **values: str | None) -> Self:
        """Build from raw CLI input, turning blank strings into None."""
        cleaned = {k: (v.strip() or None) if v is not None else None for k, v in values.items()}
        return cls(**cleaned)

    @property
    def is_empty(self) -> bool:
        return not any(
            (
                self.bucket_name,
                self.hosted_zone_id,
                self.distribution_id,
                self.certificate_arn,
                self.domain_name,
            )
        )


# =============================================================================
# Remote State Snapshots
# =============================================================================


@dataclass(frozen=True)
class DistributionSnapshot:
    """CloudFront distribution config plus the ETag needed to mutate it."""

    id: str
    enabled: bool
    config: dict[str, Any]
    etag: str

    @classmethod
    def from_response(cls, distribution_id: str, response: dict[str, Any]) -> Self:
        config = response["Distribution"]["DistributionConfig"]
        return cls(
            id=distribution_id,
            enabled=bool(config.get("Enabled")),
            config=config,
            etag=response["ETag"],
        )

    def disabled_config(self) -> dict[str, Any]:
        """Copy of the config with Enabled switched off."""
        return {**self.config, "Enabled": False}


@dataclass(frozen=True)
class ObjectPage:
    """One page of a ListObjectsV2 listing."""

    keys: tuple[str, ...]
    continuation_token: str | None = None
    is_truncated: bool = False

    def __post_init__(self) -> None:
        if self.is_truncated and not self.continuation_token:
            raise ValueError("Truncated page without a continuation token")
        if not self.is_truncated and self.continuation_token is not None:
            raise ValueError("Final page must not carry a continuation token")

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> Self:
        truncated = bool(response.get("IsTruncated"))
        return cls(
            keys=tuple(obj["Key"] for obj in response.get("Contents", [])),
            continuation_token=response.get("NextContinuationToken") if truncated else None,
            is_truncated=truncated,
        )


@dataclass(frozen=True)
class RecordSet:
    """A Route 53 resource record set.

    `payload` is the record exactly as Route 53 returned it; DELETE changes
    must echo it back verbatim.
    """

    zone_id: str
    name: str
    type: str
    payload: dict[str, Any] = field(compare=False, repr=False)

    @classmethod
    def from_route53(cls, zone_id: str, payload: dict[str, Any]) -> Self:
        return cls(
            zone_id=normalize_zone_id(zone_id),
            name=payload["Name"],
            type=payload["Type"],
            payload=payload,
        )

    @property
    def is_intrinsic(self) -> bool:
        return self.type in INTRINSIC_RECORD_TYPES

    def matches(self, name: str, record_type: str) -> bool:
        return fqdn(self.name) == fqdn(name) and self.type == record_type.upper()

    def target(self) -> DomainRecordTarget:
        return DomainRecordTarget(self.zone_id, self.name, self.type)


def deletable_records(records: list[RecordSet]) -> list[RecordSet]:
    """Records a zone teardown may offer for deletion. Never NS or SOA."""
    return [r for r in records if not r.is_intrinsic]


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class DeletionOutcome:
    """What happened to one finalizer step.

    `identifier` is None only for skipped steps, where the operator gave no
    identifier for that resource kind.
    """

    kind: ResourceKind
    identifier: str | None
    status: Outcome
    detail: str | None = None

    @classmethod
    def of(cls, target: ResourceTarget, status: Outcome, detail: str | None = None) -> Self:
        return cls(target.kind, target.identifier, status, detail)

    @classmethod
    def skipped(cls, kind: ResourceKind, detail: str | None = None) -> Self:
        return cls(kind, None, Outcome.SKIPPED, detail)
