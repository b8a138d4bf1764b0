"""Error types for site-teardown.

All errors are frozen dataclasses - no exceptions in business logic.
Pattern match on these in the CLI layer to provide operator-facing messages.
"""

from dataclasses import dataclass

from site_teardown.models import ResourceKind

# =============================================================================
# Lookup Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class NotFoundError:
    """Target never existed or is already gone."""

    kind: ResourceKind
    identifier: str


@dataclass(frozen=True, slots=True)
class AccessDeniedError:
    """Credentials are not allowed to touch the target."""

    kind: ResourceKind
    identifier: str
    reason: str


@dataclass(frozen=True, slots=True)
class AmbiguousRecordError:
    """More than one record set shares the requested name and type."""

    zone_id: str
    name: str
    record_type: str
    count: int


# =============================================================================
# State Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class ConflictError:
    """ETag was stale - the resource changed since it was read."""

    kind: ResourceKind
    identifier: str
    reason: str


@dataclass(frozen=True, slots=True)
class PreconditionFailedError:
    """Remote side refused the delete because a required prior state was not observed."""

    kind: ResourceKind
    identifier: str
    reason: str


@dataclass(frozen=True, slots=True)
class NotEmptyError:
    """Container (bucket or hosted zone) still holds children."""

    kind: ResourceKind
    identifier: str
    reason: str


@dataclass(frozen=True, slots=True)
class ResourceInUseError:
    """Resource is still referenced by another resource."""

    kind: ResourceKind
    identifier: str
    reason: str


# =============================================================================
# Batch Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class FailedKey:
    """One object that DeleteObjects could not remove."""

    key: str
    code: str
    message: str


@dataclass(frozen=True, slots=True)
class PartialDeleteError:
    """Some objects survived the drain; the bucket itself was left in place."""

    bucket: str
    failed_keys: tuple[FailedKey, ...]


@dataclass(frozen=True, slots=True)
class InvalidChangeBatchError:
    """Route 53 rejected a change batch."""

    zone_id: str
    reason: str


# =============================================================================
# Fallback
# =============================================================================


@dataclass(frozen=True, slots=True)
class AwsCallError:
    """Any AWS error without a more specific mapping."""

    kind: ResourceKind
    identifier: str
    code: str
    reason: str


# =============================================================================
# Type Aliases for Error Unions
# =============================================================================

type AwsError = (
    NotFoundError
    | AccessDeniedError
    | ConflictError
    | PreconditionFailedError
    | NotEmptyError
    | ResourceInUseError
    | InvalidChangeBatchError
    | AwsCallError
)
type BucketError = AwsError | PartialDeleteError
type RecordError = AwsError | AmbiguousRecordError
type TeardownError = BucketError | AmbiguousRecordError
