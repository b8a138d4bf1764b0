"""Teardown workflow - delete the selected resources in dependency order."""

from dataclasses import dataclass, field

from site_teardown.lib.aws import AwsContext
from site_teardown.lib.confirm import Confirm
from site_teardown.lib.errors import TeardownError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import DeletionOutcome, Outcome, ResourceKind, Targets
from site_teardown.operations.bucket import delete_bucket
from site_teardown.operations.certificate import (
    delete_certificate,
    fallback_validation_name,
    validation_record_names,
)
from site_teardown.operations.distribution import DISABLE_COOLDOWN_SECONDS, delete_distribution
from site_teardown.operations.dns import delete_hosted_zone, delete_record


@dataclass
class TeardownReport:
    """Outcomes of one destroy run, in the order the steps ran."""

    outcomes: list[DeletionOutcome] = field(default_factory=list)

    def count(self, status: Outcome) -> int:
        return sum(1 for o in self.outcomes if o.status == status)


def destroy(
    ctx: AwsContext,
    targets: Targets,
    confirm: Confirm,
    cooldown_seconds: int = DISABLE_COOLDOWN_SECONDS,
) -> Result[TeardownReport, TeardownError]:
    """Run every selected finalizer in order, stopping at the first error.

    Order:
    1. Bucket (empty, then delete)
    2. Hosted zone (all records, then the zone)
    3. Distribution (disable, wait, delete)
    4. Certificate
    5. Domain records: the apex A record if a distribution was given, the
       certificate validation CNAME(s) if a certificate was given. Needs both
       the hosted zone id and the domain name.

    A step whose identifier is missing is recorded as SKIPPED and makes no
    remote calls.
    """
    report = TeardownReport()
    zone_and_domain = bool(targets.hosted_zone_id and targets.domain_name)

    # Step 1: Bucket
    if targets.bucket_name:
        match delete_bucket(ctx, targets.bucket_name, confirm):
            case Err() as e:
                return e
            case Ok(outcome):
                report.outcomes.append(outcome)
    else:
        report.outcomes.append(DeletionOutcome.skipped(ResourceKind.BUCKET))

    # Step 2: Hosted zone
    if targets.hosted_zone_id:
        match delete_hosted_zone(ctx, targets.hosted_zone_id, confirm):
            case Err() as e:
                return e
            case Ok(outcomes):
                report.outcomes.extend(outcomes)
    else:
        report.outcomes.append(DeletionOutcome.skipped(ResourceKind.HOSTED_ZONE))

    # Step 3: Distribution
    if targets.distribution_id:
        match delete_distribution(ctx, targets.distribution_id, confirm, cooldown_seconds):
            case Err() as e:
                return e
            case Ok(outcome):
                report.outcomes.append(outcome)
    else:
        report.outcomes.append(DeletionOutcome.skipped(ResourceKind.DISTRIBUTION))

    # Step 4: Certificate (validation names are read first; they vanish with it)
    validation_names: tuple[str, ...] = ()
    if targets.certificate_arn:
        if zone_and_domain:
            assert targets.domain_name is not None
            match validation_record_names(ctx, targets.certificate_arn, targets.domain_name):
                case Err() as e:
                    return e
                case Ok(names):
                    validation_names = names

        match delete_certificate(ctx, targets.certificate_arn, confirm):
            case Err() as e:
                return e
            case Ok(outcome):
                report.outcomes.append(outcome)
    else:
        report.outcomes.append(DeletionOutcome.skipped(ResourceKind.CERTIFICATE))

    # Step 5: Domain records tied to the distribution and certificate
    if not zone_and_domain:
        report.outcomes.append(DeletionOutcome.skipped(ResourceKind.RECORD))
        return Ok(report)

    assert targets.hosted_zone_id is not None and targets.domain_name is not None
    queries: list[tuple[str, str]] = []
    if targets.distribution_id:
        queries.append((targets.domain_name, "A"))
    if targets.certificate_arn:
        cnames = validation_names or (fallback_validation_name(targets.domain_name),)
        queries.extend((name, "CNAME") for name in cnames)

    if not queries:
        report.outcomes.append(
            DeletionOutcome.skipped(ResourceKind.RECORD, "no distribution or certificate given")
        )
        return Ok(report)

    for name, record_type in queries:
        match delete_record(ctx, targets.hosted_zone_id, name, record_type, confirm):
            case Err() as e:
                return e
            case Ok(outcome):
                report.outcomes.append(outcome)

    return Ok(report)
