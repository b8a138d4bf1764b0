"""Route 53 operations - single records and whole hosted zones."""

import logging

from site_teardown.lib import route53
from site_teardown.lib.aws import AwsContext
from site_teardown.lib.confirm import Confirm
from site_teardown.lib.errors import AmbiguousRecordError, AwsError, NotFoundError, RecordError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import (
    DeletionOutcome,
    DomainRecordTarget,
    HostedZoneTarget,
    Outcome,
    RecordSet,
    deletable_records,
)

logger = logging.getLogger(__name__)


def _confirm_and_delete(
    ctx: AwsContext, record: RecordSet, confirm: Confirm
) -> Result[DeletionOutcome, AwsError]:
    target = record.target()
    if not confirm(f"Delete {record.type} record for {record.name}?"):
        return Ok(DeletionOutcome.of(target, Outcome.DECLINED))

    match route53.delete_record_set(ctx.route53, record):
        case Err() as e:
            return e
        case Ok(_):
            pass

    logger.info("Deleted %s record: %s", record.type, record.name)
    return Ok(DeletionOutcome.of(target, Outcome.DELETED))


def delete_record(
    ctx: AwsContext,
    zone_id: str,
    name: str,
    record_type: str,
    confirm: Confirm,
) -> Result[DeletionOutcome, RecordError]:
    """Delete the record set matching `name` and `record_type` exactly.

    A missing record, or a zone that is already gone, is reported as
    NOT_FOUND without prompting.
    """
    target = DomainRecordTarget(zone_id, name, record_type)

    match route53.list_record_sets(ctx.route53, target.zone_id):
        case Err(NotFoundError()):
            logger.warning(
                "Hosted zone %s not found; skipping %s record", target.zone_id, target.name
            )
            return Ok(DeletionOutcome.of(target, Outcome.NOT_FOUND, "hosted zone not found"))
        case Err() as e:
            return e
        case Ok(records):
            pass

    matches = [r for r in records if r.matches(target.name, target.record_type)]
    if not matches:
        logger.warning("No %s record found for %s", target.record_type, target.name)
        return Ok(DeletionOutcome.of(target, Outcome.NOT_FOUND))
    if len(matches) > 1:
        return Err(
            AmbiguousRecordError(target.zone_id, target.name, target.record_type, len(matches))
        )

    return _confirm_and_delete(ctx, matches[0], confirm)


def delete_hosted_zone(
    ctx: AwsContext, zone_id: str, confirm: Confirm
) -> Result[list[DeletionOutcome], AwsError]:
    """Offer every deletable record for deletion, then the zone itself.

    Each record gets its own prompt; declining one does not stop the rest.
    NS and SOA records are never offered. If records remain when the zone
    delete is attempted, Route 53 rejects it and the error is returned.
    """
    target = HostedZoneTarget(zone_id)

    match route53.list_record_sets(ctx.route53, target.id):
        case Err() as e:
            return e
        case Ok(records):
            pass

    outcomes: list[DeletionOutcome] = []
    for record in deletable_records(records):
        match _confirm_and_delete(ctx, record, confirm):
            case Err() as e:
                return e
            case Ok(outcome):
                outcomes.append(outcome)

    if not confirm(f'Delete the hosted zone "{target.id}" now?'):
        outcomes.append(DeletionOutcome.of(target, Outcome.DECLINED))
        return Ok(outcomes)

    match route53.delete_hosted_zone(ctx.route53, target.id):
        case Err() as e:
            return e
        case Ok(_):
            pass

    logger.info('Hosted zone "%s" deleted.', target.id)
    outcomes.append(DeletionOutcome.of(target, Outcome.DELETED))
    return Ok(outcomes)
