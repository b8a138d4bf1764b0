"""Distribution operations - disable, wait, delete.

CloudFront refuses to delete an enabled distribution, and keeps refusing
for a while after it has been disabled. The finalizer therefore moves
through Enabled -> Disabling -> Disabled before it asks to delete.
"""

import logging
import time

from site_teardown.lib import cloudfront
from site_teardown.lib.aws import AwsContext
from site_teardown.lib.confirm import Confirm
from site_teardown.lib.errors import AwsError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import DeletionOutcome, DistributionTarget, Outcome

logger = logging.getLogger(__name__)

DISABLE_COOLDOWN_SECONDS = 60


def delete_distribution(
    ctx: AwsContext,
    distribution_id: str,
    confirm: Confirm,
    cooldown_seconds: int = DISABLE_COOLDOWN_SECONDS,
) -> Result[DeletionOutcome, AwsError]:
    """Disable the distribution if needed, then delete it.

    Every call after the first uses the ETag returned by the call before it.
    A stale ETag comes back as ConflictError and is never retried; it means
    someone else changed the distribution in the meantime.
    """
    target = DistributionTarget(distribution_id)

    match cloudfront.get_distribution(ctx.cloudfront, distribution_id):
        case Err() as e:
            return e
        case Ok(snapshot):
            pass

    if snapshot.enabled:
        logger.info("Disabling CloudFront distribution %s...", distribution_id)
        match cloudfront.disable_distribution(ctx.cloudfront, snapshot):
            case Err() as e:
                return e
            case Ok(snapshot):
                pass

        logger.info("Waiting %d seconds for CloudFront to disable...", cooldown_seconds)
        time.sleep(cooldown_seconds)

    if not confirm(f"Delete CloudFront distribution: {distribution_id}?"):
        return Ok(DeletionOutcome.of(target, Outcome.DECLINED, "left disabled"))

    match cloudfront.delete_distribution(ctx.cloudfront, distribution_id, snapshot.etag):
        case Err() as e:
            return e
        case Ok(_):
            pass

    logger.info("CloudFront distribution %s deleted.", distribution_id)
    return Ok(DeletionOutcome.of(target, Outcome.DELETED))
