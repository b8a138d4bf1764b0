"""Certificate operations."""

import logging

from site_teardown.lib import acm
from site_teardown.lib.aws import AwsContext
from site_teardown.lib.confirm import Confirm
from site_teardown.lib.errors import AwsError
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import CertificateTarget, DeletionOutcome, Outcome, fqdn

logger = logging.getLogger(__name__)

ACME_CHALLENGE_LABEL = "_acme-challenge"


def fallback_validation_name(domain_name: str) -> str:
    return fqdn(f"{ACME_CHALLENGE_LABEL}.{domain_name}")


def validation_record_names(
    ctx: AwsContext, arn: str, domain_name: str
) -> Result[tuple[str, ...], AwsError]:
    """DNS validation CNAMEs that ACM issued for this certificate within `domain_name`.

    Must be read before the certificate is deleted. An empty tuple means
    the certificate has no DNS validation records in this domain.
    """
    match acm.describe_certificate(ctx.acm, arn):
        case Err() as e:
            return e
        case Ok(certificate):
            pass

    domain = fqdn(domain_name)
    names: dict[str, None] = {}
    for option in certificate.get("DomainValidationOptions", []):
        record = option.get("ResourceRecord")
        if not record or record.get("Type") != "CNAME":
            continue
        name = fqdn(record["Name"])
        if name == domain or name.endswith(f".{domain}"):
            names[name] = None

    return Ok(tuple(names))


def delete_certificate(
    ctx: AwsContext, arn: str, confirm: Confirm
) -> Result[DeletionOutcome, AwsError]:
    """Delete an ACM certificate. A missing certificate is an error."""
    target = CertificateTarget(arn)

    if not confirm(f"Delete ACM certificate: {arn}?"):
        return Ok(DeletionOutcome.of(target, Outcome.DECLINED))

    match acm.delete_certificate(ctx.acm, arn):
        case Err() as e:
            return e
        case Ok(_):
            pass

    logger.info("ACM certificate %s deleted.", arn)
    return Ok(DeletionOutcome.of(target, Outcome.DELETED))
