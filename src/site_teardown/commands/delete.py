"""Delete commands - run a single finalizer on its own."""

import click

from site_teardown.commands.common import (
    aws_errors,
    common_options,
    echo_report,
    handle_result,
    make_context,
    validate_arn,
)
from site_teardown.lib.confirm import prompt_confirm
from site_teardown.operations import (
    delete_bucket,
    delete_certificate,
    delete_distribution,
    delete_hosted_zone,
    delete_record,
)


@click.group()
def delete() -> None:
    """Delete one resource, with the same safeguards as 'destroy'."""
    pass


@delete.command("bucket")
@click.argument("name")
@common_options
def bucket(
    name: str,
    region: str,
    profile: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    certificate_region: str,
    as_json: bool,
    verbose: bool,
) -> None:
    """Empty bucket NAME and delete it."""
    ctx = make_context(
        region, profile, access_key_id, secret_access_key, certificate_region, verbose
    )
    with aws_errors():
        outcome = handle_result(delete_bucket(ctx, name, prompt_confirm))
    echo_report([outcome], as_json)


@delete.command("distribution")
@click.argument("distribution_id")
@common_options
def distribution(
    distribution_id: str,
    region: str,
    profile: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    certificate_region: str,
    as_json: bool,
    verbose: bool,
) -> None:
    """Disable CloudFront distribution DISTRIBUTION_ID, wait, then delete it."""
    ctx = make_context(
        region, profile, access_key_id, secret_access_key, certificate_region, verbose
    )
    with aws_errors():
        outcome = handle_result(delete_distribution(ctx, distribution_id, prompt_confirm))
    echo_report([outcome], as_json)


@delete.command("certificate")
@click.argument("arn", callback=validate_arn)
@common_options
def certificate(
    arn: str,
    region: str,
    profile: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    certificate_region: str,
    as_json: bool,
    verbose: bool,
) -> None:
    """Delete ACM certificate ARN."""
    ctx = make_context(
        region, profile, access_key_id, secret_access_key, certificate_region, verbose
    )
    with aws_errors():
        outcome = handle_result(delete_certificate(ctx, arn, prompt_confirm))
    echo_report([outcome], as_json)


@delete.command("record")
@click.argument("zone_id")
@click.argument("name")
@click.option(
    "--type",
    "record_type",
    default="A",
    show_default=True,
    help="Record type to match",
)
@common_options
def record(
    zone_id: str,
    name: str,
    record_type: str,
    region: str,
    profile: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    certificate_region: str,
    as_json: bool,
    verbose: bool,
) -> None:
    """Delete the NAME record of the given type from hosted zone ZONE_ID.

    \b
    Examples:
      site-teardown delete record Z0123 example.com
      site-teardown delete record Z0123 _acme-challenge.example.com --type CNAME
    """
    ctx = make_context(
        region, profile, access_key_id, secret_access_key, certificate_region, verbose
    )
    with aws_errors():
        outcome = handle_result(delete_record(ctx, zone_id, name, record_type, prompt_confirm))
    echo_report([outcome], as_json)


@delete.command("zone")
@click.argument("zone_id")
@common_options
def zone(
    zone_id: str,
    region: str,
    profile: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    certificate_region: str,
    as_json: bool,
    verbose: bool,
) -> None:
    """Offer each record in hosted zone ZONE_ID for deletion, then the zone."""
    ctx = make_context(
        region, profile, access_key_id, secret_access_key, certificate_region, verbose
    )
    with aws_errors():
        outcomes = handle_result(delete_hosted_zone(ctx, zone_id, prompt_confirm))
    echo_report(outcomes, as_json)
