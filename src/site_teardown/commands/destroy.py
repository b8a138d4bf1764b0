"""Destroy command - tear down the selected resources in dependency order."""

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
from site_teardown.models import Arn, Targets
from site_teardown.workflows import destroy as destroy_workflow


def _arn_or_blank(value: str) -> str:
    """click.prompt value_proc: blank skips, anything else must be an ARN."""
    value = value.strip()
    if not value:
        return value
    try:
        return Arn(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _prompt_targets() -> Targets:
    """Ask for each identifier in turn; blank answers skip that resource."""

    def ask(text: str, value_proc=None) -> str:
        return click.prompt(
            f"{text} (leave blank to skip)",
            default="",
            show_default=False,
            value_proc=value_proc,
            err=True,
        )

    return Targets.from_inputs(
        bucket_name=ask("S3 bucket name"),
        distribution_id=ask("CloudFront distribution ID"),
        certificate_arn=ask("ACM certificate ARN", _arn_or_blank),
        hosted_zone_id=ask("Route 53 hosted zone ID"),
        domain_name=ask("Domain name, e.g. example.com"),
    )


@click.command()
@click.option("--bucket", "bucket_name", default=None, help="S3 bucket to empty and delete")
@click.option("--hosted-zone-id", default=None, help="Route 53 hosted zone to delete")
@click.option("--distribution-id", default=None, help="CloudFront distribution to delete")
@click.option(
    "--certificate-arn",
    default=None,
    callback=validate_arn,
    help="ACM certificate to delete",
)
@click.option(
    "--domain",
    "domain_name",
    default=None,
    help="Domain whose A and validation records go with the distribution and certificate",
)
@common_options
def destroy(
    bucket_name: str | None,
    hosted_zone_id: str | None,
    distribution_id: str | None,
    certificate_arn: str | None,
    domain_name: str | None,
    region: str,
    profile: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    certificate_region: str,
    as_json: bool,
    verbose: bool,
) -> None:
    """Delete a static-site stack, asking before every irreversible step.

    Runs in order, skipping anything not given:
    1. S3 bucket (all objects, then the bucket)
    2. Hosted zone (each record, then the zone)
    3. CloudFront distribution (disabled first, then deleted)
    4. ACM certificate
    5. The domain's A record and certificate validation records

    When no identifiers are passed, each one is prompted for.

    \b
    Examples:
      site-teardown destroy
      site-teardown destroy --bucket demo-bucket --distribution-id E123
      site-teardown destroy --hosted-zone-id Z0123 --domain example.com \\
          --distribution-id E123 --certificate-arn arn:aws:acm:us-east-1:123:certificate/abc
    """
    targets = Targets.from_inputs(
        bucket_name=bucket_name,
        hosted_zone_id=hosted_zone_id,
        distribution_id=distribution_id,
        certificate_arn=certificate_arn,
        domain_name=domain_name,
    )
    if targets.is_empty:
        targets = _prompt_targets()
    if targets.is_empty:
        click.echo("Nothing selected.", err=True)
        return

    ctx = make_context(
        region, profile, access_key_id, secret_access_key, certificate_region, verbose
    )

    with aws_errors():
        report = handle_result(
            destroy_workflow(ctx, targets, prompt_confirm),
            success_message=None if as_json else "All selected operations completed.",
        )

    echo_report(report.outcomes, as_json)
