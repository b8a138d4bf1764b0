"""Shared CLI utilities.

Common options, AwsContext creation, error handling, output formatting.
"""

import json
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, ParamSpec, TypeVar

import click
from botocore.exceptions import BotoCoreError

from site_teardown.lib.aws import CERTIFICATE_REGION, AwsContext
from site_teardown.lib.errors import (
    AccessDeniedError,
    AmbiguousRecordError,
    AwsCallError,
    ConflictError,
    InvalidChangeBatchError,
    NotEmptyError,
    NotFoundError,
    PartialDeleteError,
    PreconditionFailedError,
    ResourceInUseError,
)
from site_teardown.lib.log import configure_logging
from site_teardown.lib.result import Err, Ok, Result
from site_teardown.models import Arn, DeletionOutcome, Outcome

# Default values
DEFAULT_REGION = "us-east-1"

# Failed keys listed before the message is truncated
MAX_FAILED_KEYS_SHOWN = 10

# Type variables for decorators
P = ParamSpec("P")
T = TypeVar("T")


# Common CLI options as decorators
def region_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --region/-r option."""
    return click.option(
        "--region",
        "-r",
        envvar="AWS_REGION",
        default=DEFAULT_REGION,
        show_default=True,
        help="AWS region for the S3 bucket",
    )(fn)


def profile_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --profile/-p option."""
    return click.option(
        "--profile",
        "-p",
        envvar="AWS_PROFILE",
        default=None,
        help="AWS profile",
    )(fn)


def credentials_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add explicit --access-key-id/--secret-access-key options."""
    fn = click.option(
        "--secret-access-key",
        envvar="AWS_SECRET_ACCESS_KEY",
        default=None,
        help="AWS secret access key (prompted when an access key id is given without it)",
    )(fn)
    fn = click.option(
        "--access-key-id",
        envvar="AWS_ACCESS_KEY_ID",
        default=None,
        help="AWS access key id (defaults to the standard credential chain)",
    )(fn)
    return fn


def certificate_region_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --certificate-region option."""
    return click.option(
        "--certificate-region",
        default=CERTIFICATE_REGION,
        show_default=True,
        help="Region of the ACM certificate",
    )(fn)


def json_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --json flag for JSON output."""
    return click.option(
        "--json",
        "as_json",
        is_flag=True,
        help="Output the final report as JSON",
    )(fn)


def verbose_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --verbose/-v flag."""
    return click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Log every AWS call",
    )(fn)


def aws_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add all AWS-related options (region, profile, keys, certificate region)."""
    fn = region_option(fn)
    fn = profile_option(fn)
    fn = credentials_options(fn)
    fn = certificate_region_option(fn)
    return fn


def common_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add all common options (AWS, --json, --verbose)."""
    fn = aws_options(fn)
    fn = json_option(fn)
    fn = verbose_option(fn)
    return fn


def validate_arn(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    """click callback: reject malformed ARNs before any AWS call."""
    if not value:
        return value
    try:
        return Arn(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def make_context(
    region: str,
    profile: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    certificate_region: str,
    verbose: bool = False,
) -> AwsContext:
    """Configure logging and create AwsContext from CLI options."""
    configure_logging(verbose)
    if access_key_id and not secret_access_key:
        secret_access_key = click.prompt("AWS Secret Access Key", hide_input=True)
    return AwsContext(
        region=region,
        profile=profile,
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        certificate_region=certificate_region,
    )


@contextmanager
def aws_errors() -> Iterator[None]:
    """Turn botocore failures outside the Result flow (credentials, network) into CLI errors."""
    try:
        yield
    except BotoCoreError as e:
        raise click.ClickException(str(e)) from e


def handle_result(result: Result[T, Any], success_message: str | None = None) -> T:
    """Handle a Result, exiting on error with appropriate message.

    On Ok: returns the value, optionally prints success message
    On Err: prints error and exits with code 1
    """
    match result:
        case Ok(value):
            if success_message:
                click.secho(success_message, fg="green", bold=True)
            return value
        case Err(error):
            handle_error(error)
            sys.exit(1)  # Should never reach here, but for type checker


def handle_error(error: Any) -> None:
    """Print error message and exit."""
    message = _format_error(error)
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _format_error(error: Any) -> str:
    """Format error for display."""
    match error:
        case NotFoundError(kind, identifier):
            return f"{kind.label} '{identifier}' not found."

        case AccessDeniedError(kind, identifier, reason):
            return f"Access denied to {kind.label.lower()} '{identifier}': {reason}"

        case ConflictError(kind, identifier, reason):
            return (
                f"{kind.label} '{identifier}' was modified concurrently ({reason}). "
                "Nothing was retried; re-run once it is stable."
            )

        case PreconditionFailedError(kind, identifier, reason):
            return f"{kind.label} '{identifier}' is not ready for deletion: {reason}"

        case NotEmptyError(kind, identifier, reason):
            return f"{kind.label} '{identifier}' is not empty: {reason}"

        case ResourceInUseError(kind, identifier, reason):
            return f"{kind.label} '{identifier}' is still in use: {reason}"

        case PartialDeleteError(bucket, failed_keys):
            shown = ", ".join(f"{k.key} ({k.code})" for k in failed_keys[:MAX_FAILED_KEYS_SHOWN])
            more = len(failed_keys) - MAX_FAILED_KEYS_SHOWN
            suffix = f" and {more} more" if more > 0 else ""
            return (
                f"{len(failed_keys)} objects could not be deleted from bucket '{bucket}': "
                f"{shown}{suffix}. The bucket was not deleted."
            )

        case InvalidChangeBatchError(zone_id, reason):
            return f"Route 53 rejected the change for hosted zone '{zone_id}': {reason}"

        case AmbiguousRecordError(zone_id, name, record_type, count):
            return (
                f"{count} {record_type} record sets named '{name}' exist in hosted zone "
                f"'{zone_id}'. Remove the intended one by hand."
            )

        case AwsCallError(kind, identifier, code, reason):
            return f"AWS call on {kind.label.lower()} '{identifier}' failed: {code} - {reason}"

        case _:
            return str(error)


def to_json(obj: Any) -> str:
    """Convert object to JSON string."""
    return json.dumps(_to_serializable(obj), indent=2)


def _to_serializable(obj: Any) -> Any:
    """Convert object to JSON-serializable form."""
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, dict):
        return {k: _to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_serializable(v) for v in obj]
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_serializable(asdict(obj))
    return str(obj)


_STATUS_COLORS = {
    Outcome.DELETED: "green",
    Outcome.DECLINED: "yellow",
    Outcome.NOT_FOUND: "yellow",
    Outcome.SKIPPED: None,
}


def echo_section(title: str) -> None:
    """Print a section header."""
    click.echo()
    click.secho(title, bold=True)
    click.echo("-" * len(title))


def echo_outcomes(outcomes: list[DeletionOutcome]) -> None:
    """Print one line per outcome."""
    echo_section("Summary")
    for outcome in outcomes:
        status = click.style(f"{outcome.status.value:<9}", fg=_STATUS_COLORS[outcome.status])
        line = f"  {status} {outcome.kind.value:<12} {outcome.identifier or '-'}"
        if outcome.detail:
            line += f" ({outcome.detail})"
        click.echo(line)


def echo_report(outcomes: list[DeletionOutcome], as_json: bool) -> None:
    """Print outcomes as JSON or as the summary table."""
    if as_json:
        click.echo(to_json({"outcomes": outcomes}))
    else:
        echo_outcomes(outcomes)
