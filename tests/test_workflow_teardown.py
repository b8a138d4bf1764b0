"""Tests for workflows/teardown.py - ordering, skipping and fail-fast.

Finalizers are patched out for the ordering tests; the last class runs a
whole teardown against moto.
"""

from unittest.mock import patch

import pytest

from site_teardown.lib.aws import AwsContext
from site_teardown.lib.errors import NotFoundError
from site_teardown.lib.result import Err, Ok
from site_teardown.models import (
    BucketTarget,
    CertificateTarget,
    DeletionOutcome,
    DistributionTarget,
    DomainRecordTarget,
    HostedZoneTarget,
    Outcome,
    ResourceKind,
    Targets,
)
from site_teardown.workflows import destroy

from conftest import ScriptedConfirm

CERT_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/0b6c0f26-7d0e-4bd4-9a4a-0c1f6f9b2d11"
WORKFLOW = "site_teardown.workflows.teardown"

FULL = Targets(
    bucket_name="demo-bucket",
    hosted_zone_id="Z1",
    distribution_id="E123",
    certificate_arn=CERT_ARN,
    domain_name="example.com",
)


class Finalizers:
    """Patched finalizers that log their calls into one shared list."""

    def __init__(self, validation_names: tuple[str, ...] = ()) -> None:
        self.calls: list[tuple] = []
        self.validation_names = validation_names

    def bucket(self, ctx, name, confirm):
        self.calls.append(("bucket", name))
        return Ok(DeletionOutcome.of(BucketTarget(name), Outcome.DELETED))

    def zone(self, ctx, zone_id, confirm):
        self.calls.append(("zone", zone_id))
        return Ok([DeletionOutcome.of(HostedZoneTarget(zone_id), Outcome.DELETED)])

    def distribution(self, ctx, distribution_id, confirm, cooldown_seconds):
        self.calls.append(("distribution", distribution_id))
        return Ok(DeletionOutcome.of(DistributionTarget(distribution_id), Outcome.DELETED))

    def validation(self, ctx, arn, domain_name):
        self.calls.append(("validation", arn, domain_name))
        return Ok(self.validation_names)

    def certificate(self, ctx, arn, confirm):
        self.calls.append(("certificate", arn))
        return Ok(DeletionOutcome.of(CertificateTarget(arn), Outcome.DELETED))

    def record(self, ctx, zone_id, name, record_type, confirm):
        self.calls.append(("record", zone_id, name, record_type))
        target = DomainRecordTarget(zone_id, name, record_type)
        return Ok(DeletionOutcome.of(target, Outcome.DELETED))

    def patches(self):
        return [
            patch(f"{WORKFLOW}.delete_bucket", side_effect=self.bucket),
            patch(f"{WORKFLOW}.delete_hosted_zone", side_effect=self.zone),
            patch(f"{WORKFLOW}.delete_distribution", side_effect=self.distribution),
            patch(f"{WORKFLOW}.validation_record_names", side_effect=self.validation),
            patch(f"{WORKFLOW}.delete_certificate", side_effect=self.certificate),
            patch(f"{WORKFLOW}.delete_record", side_effect=self.record),
        ]

    def run(self, ctx: AwsContext, targets: Targets):
        for p in self.patches():
            p.start()
        try:
            return destroy(ctx, targets, ScriptedConfirm())
        finally:
            patch.stopall()


@pytest.fixture
def finalizers() -> Finalizers:
    return Finalizers()


class TestOrdering:
    def test_runs_in_dependency_order(self, mock_ctx: AwsContext, finalizers: Finalizers) -> None:
        result = finalizers.run(mock_ctx, FULL)

        assert isinstance(result, Ok)
        assert [c[0] for c in finalizers.calls] == [
            "bucket",
            "zone",
            "distribution",
            "validation",
            "certificate",
            "record",
            "record",
        ]

    def test_domain_records_queried(self, mock_ctx: AwsContext, finalizers: Finalizers) -> None:
        finalizers.run(mock_ctx, FULL)

        records = [c[1:] for c in finalizers.calls if c[0] == "record"]
        assert records == [
            ("Z1", "example.com", "A"),
            ("Z1", "_acme-challenge.example.com.", "CNAME"),
        ]

    def test_uses_validation_names_from_certificate(self, mock_ctx: AwsContext) -> None:
        finalizers = Finalizers(validation_names=("_a1.example.com.", "_b2.www.example.com."))

        finalizers.run(mock_ctx, FULL)

        records = [c[2:] for c in finalizers.calls if c[0] == "record"]
        assert records == [
            ("example.com", "A"),
            ("_a1.example.com.", "CNAME"),
            ("_b2.www.example.com.", "CNAME"),
        ]

    def test_outcomes_follow_run_order(self, mock_ctx: AwsContext, finalizers: Finalizers) -> None:
        result = finalizers.run(mock_ctx, FULL)

        assert isinstance(result, Ok)
        assert [o.kind for o in result.value.outcomes] == [
            ResourceKind.BUCKET,
            ResourceKind.HOSTED_ZONE,
            ResourceKind.DISTRIBUTION,
            ResourceKind.CERTIFICATE,
            ResourceKind.RECORD,
            ResourceKind.RECORD,
        ]
        assert result.value.count(Outcome.DELETED) == 6


class TestSkipping:
    def test_missing_identifiers_make_no_calls(
        self, mock_ctx: AwsContext, finalizers: Finalizers
    ) -> None:
        result = finalizers.run(mock_ctx, Targets(bucket_name="demo-bucket"))

        assert isinstance(result, Ok)
        assert finalizers.calls == [("bucket", "demo-bucket")]
        assert [o.status for o in result.value.outcomes] == [
            Outcome.DELETED,
            Outcome.SKIPPED,
            Outcome.SKIPPED,
            Outcome.SKIPPED,
            Outcome.SKIPPED,
        ]

    def test_records_need_zone_and_domain(
        self, mock_ctx: AwsContext, finalizers: Finalizers
    ) -> None:
        targets = Targets(
            distribution_id="E123", certificate_arn=CERT_ARN, domain_name="example.com"
        )

        result = finalizers.run(mock_ctx, targets)

        assert isinstance(result, Ok)
        assert [c[0] for c in finalizers.calls] == ["distribution", "certificate"]
        assert result.value.outcomes[-1] == DeletionOutcome.skipped(ResourceKind.RECORD)

    def test_zone_and_domain_alone_query_nothing(
        self, mock_ctx: AwsContext, finalizers: Finalizers
    ) -> None:
        targets = Targets(hosted_zone_id="Z1", domain_name="example.com")

        result = finalizers.run(mock_ctx, targets)

        assert isinstance(result, Ok)
        assert [c[0] for c in finalizers.calls] == ["zone"]
        last = result.value.outcomes[-1]
        assert last.status == Outcome.SKIPPED
        assert last.detail == "no distribution or certificate given"

    def test_distribution_only_queries_a_record(
        self, mock_ctx: AwsContext, finalizers: Finalizers
    ) -> None:
        targets = Targets(hosted_zone_id="Z1", distribution_id="E123", domain_name="example.com")

        finalizers.run(mock_ctx, targets)

        assert [c for c in finalizers.calls if c[0] == "record"] == [
            ("record", "Z1", "example.com", "A")
        ]

    def test_certificate_only_queries_validation_record(
        self, mock_ctx: AwsContext, finalizers: Finalizers
    ) -> None:
        targets = Targets(hosted_zone_id="Z1", certificate_arn=CERT_ARN, domain_name="example.com")

        finalizers.run(mock_ctx, targets)

        assert [c for c in finalizers.calls if c[0] == "record"] == [
            ("record", "Z1", "_acme-challenge.example.com.", "CNAME")
        ]


class TestFailFast:
    def test_error_stops_later_steps(self, mock_ctx: AwsContext, finalizers: Finalizers) -> None:
        error = NotFoundError(ResourceKind.DISTRIBUTION, "E123")

        with (
            patch(f"{WORKFLOW}.delete_bucket", side_effect=finalizers.bucket),
            patch(f"{WORKFLOW}.delete_hosted_zone", side_effect=finalizers.zone),
            patch(f"{WORKFLOW}.delete_distribution", return_value=Err(error)),
            patch(f"{WORKFLOW}.validation_record_names") as validation,
            patch(f"{WORKFLOW}.delete_certificate") as certificate,
            patch(f"{WORKFLOW}.delete_record") as record,
        ):
            result = destroy(mock_ctx, FULL, ScriptedConfirm())

        assert result == Err(error)
        validation.assert_not_called()
        certificate.assert_not_called()
        record.assert_not_called()

    def test_first_step_error(self, mock_ctx: AwsContext) -> None:
        error = NotFoundError(ResourceKind.BUCKET, "demo-bucket")

        with (
            patch(f"{WORKFLOW}.delete_bucket", return_value=Err(error)),
            patch(f"{WORKFLOW}.delete_hosted_zone") as zone,
        ):
            result = destroy(mock_ctx, FULL, ScriptedConfirm())

        assert result == Err(error)
        zone.assert_not_called()


class TestTeardownWithMoto:
    """Bucket plus hosted zone plus domain records, end to end."""

    def test_bucket_and_zone(self, aws_context: AwsContext, hosted_zone: str) -> None:
        aws_context.s3.create_bucket(Bucket="demo-bucket")
        aws_context.s3.put_object(Bucket="demo-bucket", Key="index.html", Body=b"<html/>")
        confirm = ScriptedConfirm(default=True)

        result = destroy(
            aws_context,
            Targets(bucket_name="demo-bucket", hosted_zone_id=hosted_zone),
            confirm,
        )

        assert isinstance(result, Ok)
        assert result.value.count(Outcome.DELETED) == 4
        assert result.value.count(Outcome.SKIPPED) == 3
        assert confirm.prompts[0] == 'Delete all contents and the bucket "demo-bucket"?'
        assert aws_context.s3.list_buckets()["Buckets"] == []

    def test_declined_bucket_continues(self, aws_context: AwsContext, hosted_zone: str) -> None:
        aws_context.s3.create_bucket(Bucket="demo-bucket")
        confirm = ScriptedConfirm(False)

        result = destroy(
            aws_context,
            Targets(bucket_name="demo-bucket", hosted_zone_id=hosted_zone),
            confirm,
        )

        assert isinstance(result, Ok)
        assert result.value.outcomes[0].status == Outcome.DECLINED
        assert len(confirm.prompts) == 4
