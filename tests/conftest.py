"""Shared pytest fixtures for site-teardown tests."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from site_teardown.lib.aws import AwsContext

REGION = "us-east-1"


class ScriptedConfirm:
    """Confirmation gate that replays canned answers and records every prompt.

    Once the script runs out it answers `default`, which is False like the
    real prompt.
    """

    def __init__(self, *answers: bool, default: bool = False) -> None:
        self.answers = list(answers)
        self.default = default
        self.prompts: list[str] = []

    def __call__(self, text: str) -> bool:
        self.prompts.append(text)
        if self.answers:
            return self.answers.pop(0)
        return self.default


def client_error(code: str, operation: str = "Operation", message: str = "") -> ClientError:
    """Build a botocore ClientError with the given code."""
    return ClientError({"Error": {"Code": code, "Message": message or code}}, operation)


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)


@pytest.fixture
def aws_context(aws_credentials):
    """AwsContext whose clients talk to moto."""
    with mock_aws():
        yield AwsContext(region=REGION)


@pytest.fixture
def mock_ctx() -> AwsContext:
    """AwsContext with MagicMock clients, for asserting exact call sequences."""
    ctx = AwsContext(region=REGION)
    ctx.s3 = MagicMock()
    ctx.cloudfront = MagicMock()
    ctx.acm = MagicMock()
    ctx.route53 = MagicMock()
    return ctx


@pytest.fixture
def hosted_zone(aws_context: AwsContext) -> str:
    """example.com zone with an apex A record and an ACME challenge CNAME."""
    response = aws_context.route53.create_hosted_zone(Name="example.com", CallerReference="ref-1")
    zone_id = response["HostedZone"]["Id"]
    aws_context.route53.change_resource_record_sets(
        HostedZoneId=zone_id,
        ChangeBatch={
            "Changes": [
                {
                    "Action": "CREATE",
                    "ResourceRecordSet": {
                        "Name": "example.com.",
                        "Type": "A",
                        "TTL": 300,
                        "ResourceRecords": [{"Value": "192.0.2.10"}],
                    },
                },
                {
                    "Action": "CREATE",
                    "ResourceRecordSet": {
                        "Name": "_acme-challenge.example.com.",
                        "Type": "CNAME",
                        "TTL": 300,
                        "ResourceRecords": [{"Value": "validate.example.net."}],
                    },
                },
            ]
        },
    )
    return zone_id
