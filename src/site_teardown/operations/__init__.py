"""Operations layer - one finalizer per resource kind, each returning a Result."""

from site_teardown.operations.bucket import delete_bucket, empty_bucket
from site_teardown.operations.certificate import delete_certificate, validation_record_names
from site_teardown.operations.distribution import delete_distribution
from site_teardown.operations.dns import delete_hosted_zone, delete_record

__all__ = [
    # bucket
    "empty_bucket",
    "delete_bucket",
    # distribution
    "delete_distribution",
    # certificate
    "validation_record_names",
    "delete_certificate",
    # dns
    "delete_record",
    "delete_hosted_zone",
]
