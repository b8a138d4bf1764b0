"""Workflows layer - sequence finalizers into a full teardown."""

from site_teardown.workflows.teardown import TeardownReport, destroy

__all__ = [
    "destroy",
    "TeardownReport",
]
