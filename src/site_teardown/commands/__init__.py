"""Commands layer - CLI facade over workflows and operations."""

from site_teardown.commands.delete import delete
from site_teardown.commands.destroy import destroy

__all__ = [
    "destroy",
    "delete",
]
