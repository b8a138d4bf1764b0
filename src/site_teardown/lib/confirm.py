"""Confirmation gate.

Every irreversible remote mutation is preceded by a call to a `Confirm`
callable. Finalizers receive it as an argument so the CLI can pass the
interactive prompt and tests can pass scripted answers.
"""

from collections.abc import Callable

import click

type Confirm = Callable[[str], bool]


def prompt_confirm(text: str) -> bool:
    """Ask the operator; an empty answer means no."""
    return click.confirm(text, default=False, err=True)
