"""site-teardown CLI entry point."""

import click

from site_teardown import __version__
from site_teardown.commands import delete, destroy


@click.group()
@click.version_option(version=__version__, prog_name="site-teardown")
def cli() -> None:
    """site-teardown - safely delete an S3 + CloudFront + ACM + Route 53 site."""
    pass


# Register subcommands
cli.add_command(destroy)
cli.add_command(delete)


if __name__ == "__main__":
    cli()
