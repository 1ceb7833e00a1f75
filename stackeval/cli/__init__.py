"""Stackeval CLI Package"""

import logging

import click

from stackeval import __version__
from stackeval.cli.run import run_command
from stackeval.cli.validate import validate_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose):
    """Stackeval CLI - evaluate flat stack bytecode programs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@click.command()
def version_command():
    """Show version info."""
    click.echo(f"stackeval {__version__}")


main.add_command(run_command, "run")
main.add_command(validate_command, "validate")
main.add_command(version_command, "version")

__all__ = [
    "main",
    "run_command",
    "validate_command",
    "version_command",
]
