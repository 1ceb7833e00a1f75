"""Validate command for stackeval CLI."""

import json
import sys

import click

from stackeval.program import ProgramFormatError, load_program
from stackeval.validator import validate_program


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
def validate_command(program, json_output):
    """Check a program's structure without running it."""
    try:
        loaded = load_program(program)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid JSON - {e}", err=True)
        sys.exit(1)
    except ProgramFormatError as e:
        click.echo(f"Error: Invalid program - {e}", err=True)
        sys.exit(1)

    report = validate_program(loaded.instructions)
    output = report.to_dict()
    output["program_id"] = loaded.program_id

    if json_output:
        click.echo(json.dumps(output, indent=2))
    elif report.valid:
        click.echo("✓ Program valid")
        click.echo(f"  Instructions: {report.instruction_count}")
        click.echo(f"  Loops: {report.loop_count}")
        for warning in report.warnings:
            click.echo(f"  Warning: {warning}")
    else:
        for error in report.errors:
            click.echo(f"Error: {error}", err=True)

    if not report.valid:
        sys.exit(1)
