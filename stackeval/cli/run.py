"""Run command for stackeval CLI."""

import json
import sys

import click

from stackeval.program import ProgramFormatError, format_listing, load_program
from stackeval.runtime.executor import Executor, ExecutionConfig


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
@click.option('--max-steps', type=click.IntRange(min=1), default=None,
              help='Abort after this many dispatched instructions')
@click.option('--listing', is_flag=True, help='Print the program listing before running')
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
def run_command(program, max_steps, listing, json_output):
    """Evaluate a bytecode program stored as JSON."""
    try:
        loaded = load_program(program)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid JSON - {e}", err=True)
        sys.exit(1)
    except ProgramFormatError as e:
        click.echo(f"Error: Invalid program - {e}", err=True)
        sys.exit(1)

    if listing and not json_output:
        click.echo(format_listing(loaded.instructions))

    executor = Executor(ExecutionConfig(max_steps=max_steps))
    result = executor.execute(loaded.instructions)

    output = result.to_dict()
    output["program_id"] = loaded.program_id

    if json_output:
        click.echo(json.dumps(output, indent=2))
    elif result.success:
        click.echo(str(result.value))
    else:
        click.echo(f"Error: {result.error['kind']}: {result.error['message']}", err=True)

    if not result.success:
        sys.exit(1)
