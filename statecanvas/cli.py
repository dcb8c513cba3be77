"""Command-line interface for statecanvas."""

import sys
from pathlib import Path

import click

from .config import ConfigError, configure_logging, load_settings
from .editing.session import EditorSession
from .output.formatter import format_summary, format_validation_result
from .schema.errors import MalformedInput, SchemaViolation
from .schema.loader import load_document
from .validators.runner import run_validators


def _load_session(ctx: click.Context, document_file: str) -> EditorSession:
    """Import a document file into a fresh session, exiting on failure."""
    session = EditorSession(ctx.obj["settings"])
    try:
        session.import_document(load_document(document_file))
    except MalformedInput as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except SchemaViolation as e:
        click.echo(f"Invalid automaton: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(1)
    return session


@click.group()
@click.version_option(package_name="statecanvas")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML settings file",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool):
    """statecanvas: inspect and normalize exported automata."""
    try:
        settings = load_settings(config_file)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("document_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(document_file: str, output_format: str, strict: bool):
    """Validate an exported automaton.

    DOCUMENT_FILE is the path to a JSON automaton document.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File is unreadable or not JSON
    """
    try:
        result = run_validators(load_document(document_file))
    except MalformedInput as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)

    output = format_validation_result(result, output_format)  # type: ignore
    click.echo(output)

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("document_file", type=click.Path(exists=True))
@click.pass_context
def summary(ctx: click.Context, document_file: str):
    """Print an overview of an exported automaton.

    Exit codes:
      0 - Success
      1 - Document breaks a structural rule
      2 - File is unreadable or not JSON
    """
    session = _load_session(ctx, document_file)
    snapshot = session.snapshot()
    reachable = session.store.reachable_state_ids()
    unreachable = []
    if snapshot.start_state_id is not None:
        unreachable = [s.id for s in snapshot.states if s.id not in reachable]

    click.echo(format_summary(snapshot, unreachable))
    sys.exit(0)


@main.command()
@click.argument("document_file", type=click.Path(exists=True))
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the result here instead of stdout",
)
@click.pass_context
def normalize(ctx: click.Context, document_file: str, output_file: str | None):
    """Re-export an automaton, dropping unknown fields.

    Exit codes:
      0 - Success
      1 - Document breaks a structural rule
      2 - File is unreadable or not JSON
    """
    session = _load_session(ctx, document_file)
    text = session.export_json()

    if output_file:
        Path(output_file).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Wrote: {output_file}")
    else:
        click.echo(text)
    sys.exit(0)


if __name__ == "__main__":
    main()
