#!/usr/bin/env python3
"""
CLI for MikroValid.

Validates JSON/YAML documents against MikroValid schemas and infers schemas
from sample documents.

Usage:
    mikrovalid validate schema.yaml input.json
    mikrovalid validate schema.json input.json --format json
    mikrovalid infer sample.json --format yaml
    mikrovalid --version
"""

import json
import logging
from enum import Enum
from typing import Any

import typer

from mikrovalid import MikroValid, __version__
from mikrovalid.errors import DocumentError, MikroValidError, SchemaDefinitionError
from mikrovalid.loader import dump_document, load_document, load_schema

# Exit codes
EXIT_INVALID = 1
EXIT_ERROR = 2

app = typer.Typer(
    name="mikrovalid",
    help="MikroValid - Lightweight JSON validator with schema inference",
    no_args_is_help=True,
    add_completion=False,
)


class ReportFormat(str, Enum):
    """Output format for validate command."""
    text = "text"
    json = "json"


class SchemaFormat(str, Enum):
    """Output format for infer command."""
    json = "json"
    yaml = "yaml"


def setup_logging(verbose: int, quiet: bool):
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
    )


def read_document(path: str, schema: bool = False) -> Any:
    """Load a document, turning load failures into exit code 2."""
    try:
        if schema:
            return load_schema(path)
        return load_document(path)
    except FileNotFoundError:
        typer.echo(f"Error: File not found: {path}", err=True)
        raise typer.Exit(EXIT_ERROR)
    except SchemaDefinitionError as e:
        typer.echo(f"Error: Invalid schema in {path}:", err=True)
        for problem in e.problems:
            typer.echo(f"  - {problem}", err=True)
        raise typer.Exit(EXIT_ERROR)
    except DocumentError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)


@app.command()
def validate(
    schema: str = typer.Argument(..., help="Path or URI of the schema (JSON or YAML)"),
    input: str = typer.Argument(..., help="Path or URI of the input document (JSON or YAML)"),
    silent: bool = typer.Option(False, "--silent", help="Suppress diagnostics about unchecked properties"),
    format: ReportFormat = typer.Option(ReportFormat.text, "--format", "-f", help="Report format (text, json)"),
):
    """Validate an input document against a schema."""
    schema_doc = read_document(schema, schema=True)
    data = read_document(input)

    try:
        report = MikroValid(silent=silent).test(schema_doc, data)
    except MikroValidError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)

    if format == ReportFormat.json:
        typer.echo(json.dumps(report.to_dict(), indent=2, default=str))
    elif report.success:
        typer.echo(f"✓ {input} is valid")
    else:
        typer.echo(f"✗ {input} has {len(report.errors)} error(s):")
        for error in report.errors:
            typer.echo(f"  {error.path or '<root>'}: {error.error}")

    if not report.success:
        raise typer.Exit(EXIT_INVALID)


@app.command()
def infer(
    sample: str = typer.Argument(..., help="Path or URI of the sample document (JSON or YAML)"),
    format: SchemaFormat = typer.Option(SchemaFormat.json, "--format", "-f", help="Schema format (json, yaml)"),
    silent: bool = typer.Option(False, "--silent", help="Suppress inference diagnostics"),
):
    """Infer a schema from a sample document."""
    data = read_document(sample)

    try:
        inferred = MikroValid(silent=silent).schema_from(data)
    except MikroValidError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)

    typer.echo(dump_document(inferred, format.value).rstrip("\n"))


def version_callback(value: bool):
    """Handle --version flag."""
    if value:
        typer.echo(f"mikrovalid {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True,
                                   help="Show version and exit"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
):
    """MikroValid - Lightweight JSON validator with schema inference."""
    setup_logging(verbose, quiet)


def main():
    """Entry point for the mikrovalid CLI."""
    app()


if __name__ == "__main__":
    main()
