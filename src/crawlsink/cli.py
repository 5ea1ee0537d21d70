"""CLI interface using typer."""

import json
import logging
import sys
from contextlib import ExitStack
from pathlib import Path

import typer

from .config import settings
from .errors import ConfigValidationError, OutputError
from .output import StandardWriter
from .result import Result

app = typer.Typer(
    name="crawlsink",
    help="Format and archive crawl results",
    no_args_is_help=True,
)


@app.command("format")
def format_results(
    input_file: Path = typer.Argument(
        None, exists=True, dir_okay=False, help="JSON lines file with results (default: stdin)"
    ),
    json_output: bool = typer.Option(settings.json_output, "-j", "--json", help="Write JSON lines"),
    colors: bool = typer.Option(settings.colors, "--color/--no-color", help="Colorize screen output"),
    verbose: bool = typer.Option(settings.verbose, "-v", "--verbose", help="Include timestamp and body"),
    output: str = typer.Option(settings.output_file, "-o", "--output", help="Also write to this file"),
    fields: str = typer.Option(settings.fields, "-f", "--fields", help="Fields to output (e.g. URL,Tag)"),
    store_fields: str = typer.Option(
        settings.store_fields, "--store-fields", help="Fields to store in per-field files"
    ),
    store_fields_dir: str = typer.Option(
        settings.store_fields_dir, "--store-fields-dir", help="Directory for per-field files"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Re-emit JSON lines results as text or JSON."""
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        writer = StandardWriter(
            colors=colors,
            json_output=json_output,
            verbose=verbose,
            output_file=output,
            fields=fields,
            store_fields=store_fields,
            store_fields_dir=store_fields_dir,
            append_output=settings.append_output,
        )
    except ConfigValidationError as e:
        raise typer.BadParameter(str(e), param_hint=f"--{(e.option or '').replace('_', '-')}")
    except OutputError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    with ExitStack() as stack:
        stack.callback(writer.close)
        stream = sys.stdin
        if input_file:
            try:
                stream = stack.enter_context(open(input_file, encoding="utf-8"))
            except OSError as e:
                typer.echo(f"Error: could not read {input_file}: {e}", err=True)
                raise typer.Exit(1)
        for lineno, line in enumerate(stream, 1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
                if not isinstance(data, dict):
                    raise ValueError("expected a JSON object")
                result = Result.from_dict(data)
            except (ValueError, TypeError, AttributeError) as e:
                typer.echo(f"Error: line {lineno}: invalid result: {e}", err=True)
                raise typer.Exit(1)
            try:
                writer.write(result)
            except OutputError as e:
                typer.echo(f"Error: line {lineno}: {e}", err=True)
                raise typer.Exit(1)


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"crawlsink {__version__}")


if __name__ == "__main__":
    app()
