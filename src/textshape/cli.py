"""CLI entry point for textshape."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from textshape.config.logging import setup_logging
from textshape.config.manager import ConfigManager
from textshape.extraction import ExtractionOrchestrator, SchemaError, parse_template
from textshape.extraction.clients import create_client
from textshape.extraction.prompts import render_shape
from textshape.utils.api_keys import APIKeyError
from textshape.utils.errors import InvalidConfigError, TextshapeError
from textshape.utils.retry import RetryConfig

app = typer.Typer(
    name="textshape",
    help="Convert unstructured text into JSON matching a shape you describe",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """textshape - structured data from free text."""
    try:
        level = ConfigManager().load_config().log_level
    except InvalidConfigError:
        # Reported by the command that needs the config
        level = "INFO"

    setup_logging(verbose=verbose, log_file=log_file, level=level)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from textshape import __version__

    console.print(f"[bold cyan]textshape[/bold cyan] v{__version__}")


def _read_file(name: str, default: str | None = None) -> str | None:
    """Return the contents of file ``name``, or ``default`` if there is no such file."""
    path = Path(name)
    try:
        is_file = path.is_file()
    except OSError:
        # e.g. ENAMETOOLONG: cannot name a file
        is_file = False
    if not is_file:
        return default

    try:
        return path.read_text()
    except OSError as e:
        raise typer.BadParameter(f"Cannot read {name}: {e}") from e


def _load_shape(shape: str) -> Any:
    """Read a shape description from a JSON file or an inline JSON string."""
    text = shape if shape.lstrip().startswith(("{", "[")) else _read_file(shape, default=shape)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Shape is not valid JSON: {e}") from e


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    text = _read_file(source)
    if text is None:
        raise typer.BadParameter(f"Input file not found: {source}")
    return text


@app.command("describe")
def describe(
    shape: str = typer.Argument(..., help="Shape as a JSON file path or inline JSON"),
) -> None:
    """Show how a shape description is interpreted.

    Examples:
        textshape describe '{"name": "", "age": 0, "tags": [""]}'
    """
    try:
        template = parse_template(_load_shape(shape))
    except SchemaError as e:
        err_console.print(f"[red]✗[/red] Unsupported shape: {escape(str(e))}")
        sys.exit(1)

    console.print_json(render_shape(template))


@app.command("extract")
def extract(
    source: str = typer.Argument(..., help="Input text file, or '-' for stdin"),
    shape: str = typer.Option(
        ..., "--format", "-f", help="Shape as a JSON file path or inline JSON"
    ),
    provider: str | None = typer.Option(
        None, "--provider", "-p", help="Completion provider (claude or gemini)"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Model name override"),
    retries: int | None = typer.Option(
        None, "--retries", min=0, help="Extra attempts after the first (default from config)"
    ),
) -> None:
    """Extract structured JSON from unstructured text.

    Examples:
        textshape extract notes.txt --format '{"name": "", "age": 0}'

        cat email.txt | textshape extract - --format shape.json --provider gemini
    """
    try:
        config = ConfigManager().load_config()
        extraction_config = config.extraction

        updates: dict[str, Any] = {}
        if provider is not None:
            updates["provider"] = provider
        if model is not None:
            updates["model"] = model
        if retries is not None:
            updates["max_retries"] = retries
        if updates:
            extraction_config = extraction_config.model_validate(
                {**extraction_config.model_dump(), **updates}
            )

        data = _read_input(source)
        format_spec = _load_shape(shape)

        orchestrator = ExtractionOrchestrator(
            create_client(extraction_config),
            max_retries=extraction_config.max_retries,
            retry_config=RetryConfig(
                retries=extraction_config.max_retries,
                wait_seconds=extraction_config.retry_wait_seconds,
            ),
        )
        result = asyncio.run(
            orchestrator.extract_request({"data": data, "format": format_spec})
        )
        output = result.unwrap()

    except typer.BadParameter:
        raise
    except APIKeyError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)
    except TextshapeError as e:
        err_console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)
    except ValueError as e:
        err_console.print(f"[red]✗[/red] Invalid option: {escape(str(e))}")
        sys.exit(1)

    console.print_json(json.dumps(output))
    err_console.print(f"[dim]Accepted after {result.attempts} attempt(s)[/dim]")


if __name__ == "__main__":
    app()
