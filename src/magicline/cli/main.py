"""CLI entry point for magicline.

Invoked as::

    magicline [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m magicline.cli.main

Commands
--------
tokens      Show how argument text is tokenized
parse       Show the parameter map parsed from argument text
run         Execute one magic line through a session
magics      List registered magic commands
diagram     Validate and convert a diagram-metadata document
version     Show version information
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from magicline.config import SessionConfig

console = Console()
err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    """Route ``magicline`` log records to the stderr console at ``level``."""
    logger = logging.getLogger("magicline")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(level.upper())


def _load_config_or_exit(path: str | None) -> "SessionConfig":
    """Load the session configuration, exiting on error."""
    from magicline.config import ConfigError, SessionConfig, load_config

    if path is None:
        return SessionConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


def _read_source(path: str) -> str:
    """Read a source file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="magicline")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level for diagnostic output on stderr.",
)
def cli(log_level: str) -> None:
    """Argument parsing and fail-safe execution for magic commands."""
    _configure_logging(log_level)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from magicline import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]magicline[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# tokens command
# ---------------------------------------------------------------------------


@cli.command(name="tokens")
@click.argument("text")
def tokens_command(text: str) -> None:
    """Show how TEXT is split into argument tokens."""
    from magicline.lexer import tokenize

    tokens = tokenize(text)
    if not tokens:
        console.print("[dim]No tokens.[/dim]")
        return

    table = Table(title="Tokens", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Kind", style="bold", min_width=11)
    table.add_column("Span", min_width=7)
    table.add_column("Text")
    for index, token in enumerate(tokens):
        table.add_row(str(index), token.kind.name, f"{token.start}:{token.end}", repr(token.value))
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("text")
@click.option(
    "--first-param",
    "-p",
    "first_param",
    default="",
    help="Name given to a leading bare token.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
def parse_command(text: str, first_param: str, output_format: str) -> None:
    """Parse TEXT and print the resulting parameter map.

    Values are shown JSON-encoded, exactly as a magic command receives them.

    Examples:

    \b
        magicline parse 'Foo shots=100 verbose' -p operation
        magicline parse '{"shots": 100}' --format yaml
    """
    from magicline.parser import MalformedJsonArgumentError, parse_input_parameters

    try:
        parameters = parse_input_parameters(text, first_param)
    except MalformedJsonArgumentError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if output_format == "json":
        rendered = json.dumps(parameters, indent=2, ensure_ascii=False)
    else:
        rendered = yaml.dump(parameters, default_flow_style=False, allow_unicode=True, sort_keys=False)
    console.out(rendered.rstrip("\n"), highlight=False)


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


@cli.command(name="run")
@click.argument("line")
@click.option("--config", "config_path", default=None, help="Path to a YAML session configuration.")
def run_command(line: str, config_path: str | None) -> None:
    """Execute one magic LINE, such as '%args Foo shots=10'.

    Exits with status 1 when the command reports an error.
    """
    from magicline.channel import ConsoleChannel
    from magicline.session import MagicSession

    config = _load_config_or_exit(config_path)
    if config_path is not None:
        logging.getLogger("magicline").setLevel(config.log_level)

    session = MagicSession(config=config)
    channel = ConsoleChannel(console=console, err_console=err_console)
    result = asyncio.run(session.run_line(line, channel))

    if not result.is_ok:
        sys.exit(1)


# ---------------------------------------------------------------------------
# magics command
# ---------------------------------------------------------------------------


@cli.command(name="magics")
@click.option("--config", "config_path", default=None, help="Path to a YAML session configuration.")
def magics_command(config_path: str | None) -> None:
    """List the magic commands available to a session."""
    from magicline.session import MagicSession

    session = MagicSession(config=_load_config_or_exit(config_path))

    table = Table(title="Magic commands")
    table.add_column("Name", style="bold")
    table.add_column("Summary")
    for magic in session.registry:
        table.add_row(magic.name, magic.documentation.summary)
    console.print(table)


# ---------------------------------------------------------------------------
# diagram command
# ---------------------------------------------------------------------------


@cli.command(name="diagram")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
def diagram_command(file: str, output_format: str) -> None:
    """Validate a diagram-metadata document and print it in canonical form.

    FILE holds JSON, or YAML when its suffix is .yaml or .yml.
    """
    from magicline.diagram import MetadataError, MetadataSerializer

    source = _read_source(file)
    serializer = MetadataSerializer()
    try:
        if Path(file).suffix.lower() in (".yaml", ".yml"):
            records = serializer.from_yaml(source)
        else:
            records = serializer.from_json(source)
    except MetadataError as exc:
        err_console.print(f"[red]Invalid metadata[/red] in {file}: {exc}")
        sys.exit(1)

    if output_format == "json":
        rendered = serializer.to_json(records, indent=2)
    else:
        rendered = serializer.to_yaml(records)
    console.out(rendered.rstrip("\n"), highlight=False)


if __name__ == "__main__":
    cli()
