#!/usr/bin/env python3
"""
Command line interface for modelmux.

    modelmux models                       list the model catalog
    modelmux resolve ID                   show which provider serves ID
    modelmux generate ID PROMPT [--stream] run one call
"""

import asyncio
import logging
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from modelmux.config.llm_factory import ModelFactory
from modelmux.config.model_catalog import list_models
from modelmux.config.providers.registry import build_default_registry
from modelmux.config.settings import get_settings
from modelmux.core.exceptions import ModelMuxError
from modelmux.core.types import CallParams, StreamFinish, TextDelta

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="modelmux",
    help="Resolve model identifiers and run calls through the middleware pipeline",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for every command."""
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=False, show_path=False)],
    )


def _print_error(exc: ModelMuxError) -> None:
    err_console.print(f"[red]❌ {exc}[/red]")
    help_text = exc.details.get("help")
    if help_text:
        err_console.print(f"[dim]{help_text}[/dim]")


@app.command()
def models():
    """List the selectable models."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
    table.add_column("Identifier", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")

    for entry in list_models():
        table.add_row(entry.api_identifier, entry.label, entry.description)

    console.print(table)


@app.command()
def resolve(identifier: str = typer.Argument(..., help="Model identifier")):
    """Show the provider and backend model name for IDENTIFIER (no client is built)."""
    registry = build_default_registry()
    try:
        match = registry.match(identifier)
    except ModelMuxError as exc:
        _print_error(exc)
        raise typer.Exit(1)

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Provider", match.tag.value)
    table.add_row("Model", match.model_name)
    table.add_row("Default provider", "yes" if match.is_default else "no")
    console.print(table)


async def _run_generate(model, params: CallParams) -> None:
    result = await model.generate(params)
    console.print(result.text)
    console.print(
        f"[dim]finish: {result.finish_reason} | tokens: "
        f"{result.usage.input_tokens} in / {result.usage.output_tokens} out[/dim]"
    )


async def _run_stream(model, params: CallParams) -> None:
    async for part in model.stream(params):
        if isinstance(part, TextDelta):
            console.print(part.text, end="", soft_wrap=True, highlight=False)
        elif isinstance(part, StreamFinish):
            console.print()
            console.print(
                f"[dim]finish: {part.finish_reason} | tokens: "
                f"{part.usage.input_tokens} in / {part.usage.output_tokens} out[/dim]"
            )


@app.command()
def generate(
    identifier: str = typer.Argument(..., help="Model identifier"),
    prompt: str = typer.Argument(..., help="User prompt"),
    stream: bool = typer.Option(False, "--stream", "-s", help="Stream the response"),
    system: Optional[str] = typer.Option(None, "--system", help="System prompt"),
    temperature: Optional[float] = typer.Option(None, "--temperature", "-t"),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens"),
):
    """Run PROMPT against the model named by IDENTIFIER."""
    params = CallParams.from_text(
        prompt, system=system, temperature=temperature, max_tokens=max_tokens
    )
    try:
        model = ModelFactory.from_settings(get_settings()).get_model(identifier)
        runner = _run_stream if stream else _run_generate
        asyncio.run(runner(model, params))
    except ModelMuxError as exc:
        _print_error(exc)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
