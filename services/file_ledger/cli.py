#!/usr/bin/env python3
"""
File Ledger CLI Tool
Part of the Commit Ledger project

This CLI tool walks a Git repository's history and reports, for every file,
who touched it, which commits changed it, and who created it. Results can be
written to JSON and inspected later without walking history again.
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.progress import Progress, SpinnerColumn, TextColumn

from config.settings import get_settings, export_config
from shared.exceptions import LedgerError
from shared.models import ParseResult
from services.file_ledger.main import FileLedgerService

# Initialize Rich console for output
console = Console()


def configure_logging(verbose: bool = False):
    """Configure the root logger from settings."""
    settings = get_settings()
    level = logging.DEBUG if verbose else getattr(logging, settings.monitoring.log_level)
    logging.basicConfig(level=level, format=settings.monitoring.log_format)
    logging.getLogger().setLevel(level)


def display_result(result: ParseResult, limit: Optional[int] = None):
    """Display a ledger result in a table."""
    if not len(result):
        console.print(Panel("No files matched.", title="📋 File Ledger"))
        return

    table = Table(title="📁 File Ledger", show_header=True, header_style="bold magenta")
    table.add_column("Path", style="cyan")
    table.add_column("Authors", style="yellow")
    table.add_column("Commits", style="green", justify="right")
    table.add_column("Created By", style="blue")

    files = list(result)
    shown = files[:limit] if limit else files
    for commit_file in shown:
        table.add_row(
            commit_file.path,
            ", ".join(commit_file.authors),
            str(len(commit_file.commit_hash)),
            commit_file.create_by or "-"
        )

    console.print(table)
    if len(shown) < len(files):
        console.print(f"[dim]... and {len(files) - len(shown)} more files[/dim]")


def display_error_message(error: str, suggestion: str = ""):
    """Display error message with helpful suggestions."""
    error_text = Text()
    error_text.append("❌ ", style="bold red")
    error_text.append("Error occurred\n\n", style="bold white")
    error_text.append("Error: ", style="red")
    error_text.append(f"{error}\n", style="white")

    if suggestion:
        error_text.append("Suggestion: ", style="yellow")
        error_text.append(suggestion, style="white")

    console.print(Panel(error_text, title="Error", border_style="red"))


@click.group()
@click.version_option(version="1.0.0")
@click.option('--verbose', '-v', is_flag=True, help='Verbose (DEBUG) logging')
def cli(verbose: bool):
    """File Ledger CLI - Per-file authorship from Git history."""
    configure_logging(verbose)


@cli.command()
@click.option('--repo-path', '-p', help='Path to Git repository (default: configured path)')
@click.option('--output', '-o', 'output_file', help='Write the result JSON to this file')
@click.option('--depth', '-d', type=int, help='Maximum number of non-merge commits (0 = all)')
@click.option('--extensions', '-e', help='Comma-separated extensions to include, e.g. "go,py"')
@click.option('--limit', '-l', type=int, default=None, help='Number of files to display')
def parse(
    repo_path: Optional[str],
    output_file: Optional[str],
    depth: Optional[int],
    extensions: Optional[str],
    limit: Optional[int]
):
    """Walk history from HEAD and build the file ledger."""
    service = FileLedgerService()
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True
        ) as progress:
            task = progress.add_task("Walking commit history...", total=None)
            result = service.parse(
                repo_path=repo_path,
                output_file=output_file,
                depth=depth,
                extensions=extensions
            )
            progress.update(task, description="Ledger built")
    except LedgerError as e:
        display_error_message(
            str(e),
            "Check the repository path with --repo-path and the output location"
        )
        sys.exit(1)

    display_result(result, limit)
    output_file = output_file or service.settings.ledger.output_file
    if output_file:
        console.print(f"\n[green]✅ Wrote {len(result)} files to {output_file}[/green]")


@cli.command()
@click.argument('result_file', required=False)
@click.option('--limit', '-l', type=int, default=None, help='Number of files to display')
@click.option('--raw', is_flag=True, help='Print the JSON document instead of a table')
def show(result_file: Optional[str], limit: Optional[int], raw: bool):
    """Display a previously saved ledger result."""
    service = FileLedgerService()
    try:
        result = service.open_result(result_file)
    except LedgerError as e:
        display_error_message(str(e), "Run 'parse --output FILE' first")
        sys.exit(1)

    if raw:
        console.print_json(service.store.dumps(result))
        return
    display_result(result, limit)


@cli.command()
def config():
    """Print the effective configuration."""
    console.print_json(json.dumps(export_config()))


if __name__ == "__main__":
    cli()
