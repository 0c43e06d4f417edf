"""Command-line interface for etagcheck."""
import sys
from pathlib import Path
from typing import Optional
import logging

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from etagcheck.config import Config, get_config, set_config
from etagcheck.etag import TagOptions, compute_stream_tag, compute_tag, verify_tag
from etagcheck.exceptions import ETagError
from etagcheck.hashing import infer_block_size, parse_tag


app = typer.Typer(
    name="etagcheck",
    help="Compute and verify multipart object-store ETags",
    no_args_is_help=True,
)
console = Console()


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else getattr(logging, get_config().general.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def compute(
    paths: list[Path] = typer.Argument(..., help="Files to hash ('-' reads stdin)"),
    block_size: Optional[int] = typer.Option(None, "--block-size", "-b", help="Part size in bytes"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Maximum parallel workers"),
    sequential: bool = typer.Option(False, "--sequential", help="Read each file in one ordered pass"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Compute the ETag of one or more files."""
    if config_path:
        set_config(Config.load(config_path))
    setup_logging(verbose)

    options = TagOptions(max_workers=workers, sequential=sequential or None)

    failed = 0
    for path in paths:
        try:
            if str(path) == "-":
                tag = compute_stream_tag(sys.stdin.buffer, block_size)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                    transient=True,
                ) as progress:
                    progress.add_task(f"Hashing {path.name}...", total=None)
                    tag = compute_tag(path, block_size, options)
        except ETagError as e:
            console.print(f"[red]✗ {escape(str(path))}: {escape(str(e))}[/red]")
            failed += 1
            continue
        console.print(f"{tag}  {path}", markup=False, highlight=False, soft_wrap=True)

    if failed:
        raise typer.Exit(2)


@app.command()
def verify(
    path: Path = typer.Argument(..., help="Local file"),
    tag: str = typer.Argument(..., help="Reference ETag"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Maximum parallel workers"),
    sequential: bool = typer.Option(False, "--sequential", help="Read the file in one ordered pass"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Verify a local file against a reference ETag.

    Exit codes: 0 match, 1 mismatch, 2 error.
    """
    if config_path:
        set_config(Config.load(config_path))
    setup_logging(verbose)

    options = TagOptions(max_workers=workers, sequential=sequential or None)
    try:
        matches = verify_tag(path, tag, options)
    except ETagError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(2)

    if matches:
        console.print(f"[green]✓ Match: {escape(str(path))}[/green]")
    else:
        console.print(f"[red]✗ Mismatch: {escape(str(path))}[/red]")
        raise typer.Exit(1)


@app.command()
def infer(
    size: int = typer.Argument(..., help="File size in bytes"),
    tag: str = typer.Argument(..., help="Reference ETag"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Show the block size a reference ETag implies for a file size."""
    if config_path:
        set_config(Config.load(config_path))

    try:
        parsed = parse_tag(tag)
        block_size = infer_block_size(size, parsed, get_config().hashing.min_inferred_block_size)
    except ETagError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(2)

    if not parsed.is_multipart:
        console.print(f"Single part (block size {block_size} bytes)")
    else:
        console.print(f"Block size: {block_size} bytes ({block_size / (1024 * 1024):g} MiB, {parsed.parts} parts)")


@app.command()
def config(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Show current configuration."""
    if config_path:
        set_config(Config.load(config_path))

    cfg = get_config()

    console.print(Panel.fit("[bold]etagcheck Configuration[/bold]"))
    console.print(f"\nLog level: {cfg.general.log_level}")
    console.print(f"\nHash algorithm: {cfg.hashing.algorithm}")
    console.print(f"Default block size: {cfg.hashing.default_block_size}")
    console.print(f"Inference start block size: {cfg.hashing.min_inferred_block_size}")
    console.print(f"Read size: {cfg.hashing.read_size}")
    console.print(f"\nMax workers: {cfg.get_max_workers()}")
    console.print(f"Sequential: {cfg.workers.sequential}")


if __name__ == "__main__":
    app()
