"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from batchpdf import __version__
from batchpdf.core.download_manager import DownloadManager
from batchpdf.exceptions import BatchPdfError
from batchpdf.models.config import DownloadConfig
from batchpdf.models.stats import DownloadStats
from batchpdf.storage.config_manager import ConfigManager

from .formatters import print_summary_panel, print_validation_table

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("batchpdf")

app = typer.Typer(
    name="batchpdf",
    help=(
        "Download every PDF listed in a text file. Use 'batchpdf <command> --help'"
        " for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "batchpdf"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _config_file(ctx: typer.Context) -> Path:
    return (ctx.obj or {}).get("config_file") or CONFIG_FILE


def _collect_options(**options) -> dict:
    """Keeps only the options that were actually given on the command line."""
    return {key: value for key, value in options.items() if value is not None}


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-v for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    config_file: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help=f"Path to the configuration file (default: {CONFIG_FILE}).",
    ),
):
    """Batch PDF Downloader"""
    if version:
        console.print(f"[bold]batchpdf[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "DEBUG" if verbose >= 1 else "INFO"
    logging.getLogger("batchpdf").setLevel(log_level)

    ctx.obj = {"config_file": config_file}

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command(name="run")
def run_command(
    ctx: typer.Context,
    input_path: str | None = typer.Option(
        None, "-i", "--input", help="Text file with one URL or path per line."
    ),
    output_dir: str | None = typer.Option(
        None, "-o", "--output", help="Directory the PDFs are saved to."
    ),
    base_domain: str | None = typer.Option(
        None,
        "-b",
        "--base-domain",
        help="Scheme and host prepended to relative entries.",
    ),
    request_timeout: float | None = typer.Option(
        None, "-t", "--timeout", help="Per-request timeout in seconds (default 180)."
    ),
    workers: int | None = typer.Option(
        None,
        "-w",
        "--workers",
        help="Number of simultaneous downloads (default 1, sequential).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Resolve and name every URL without downloading anything.",
    ),
):
    """Download every PDF listed in the input file."""
    cli_options = _collect_options(
        input_path=input_path,
        output_dir=output_dir,
        base_domain=base_domain,
        request_timeout=request_timeout,
        max_workers=workers,
    )
    cli_options["dry_run"] = dry_run

    try:
        config = ConfigManager(_config_file(ctx)).load_config(cli_options)
    except BatchPdfError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    if config.dry_run:
        console.print("[bold cyan]📄 Starting dry run session...[/bold cyan]")
    else:
        console.print("[bold cyan]📄 Starting download session...[/bold cyan]")

    try:
        stats, duration = asyncio.run(_download_async(config))
    except BatchPdfError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    print_summary_panel(stats, duration)


async def _download_async(config: DownloadConfig) -> tuple[DownloadStats, float]:
    manager = DownloadManager(config)
    try:
        stats = await manager.execute_downloads()
        return stats, manager.elapsed
    finally:
        await manager.close()


@app.command()
def init(
    ctx: typer.Context,
    input_path: str | None = typer.Option(None, "-i", "--input"),
    output_dir: str | None = typer.Option(None, "-o", "--output"),
    base_domain: str | None = typer.Option(None, "-b", "--base-domain"),
    request_timeout: float | None = typer.Option(None, "-t", "--timeout"),
    workers: int | None = typer.Option(None, "-w", "--workers"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing file without asking."
    ),
):
    """Write a configuration file with defaults and the given options."""
    config_file = _config_file(ctx)
    if (
        config_file.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = _collect_options(
        input_path=input_path,
        output_dir=output_dir,
        base_domain=base_domain,
        request_timeout=request_timeout,
        max_workers=workers,
    )
    try:
        ConfigManager(config_file).save_new_config(settings)
    except BatchPdfError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(
        f"\n[bold green]✓ Configuration saved to '{config_file}'[/bold green]"
    )
    console.print("Ready to download! Try: [cyan]batchpdf run[/cyan]")


@app.command()
def validate(ctx: typer.Context):
    """Validate the current configuration."""
    config_file = _config_file(ctx)
    try:
        config = ConfigManager(config_file).load_config()
        print_validation_table(config, config_file)
    except BatchPdfError as e:
        console.print(f"[red]✗ Configuration is invalid: {e}[/red]")
        raise typer.Exit(code=1) from e
