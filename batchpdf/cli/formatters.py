"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from batchpdf.models.config import DownloadConfig
from batchpdf.models.stats import DownloadStats
from batchpdf.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `batchpdf validate` to see the effective settings.",
            "• Run `batchpdf init --force` to write a fresh default file.",
        ],
        "PermissionError": [
            "• The output directory may not be writable.",
            "• Choose another location with --output.",
        ],
        "TimeoutError": [
            "• A request timed out, the server may be slow or unreachable.",
            "• Raise the limit with --timeout.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type,
        [
            "• Run `batchpdf -v run` to see which URL was being processed.",
            "• Files already saved in the output directory are kept and skipped"
            " on the next run.",
        ],
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_validation_table(config: DownloadConfig, config_file: Path | None = None):
    """Displays a summary of the effective settings."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    if config_file is not None:
        source = str(config_file) if config_file.is_file() else "built-in defaults"
        table.add_row("Config File:", f"[dim]{source}[/dim]")
    table.add_row("Input File:", config.input_path)
    table.add_row("Output Directory:", config.output_dir)
    table.add_row("Base Domain:", f"[green]{config.base_domain}[/green]")
    table.add_row("Request Timeout:", format_duration(config.request_timeout))
    table.add_row("Max Workers:", str(config.max_workers))

    console.print(
        Panel(
            table,
            title="[bold green]✓ Validated Settings[/bold green]",
            border_style="green",
        )
    )


def print_summary_panel(stats: DownloadStats, duration_s: float):
    """Displays the final summary of the download session."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("URLs Read:", str(stats.urls_read))
    if stats.duplicates_removed > 0:
        stats_table.add_row(
            "Duplicates Removed:", f"[dim]{stats.duplicates_removed}[/dim]"
        )

    if stats.dry_run:
        stats_table.add_row(
            "→ Would Download:", f"[bold cyan]{stats.would_download}[/bold cyan]"
        )
    else:
        stats_table.add_row(
            "✓ Downloaded:", f"[bold green]{stats.downloaded}[/bold green]"
        )

    skip_sections = []
    if stats.skipped_exists > 0:
        skip_sections.append(f"[yellow]{stats.skipped_exists} (exists)[/yellow]")
    if stats.skipped_invalid > 0:
        skip_sections.append(f"[yellow]{stats.skipped_invalid} (invalid)[/yellow]")
    if skip_sections:
        stats_table.add_row("○ Skipped:", " + ".join(skip_sections))

    if stats.failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.failed}[/bold red]")

    stats_table.add_row("", "")
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if stats.dry_run:
        title = "🔍 [bold]Dry Run Summary[/bold]"
        border_color = "yellow"
    else:
        title = "📄 [bold]Download Complete![/bold]"
        border_color = "green" if stats.failed == 0 else "yellow"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
