"""
Process entry point: runs the Typer app and turns anything that escapes it
into an error panel and an exit code.
"""

import asyncio
import logging
import sys

import typer
from rich.console import Console

from batchpdf.cli.app import app
from batchpdf.cli.formatters import format_error_with_suggestions
from batchpdf.exceptions import BatchPdfError

log = logging.getLogger("batchpdf")


def main() -> None:
    """Runs the CLI. Per-URL failures never get here; only fatal ones do."""
    console = Console(stderr=True)

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print(
            "\n[yellow]⚠️  Interrupted. Finished PDFs are kept; "
            "nothing partial was written.[/yellow]"
        )
        sys.exit(0)
    except BatchPdfError as e:
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except OSError as e:
        console.print(format_error_with_suggestions(e, {"stage": "filesystem"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"stage": "unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
