"""LiyaoData CLI — entry-point for crawling and browsing tenders.

Usage:
    python cli/main.py --help

Commands:
    crawl    → fetch the tender listing once, show charts and the table
    columns  → list the sortable table columns
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from liyao.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging

import typer

from cli.commands.crawl import columns, crawl

app = typer.Typer(
    name="liyao",
    help="LiyaoData tender crawler client.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


app.command("crawl")(crawl)
app.command("columns")(columns)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
